"""Tests for tier classification and bottleneck analysis."""

from __future__ import annotations

import pytest

from rigcheck.analysis.bottleneck import analyze_bottlenecks, is_ssd
from rigcheck.analysis.tiers import (
    catalog_tier_index,
    cpu_performance_tier,
    gpu_performance_tier,
    normalize_catalog_tier,
    tier_rank,
)


def cpu(cores: int, boost: float = 0) -> dict:
    return {"name": "CPU", "data": {"performance": {"cores": cores, "boost_clock_ghz": boost}}}


def gpu(vram: int, tdp: int = 0) -> dict:
    return {"name": "GPU", "data": {"memory": {"vram_gb": vram}, "power": {"tdp_watts": tdp}}}


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------


class TestTiers:
    @pytest.mark.parametrize(
        ("vram", "tdp", "expected"),
        [
            (24, 0, "enthusiast"),
            (8, 320, "enthusiast"),
            (12, 200, "high"),
            (8, 0, "mid"),
            (4, 160, "mid"),
            (4, 75, "entry"),
            (2, 0, None),
        ],
    )
    def test_gpu_tier(self, vram: int, tdp: int, expected: str | None) -> None:
        assert gpu_performance_tier(gpu(vram, tdp)) == expected

    @pytest.mark.parametrize(
        ("cores", "boost", "expected"),
        [
            (16, 0, "enthusiast"),
            (12, 5.2, "enthusiast"),
            (12, 4.0, "high"),
            (8, 4.6, "high"),
            (8, 4.0, "mid"),
            (6, 4.2, "mid"),
            (6, 3.5, "entry"),
            (2, 3.0, None),
        ],
    )
    def test_cpu_tier(self, cores: int, boost: float, expected: str | None) -> None:
        assert cpu_performance_tier(cpu(cores, boost)) == expected

    def test_tier_rank(self) -> None:
        assert tier_rank("entry") < tier_rank("mid") < tier_rank("high") < tier_rank("enthusiast")

    def test_catalog_labels(self) -> None:
        assert normalize_catalog_tier("  flagship ") == "Flagship"
        assert normalize_catalog_tier("Midrange") == "Mid-range"
        assert normalize_catalog_tier(3) is None
        assert catalog_tier_index("Entry") == 0
        assert catalog_tier_index("Enthusiast") == 4
        assert catalog_tier_index("unknown") is None


# ---------------------------------------------------------------------------
# Bottleneck analysis
# ---------------------------------------------------------------------------


def _types(analysis) -> list[tuple[str, str | None]]:
    return [(i.type, i.component) for i in analysis.insights]


class TestBalance:
    def test_gaming_weak_cpu_strong_gpu(self) -> None:
        analysis = analyze_bottlenecks({"cpu": cpu(4), "gpu": gpu(24)}, "gaming")
        first = analysis.insights[0]
        assert first.type == "bottleneck"
        assert "limit gaming" in first.message
        assert first.severity == "suggestion"

    def test_gaming_strong_cpu_weak_gpu(self) -> None:
        analysis = analyze_bottlenecks({"cpu": cpu(16), "gpu": gpu(4)}, "gaming")
        assert analysis.insights[0].type == "bottleneck"
        assert "more powerful than needed" in analysis.insights[0].message

    def test_gaming_balanced(self) -> None:
        analysis = analyze_bottlenecks({"cpu": cpu(8), "gpu": gpu(12)}, "gaming")
        assert analysis.insights[0].type == "balance"

    def test_productivity_inverts_priority(self) -> None:
        strong_cpu = analyze_bottlenecks({"cpu": cpu(16), "gpu": gpu(4)}, "productivity")
        assert strong_cpu.insights[0].type == "balance"

        weak_cpu = analyze_bottlenecks({"cpu": cpu(4), "gpu": gpu(24)}, "creator")
        assert weak_cpu.insights[0].type == "bottleneck"
        assert "productivity" in weak_cpu.insights[0].message

    def test_unknown_tier_skips_balance(self) -> None:
        analysis = analyze_bottlenecks({"cpu": {"data": {}}, "gpu": gpu(24)}, "gaming")
        assert analysis.insights == []

    def test_balanced_use_case_has_no_balance_advice(self) -> None:
        analysis = analyze_bottlenecks({"cpu": cpu(4), "gpu": gpu(24)})
        assert analysis.insights == []


class TestRamStorageResolution:
    def test_gaming_ram(self) -> None:
        low = analyze_bottlenecks({"ram": {"data": {"size_gb": 8}}}, "gaming")
        assert _types(low) == [("recommendation", "ram")]
        high = analyze_bottlenecks({"ram": {"data": {"size_gb": 32}}}, "gaming")
        assert _types(high) == [("balance", "ram")]
        middle = analyze_bottlenecks({"ram": {"data": {"size_gb": 16}}}, "gaming")
        assert middle.insights == []

    def test_productivity_ram(self) -> None:
        low = analyze_bottlenecks({"ram": {"data": {"size_gb": 16}}}, "productivity")
        assert _types(low) == [("recommendation", "ram")]

    def test_hdd_is_recommendation_never_error(self) -> None:
        analysis = analyze_bottlenecks({"storage": {"data": {"type": "HDD", "interface": "SATA"}}})
        assert _types(analysis) == [("recommendation", "storage")]
        assert analysis.insights[0].severity == "suggestion"

    def test_is_ssd(self) -> None:
        assert is_ssd({"data": {"type": "SSD"}})
        assert is_ssd({"data": {"interface": "NVMe PCIe 4.0"}})
        assert not is_ssd({"data": {"type": "HDD"}})

    def test_4k_needs_high_gpu(self) -> None:
        analysis = analyze_bottlenecks({"gpu": gpu(8)}, "gaming", "4k")
        assert _types(analysis) == [("recommendation", "gpu")]
        assert analyze_bottlenecks({"gpu": gpu(16)}, "gaming", "4k").insights == []

    def test_1440p_flags_entry_gpu(self) -> None:
        assert _types(analyze_bottlenecks({"gpu": gpu(4)}, "gaming", "1440p")) == [("recommendation", "gpu")]
        assert analyze_bottlenecks({"gpu": gpu(8)}, "gaming", "1440p").insights == []

    def test_resolution_ignored_outside_gaming(self) -> None:
        assert analyze_bottlenecks({"gpu": gpu(4)}, "productivity", "4k").insights == []


class TestSummary:
    def test_well_balanced(self) -> None:
        assert analyze_bottlenecks({}).summary.startswith("Your build is well-balanced")

    def test_counts_bottlenecks(self) -> None:
        analysis = analyze_bottlenecks({"cpu": cpu(4), "gpu": gpu(24)}, "gaming")
        assert analysis.summary.startswith("Found 1 potential bottleneck.")

    def test_counts_recommendations(self) -> None:
        parts = {"ram": {"data": {"size_gb": 8}}, "storage": {"data": {"type": "HDD"}}}
        analysis = analyze_bottlenecks(parts, "gaming")
        assert analysis.summary == "Found 2 optimization suggestions to improve your build."
