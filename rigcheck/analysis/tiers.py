"""Tier classifiers.

Two independent scales live here:

* catalog tiers, the ``cpu_tier`` / ``gpu_tier`` labels stored on parts
  (Entry < Budget < Mid-range < High-end < Flagship), used by the
  bottleneck-risk catalog check;
* derived tiers (entry < mid < high < enthusiast) computed from raw specs,
  used by the bottleneck and health heuristics.

Thresholds are approximate by nature; tune them here only.
"""

from __future__ import annotations

from typing import Any, Literal

from rigcheck.config import TIER_SCALE
from rigcheck.specs.accessor import get_number

PerformanceTier = Literal["entry", "mid", "high", "enthusiast"]

DERIVED_TIERS: tuple[PerformanceTier, ...] = ("entry", "mid", "high", "enthusiast")

_CATALOG_ALIASES = {
    "enthusiast": "Flagship",
    "mid": "Mid-range",
    "midrange": "Mid-range",
    "mid range": "Mid-range",
    "highend": "High-end",
    "high end": "High-end",
}
_CATALOG_LOOKUP = {label.lower(): label for label in TIER_SCALE}


def normalize_catalog_tier(label: Any) -> str | None:
    """Map a catalog tier label onto :data:`~rigcheck.config.TIER_SCALE`."""
    if not isinstance(label, str):
        return None
    key = label.strip().lower()
    return _CATALOG_LOOKUP.get(key) or _CATALOG_ALIASES.get(key)


def catalog_tier_index(label: Any) -> int | None:
    """Position of *label* on the catalog tier scale, or None if unrecognised."""
    tier = normalize_catalog_tier(label)
    return None if tier is None else TIER_SCALE.index(tier)


def gpu_performance_tier(gpu: Any) -> PerformanceTier | None:
    """Classify a GPU by VRAM and TDP bands."""
    vram = get_number(gpu, "vram_gb") or 0
    tdp = get_number(gpu, "tdp_watts", "tdp_w") or 0
    if vram >= 16 or tdp >= 300:
        return "enthusiast"
    if vram >= 12 or tdp >= 250:
        return "high"
    if vram >= 8 or tdp >= 150:
        return "mid"
    if vram >= 4:
        return "entry"
    return None


def cpu_performance_tier(cpu: Any) -> PerformanceTier | None:
    """Classify a CPU by core count and boost clock bands."""
    cores = get_number(cpu, "cores") or 0
    boost = get_number(cpu, "boost_clock_ghz") or 0
    if cores >= 16 or (cores >= 12 and boost >= 5.0):
        return "enthusiast"
    if cores >= 12 or (cores >= 8 and boost >= 4.5):
        return "high"
    if cores >= 8 or (cores >= 6 and boost >= 4.0):
        return "mid"
    if cores >= 4:
        return "entry"
    return None


def tier_rank(tier: PerformanceTier) -> int:
    return DERIVED_TIERS.index(tier)
