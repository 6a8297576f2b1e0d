"""Bottleneck analysis — use-case-aware advisory insights.

Insights are suggestions, never compatibility issues: nothing here affects
whether a build can be assembled.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field

from rigcheck.analysis.tiers import cpu_performance_tier, gpu_performance_tier, tier_rank
from rigcheck.models.part import SelectedParts, selected
from rigcheck.specs.accessor import get_number, get_spec_value

logger = logging.getLogger(__name__)

UseCase = Literal["gaming", "productivity", "creator", "balanced"]
TargetResolution = Literal["1080p", "1440p", "4k", "unknown"]

GAMING_RAM_GB = 16
GAMING_RAM_GENEROUS_GB = 32
PRODUCTIVITY_RAM_GB = 32


class BottleneckInsight(BaseModel):
    """One advisory insight."""

    type: Literal["bottleneck", "balance", "recommendation"]
    component: str | None = None
    message: str
    explanation: str
    severity: Literal["info", "suggestion"]


class BottleneckAnalysis(BaseModel):
    insights: list[BottleneckInsight] = Field(default_factory=list)
    summary: str = ""


def _balance_insights(cpu: Any, gpu: Any, use_case: str) -> list[BottleneckInsight]:
    if cpu is None or gpu is None:
        return []
    cpu_tier = cpu_performance_tier(cpu)
    gpu_tier = gpu_performance_tier(gpu)
    if cpu_tier is None or gpu_tier is None:
        logger.debug("Skipping balance analysis: tier unknown (cpu=%s, gpu=%s)",
                     cpu_tier, gpu_tier)
        return []

    # Positive when the CPU sits above the GPU
    diff = tier_rank(cpu_tier) - tier_rank(gpu_tier)

    if use_case == "gaming":
        if diff > 1:
            return [BottleneckInsight(
                type="bottleneck",
                component="cpu",
                message="CPU may be more powerful than needed for gaming with this GPU.",
                explanation=(
                    "In games the GPU does most of the work. A more balanced CPU would "
                    "save money, or the savings could go towards a faster GPU."
                ),
                severity="suggestion",
            )]
        if diff < -1:
            return [BottleneckInsight(
                type="bottleneck",
                component="cpu",
                message="CPU may limit gaming performance with this GPU.",
                explanation=(
                    "The GPU is much stronger than the CPU. In CPU-heavy games or at "
                    "lower resolutions the CPU becomes the limiting factor."
                ),
                severity="suggestion",
            )]
        return [BottleneckInsight(
            type="balance",
            message="CPU and GPU are well-balanced for gaming.",
            explanation="Neither component is significantly underused in games.",
            severity="info",
        )]

    if use_case in ("productivity", "creator"):
        if diff < -1:
            return [BottleneckInsight(
                type="bottleneck",
                component="cpu",
                message="CPU may limit productivity performance.",
                explanation=(
                    "Rendering, compiling and data processing lean on the CPU, which "
                    "is much weaker than the GPU in this build."
                ),
                severity="suggestion",
            )]
        if diff > 1:
            return [BottleneckInsight(
                type="balance",
                message="CPU is well-suited for productivity workloads.",
                explanation="A CPU-heavy build suits workloads where the CPU matters most.",
                severity="info",
            )]
        return [BottleneckInsight(
            type="balance",
            message="CPU and GPU are well-balanced for productivity.",
            explanation="The components are well matched for productivity and creator work.",
            severity="info",
        )]

    return []


def _ram_insights(ram: Any, use_case: str) -> list[BottleneckInsight]:
    if ram is None:
        return []
    size = get_number(ram, "size_gb") or 0

    if use_case == "gaming":
        if size < GAMING_RAM_GB:
            return [BottleneckInsight(
                type="recommendation",
                component="ram",
                message=f"{GAMING_RAM_GB}GB+ RAM recommended for modern gaming.",
                explanation=(
                    "8GB runs some games, but 16GB avoids stutter in modern titles."
                ),
                severity="suggestion",
            )]
        if size >= GAMING_RAM_GENEROUS_GB:
            return [BottleneckInsight(
                type="balance",
                component="ram",
                message=f"{GAMING_RAM_GENEROUS_GB}GB+ RAM provides excellent headroom.",
                explanation="Plenty of memory for multitasking while gaming.",
                severity="info",
            )]
        return []

    if use_case in ("productivity", "creator"):
        if size < PRODUCTIVITY_RAM_GB:
            return [BottleneckInsight(
                type="recommendation",
                component="ram",
                message=(
                    f"{PRODUCTIVITY_RAM_GB}GB+ RAM recommended for productivity and "
                    "creator workloads."
                ),
                explanation=(
                    "Video editing, 3D rendering and large datasets benefit from more "
                    "memory; 64GB suits heavy workloads."
                ),
                severity="suggestion",
            )]
        return [BottleneckInsight(
            type="balance",
            component="ram",
            message="RAM capacity is well-suited for productivity workloads.",
            explanation="Memory capacity supports productivity and creator work.",
            severity="info",
        )]

    return []


def is_ssd(storage: Any) -> bool:
    """True when the drive's type or interface marks it as solid-state."""
    kind = str(get_spec_value(storage, "type") or "").lower()
    interface = str(get_spec_value(storage, "interface") or "").lower()
    return "ssd" in kind or "nvme" in kind or "nvme" in interface or "ssd" in interface


def _storage_insights(storage: Any) -> list[BottleneckInsight]:
    if storage is None:
        return []
    if not is_ssd(storage):
        return [BottleneckInsight(
            type="recommendation",
            component="storage",
            message="SSD recommended for better system responsiveness.",
            explanation=(
                "Solid-state drives boot and load applications far faster than hard "
                "drives. Consider an SSD for the system drive."
            ),
            severity="suggestion",
        )]
    return [BottleneckInsight(
        type="balance",
        component="storage",
        message="SSD storage provides excellent performance.",
        explanation="Fast boot times and quick application loading.",
        severity="info",
    )]


def _resolution_insights(gpu: Any, resolution: str) -> list[BottleneckInsight]:
    if gpu is None or resolution == "unknown":
        return []
    tier = gpu_performance_tier(gpu)

    if resolution == "4k" and tier not in ("high", "enthusiast"):
        return [BottleneckInsight(
            type="recommendation",
            component="gpu",
            message="High-end GPU recommended for 4K gaming.",
            explanation=(
                "4K needs a lot of GPU power; this card may struggle to hold smooth "
                "frame rates."
            ),
            severity="suggestion",
        )]
    if resolution == "1440p" and tier == "entry":
        return [BottleneckInsight(
            type="recommendation",
            component="gpu",
            message="Mid-range or better GPU recommended for 1440p gaming.",
            explanation=(
                "Expect to lower settings in demanding titles at 1440p with this card."
            ),
            severity="suggestion",
        )]
    return []


def _summarise(insights: list[BottleneckInsight]) -> str:
    bottlenecks = sum(1 for i in insights if i.type == "bottleneck")
    recommendations = sum(1 for i in insights if i.type == "recommendation")
    if bottlenecks:
        plural = "s" if bottlenecks > 1 else ""
        return (
            f"Found {bottlenecks} potential bottleneck{plural}. "
            "Review the insights below for optimization opportunities."
        )
    if recommendations:
        plural = "s" if recommendations > 1 else ""
        return f"Found {recommendations} optimization suggestion{plural} to improve your build."
    return (
        "Your build is well-balanced. No significant bottlenecks or "
        "recommendations at this time."
    )


def analyze_bottlenecks(
    parts: SelectedParts,
    use_case: UseCase = "balanced",
    target_resolution: TargetResolution = "unknown",
) -> BottleneckAnalysis:
    """Produce advisory insights for the selected parts.

    Parameters
    ----------
    parts:
        Selected parts by category.
    use_case:
        ``gaming`` weighs the GPU, ``productivity``/``creator`` weigh the CPU.
        ``balanced`` skips use-case-specific balance and RAM advice.
    target_resolution:
        Only consulted for gaming.

    Returns
    -------
    BottleneckAnalysis
    """
    cpu = selected(parts, "cpu")
    gpu = selected(parts, "gpu")

    insights: list[BottleneckInsight] = []
    insights.extend(_balance_insights(cpu, gpu, use_case))
    insights.extend(_ram_insights(selected(parts, "ram"), use_case))
    insights.extend(_storage_insights(selected(parts, "storage")))
    if use_case == "gaming":
        insights.extend(_resolution_insights(gpu, target_resolution))

    return BottleneckAnalysis(insights=insights, summary=_summarise(insights))
