"""Build health — four rated categories rolled into one overall rating."""

from __future__ import annotations

import logging
import math
from typing import Literal

from pydantic import BaseModel, Field

from rigcheck.compatibility.engine import evaluate_advanced_compatibility
from rigcheck.compatibility.power import PowerEstimate, estimate_power_requirements
from rigcheck.models.part import SelectedParts, selected
from rigcheck.settings import EngineSettings
from rigcheck.specs.accessor import get_number, get_spec_value

logger = logging.getLogger(__name__)

HealthRating = Literal["excellent", "good", "acceptable", "needs_attention"]

GENEROUS_PSU_HEADROOM_W = 200
LIMITED_PSU_HEADROOM_W = 100
GENEROUS_GPU_CLEARANCE_MM = 360
TIGHT_GPU_CLEARANCE_MM = 300
GOOD_HEADROOM_PCT = 50

_SUMMARIES: dict[str, str] = {
    "excellent": "Your build looks excellent! All components are well-matched and compatible.",
    "good": "Your build is in good shape. Minor optimizations could improve it further.",
    "acceptable": "Your build will work, but there are some areas that could be improved.",
    "needs_attention": "Your build needs attention. Please review the issues below.",
}


class HealthCategory(BaseModel):
    """One rated aspect of a build."""

    name: str
    rating: HealthRating
    explanation: str
    details: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class BuildHealthResult(BaseModel):
    overall: HealthRating
    categories: list[HealthCategory] = Field(default_factory=list)
    summary: str = ""


def _compatibility(parts: SelectedParts, settings: EngineSettings) -> HealthCategory:
    issues = evaluate_advanced_compatibility(parts, settings=settings)
    errors = [i.message for i in issues if i.severity == "error"]
    warnings = [i.message for i in issues if i.severity == "warning"]

    if errors:
        return HealthCategory(
            name="Compatibility",
            rating="needs_attention",
            explanation="There are compatibility issues that will prevent this build from working.",
            details=errors + warnings,
            recommendations=["Review compatibility issues and select matching components."],
        )
    if warnings:
        return HealthCategory(
            name="Compatibility",
            rating="acceptable",
            explanation="Some components may not work optimally together.",
            details=warnings,
            recommendations=["Consider adjusting components for better compatibility."],
        )
    return HealthCategory(
        name="Compatibility",
        rating="excellent",
        explanation="All selected components are compatible with each other.",
    )


def _power(power: PowerEstimate, threshold_pct: float) -> HealthCategory:
    if power.psu_wattage <= 0:
        return HealthCategory(
            name="Power Supply",
            rating="needs_attention",
            explanation="No power supply selected.",
            details=["A power supply is required for the build."],
            recommendations=["Select a power supply with adequate wattage for your components."],
        )

    pct = power.headroom_percent or 0
    details = [
        f"Estimated load: {power.estimated:.0f}W",
        f"PSU capacity: {power.psu_wattage:.0f}W",
        f"Headroom: {power.headroom:.0f}W ({round(pct)}%)",
    ]
    if power.assumed:
        details.append(f"Assumed default TDP for: {', '.join(power.assumed)}")

    if power.headroom < 0:
        minimum = math.ceil(power.estimated / 50) * 50
        return HealthCategory(
            name="Power Supply",
            rating="needs_attention",
            explanation=(
                f"The power supply ({power.psu_wattage:.0f}W) is insufficient for the "
                f"estimated load ({power.estimated:.0f}W)."
            ),
            details=details,
            recommendations=[f"Select a PSU with at least {minimum}W."],
        )
    if pct < threshold_pct:
        return HealthCategory(
            name="Power Supply",
            rating="acceptable",
            explanation=f"Power supply provides minimal headroom ({round(pct)}%).",
            details=details,
            recommendations=["Consider a higher wattage PSU for better stability and future upgrades."],
        )
    if pct < GOOD_HEADROOM_PCT:
        return HealthCategory(
            name="Power Supply",
            rating="good",
            explanation=f"Power supply provides adequate headroom ({round(pct)}%).",
            details=details,
        )
    return HealthCategory(
        name="Power Supply",
        rating="excellent",
        explanation=f"Power supply provides excellent headroom ({round(pct)}%).",
        details=details,
    )


def _performance_balance(parts: SelectedParts) -> HealthCategory:
    cpu = selected(parts, "cpu")
    gpu = selected(parts, "gpu")
    if cpu is None or gpu is None:
        return HealthCategory(
            name="Performance Balance",
            rating="needs_attention",
            explanation="Missing core components for performance analysis.",
            details=["CPU and GPU are required for performance evaluation."],
            recommendations=["Select both CPU and GPU to evaluate performance balance."],
        )

    cores = get_number(cpu, "cores") or 0
    vram = get_number(gpu, "vram_gb") or 0
    ram_size = get_number(selected(parts, "ram"), "size_gb") or 0

    details: list[str] = []
    recommendations: list[str] = []
    rating: HealthRating = "good"

    if cores >= 8 and vram < 8:
        details.append("CPU may be underutilized with lower-end GPU.")
        recommendations.append("Consider a more powerful GPU or a more budget-friendly CPU.")
        rating = "acceptable"
    elif cores < 6 and vram >= 12:
        details.append("GPU may be bottlenecked by CPU in CPU-intensive tasks.")
        recommendations.append("Consider a CPU with more cores for better GPU utilization.")
        rating = "acceptable"

    if ram_size < 16:
        details.append("16GB+ RAM recommended for modern workloads.")
        recommendations.append("Consider upgrading to 16GB or more RAM.")
        rating = "acceptable"
    elif ram_size >= 32:
        details.append("32GB+ RAM provides excellent headroom for multitasking.")

    return HealthCategory(
        name="Performance Balance",
        rating=rating,
        explanation=(
            "Components are well-balanced for their performance tiers."
            if rating == "good"
            else "Some components may not be optimally matched."
        ),
        details=details,
        recommendations=recommendations,
    )


def _upgrade_flexibility(parts: SelectedParts, power: PowerEstimate) -> HealthCategory:
    details: list[str] = []
    rating: HealthRating = "good"

    socket = get_spec_value(selected(parts, "cpu"), "socket")
    board_socket = get_spec_value(selected(parts, "motherboard"), "socket")
    if socket and board_socket and str(socket).upper() == str(board_socket).upper():
        details.append(f"Socket match ({socket}) allows future CPU upgrades within the same platform.")

    if power.psu_wattage > 0:
        if power.headroom >= GENEROUS_PSU_HEADROOM_W:
            details.append("Generous PSU headroom supports future GPU upgrades.")
        elif 0 <= power.headroom < LIMITED_PSU_HEADROOM_W:
            details.append("Limited PSU headroom may require PSU upgrade for future GPU upgrades.")
            rating = "acceptable"

    clearance = get_number(selected(parts, "case"), "gpu_max_length_mm")
    if clearance:
        if clearance >= GENEROUS_GPU_CLEARANCE_MM:
            details.append("Generous case clearance supports most GPU upgrades.")
        elif clearance < TIGHT_GPU_CLEARANCE_MM:
            details.append("Tight case clearance may limit future GPU upgrade options.")
            rating = "acceptable"

    return HealthCategory(
        name="Upgrade Flexibility",
        rating=rating,
        explanation=(
            "Build has good flexibility for future upgrades."
            if rating == "good"
            else "Some components may limit future upgrade options."
        ),
        details=details,
    )


def overall_rating(categories: list[HealthCategory]) -> HealthRating:
    """Worst rating present; all-excellent stays excellent."""
    if not categories:
        return "needs_attention"
    ratings = [c.rating for c in categories]
    if "needs_attention" in ratings:
        return "needs_attention"
    if "acceptable" in ratings:
        return "acceptable"
    if all(r == "excellent" for r in ratings):
        return "excellent"
    return "good"


def analyze_build_health(
    parts: SelectedParts,
    settings: EngineSettings | None = None,
) -> BuildHealthResult:
    """Rate compatibility, power, performance balance and upgrade flexibility.

    Parameters
    ----------
    parts:
        Selected parts by category.
    settings:
        Supplies the headroom threshold and baseline overhead; defaults apply
        when omitted.

    Returns
    -------
    BuildHealthResult
    """
    settings = settings or EngineSettings()
    power = estimate_power_requirements(parts, settings.baseline_overhead_w)

    categories = [
        _compatibility(parts, settings),
        _power(power, settings.headroom_threshold_pct),
        _performance_balance(parts),
        _upgrade_flexibility(parts, power),
    ]
    overall = overall_rating(categories)
    logger.debug(
        "Build health %s (%s)",
        overall,
        ", ".join(f"{c.name}={c.rating}" for c in categories),
    )
    return BuildHealthResult(overall=overall, categories=categories, summary=_SUMMARIES[overall])
