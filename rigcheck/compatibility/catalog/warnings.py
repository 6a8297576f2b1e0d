"""Performance and limitation warnings: builds that work, but not as well as they could."""

from __future__ import annotations

import functools
from typing import Any

from rigcheck.analysis.tiers import catalog_tier_index, normalize_catalog_tier
from rigcheck.compatibility.catalog.base import CatalogCheck, make_issue, watts
from rigcheck.compatibility.power import estimate_power_requirements, recommended_psu_wattage
from rigcheck.compatibility.rules import ExtendedCompatibilityIssue
from rigcheck.config import BASELINE_OVERHEAD_W, DEFAULT_HEADROOM_THRESHOLD_PCT
from rigcheck.models.part import SelectedParts, selected
from rigcheck.specs.accessor import format_number, get_number, get_spec_value, parse_generation, part_name

# Tier gap at which a CPU/GPU pairing is flagged
BOTTLENECK_TIER_GAP = 2
# Cooler rating above this multiple of CPU TDP is over-specified
COOLER_OVERSPEC_RATIO = 1.5


def check_ram_downclock(ram: Any, motherboard: Any) -> ExtendedCompatibilityIssue | None:
    """RAM rated above the board's maximum runs at the board's maximum."""
    speed = get_number(ram, "ram_speed_mhz")
    max_speed = get_number(motherboard, "max_ram_speed_mhz")
    if not speed or not max_speed or speed <= max_speed:
        return None

    speed_s, max_s = format_number(speed), format_number(max_speed)
    return make_issue(
        tier="warning",
        severity="warning",
        type="RAM Speed Downclocked",
        message=f"RAM {speed_s}MHz will be downclocked to {max_s}MHz (max supported)",
        explanation=(
            f"The motherboard supports up to {max_s}MHz, so the RAM will run at that "
            f"speed instead of its rated {speed_s}MHz."
        ),
        recommendation=(
            "RAM is backward compatible and the impact is small for most workloads."
        ),
        fix=(
            f"Option 1: Select RAM rated for {max_s}MHz. "
            "Option 2: Choose a motherboard that supports faster RAM."
        ),
        affected=["ram", "motherboard"],
        parts_involved=[part_name(ram, "Your RAM"), part_name(motherboard, "Your motherboard")],
        spec_keys=["ram_speed_mhz", "max_ram_speed_mhz"],
        severity_explanation="Performance impact is typically under 5% for most workloads.",
    )


def check_psu_headroom(
    parts: SelectedParts,
    threshold_pct: float = DEFAULT_HEADROOM_THRESHOLD_PCT,
    baseline_overhead_w: float = BASELINE_OVERHEAD_W,
) -> ExtendedCompatibilityIssue | None:
    """Compare PSU wattage with the estimated draw.

    Negative headroom is an error; headroom below *threshold_pct* percent of
    the estimate is a warning.  Skipped when the wattage or a selected part's
    TDP is unknown.
    """
    psu = selected(parts, "psu")
    if psu is None or not get_number(psu, "wattage"):
        return None

    power = estimate_power_requirements(parts, baseline_overhead_w)
    if power.assumed:
        return None

    psu_name = part_name(psu, "Your PSU")
    affected = [c for c in ("psu", "cpu", "gpu") if selected(parts, c) is not None]
    parts_involved = [part_name(selected(parts, c), c.upper()) for c in affected]
    spec_keys = ["wattage", "tdp_watts"]
    breakdown = (
        f"CPU {watts(power.cpu_tdp)} + GPU {watts(power.gpu_tdp)} + "
        f"base {watts(power.baseline_overhead)}"
    )

    if power.headroom < 0:
        return make_issue(
            tier="warning",
            severity="error",
            type="Insufficient PSU Wattage",
            message=(
                f"PSU ({watts(power.psu_wattage)}) insufficient for estimated draw "
                f"({watts(power.estimated)})"
            ),
            explanation=(
                f"Estimated system draw is {watts(power.estimated)} ({breakdown}), "
                f"which exceeds what {psu_name} can deliver."
            ),
            recommendation=(
                "An undersized PSU causes crashes under load and can damage components."
            ),
            fix=(
                f"Select a PSU with at least {watts(power.estimated + baseline_overhead_w)} "
                f"(recommended: {recommended_psu_wattage(power.estimated, 1.35)}W)."
            ),
            affected=affected,
            parts_involved=parts_involved,
            spec_keys=spec_keys,
            severity_explanation="No headroom: the system will be unstable or fail to boot.",
        )

    percent = power.headroom_percent
    if percent is not None and percent < threshold_pct:
        return make_issue(
            tier="warning",
            severity="warning",
            type="Low PSU Headroom",
            message=(
                f"PSU headroom is {round(percent)}% "
                f"(recommended: {format_number(threshold_pct)}%+)"
            ),
            explanation=(
                f"Estimated system draw: {watts(power.estimated)} ({breakdown}). "
                f"The PSU has only {watts(power.headroom)} of headroom."
            ),
            recommendation=(
                "PSUs run most efficiently at 50-80% load. Low headroom reduces "
                "efficiency and lifespan."
            ),
            fix=(
                f"Select a PSU with at least {recommended_psu_wattage(power.estimated)}W "
                "(about 40% headroom)."
            ),
            affected=affected,
            parts_involved=parts_involved,
            spec_keys=spec_keys,
            severity_explanation=(
                "Low headroom can cause instability under sustained heavy load."
            ),
        )

    return None


def check_bottleneck_risk(cpu: Any, gpu: Any) -> ExtendedCompatibilityIssue | None:
    """Flag CPU/GPU catalog tiers two or more steps apart."""
    cpu_idx = catalog_tier_index(get_spec_value(cpu, "cpu_tier"))
    gpu_idx = catalog_tier_index(get_spec_value(gpu, "gpu_tier"))
    if cpu_idx is None or gpu_idx is None:
        return None
    if abs(gpu_idx - cpu_idx) < BOTTLENECK_TIER_GAP:
        return None

    cpu_tier = normalize_catalog_tier(get_spec_value(cpu, "cpu_tier"))
    gpu_tier = normalize_catalog_tier(get_spec_value(gpu, "gpu_tier"))
    names = [part_name(cpu, "Your CPU"), part_name(gpu, "Your GPU")]

    if gpu_idx > cpu_idx:
        return make_issue(
            tier="warning",
            severity="warning",
            type="GPU Bottleneck Risk",
            message=f"CPU tier ({cpu_tier}) may bottleneck GPU tier ({gpu_tier})",
            explanation=(
                "The CPU is much weaker than the GPU. In many games the CPU becomes "
                "the limiting factor and the GPU cannot reach full performance."
            ),
            recommendation=(
                "A common budget trade-off, but consider a stronger CPU for "
                "competitive gaming."
            ),
            fix="Select a CPU closer to the GPU's tier, or a less powerful GPU.",
            affected=["cpu", "gpu"],
            parts_involved=names,
            spec_keys=["cpu_tier", "gpu_tier"],
            severity_explanation="A CPU bottleneck lowers GPU utilisation and frame rates.",
        )

    return make_issue(
        tier="warning",
        severity="info",
        type="GPU Underpowered",
        message=f"GPU tier ({gpu_tier}) is significantly weaker than CPU tier ({cpu_tier})",
        explanation=(
            "The GPU is much weaker than the CPU, so the CPU will wait on the GPU "
            "to finish rendering frames."
        ),
        recommendation=(
            "Reasonable for productivity builds; gaming performance will be GPU-limited."
        ),
        fix="If gaming matters, select a stronger GPU closer to the CPU's tier.",
        affected=["cpu", "gpu"],
        parts_involved=names,
        spec_keys=["cpu_tier", "gpu_tier"],
        severity_explanation="The GPU is fully used; peak gaming performance is limited.",
    )


def check_cooler_tdp(cpu: Any, cooler: Any) -> ExtendedCompatibilityIssue | None:
    """Cooler rating below CPU TDP warns; far above it is an info note."""
    cpu_tdp = get_number(cpu, "tdp_watts", "tdp_w")
    rating = get_number(cooler, "tdp_rating_watts")
    if not cpu_tdp or not rating:
        return None

    names = [part_name(cpu, "Your CPU"), part_name(cooler, "Your cooler")]
    spec_keys = ["tdp_watts", "tdp_rating_watts"]

    if cpu_tdp > rating:
        return make_issue(
            tier="warning",
            severity="warning",
            type="Cooler Underpowered for CPU",
            message=(
                f"Cooler rated for {watts(rating)}, but CPU TDP is {watts(cpu_tdp)} "
                f"(+{watts(cpu_tdp - rating)})"
            ),
            explanation=(
                "The cooler's rating is below the CPU's power draw and may not keep "
                "up under sustained load."
            ),
            recommendation="Expect throttling and fan noise under heavy workloads.",
            fix=f"Select a cooler rated for at least {watts(cpu_tdp + 20)}.",
            affected=["cpu", "cooler"],
            parts_involved=names,
            spec_keys=spec_keys,
            severity_explanation="Inadequate cooling causes thermal throttling.",
        )

    if rating > cpu_tdp * COOLER_OVERSPEC_RATIO:
        return make_issue(
            tier="warning",
            severity="info",
            type="Cooler Over-specified",
            message=(
                f"Cooler rated for {watts(rating)} is significantly more than "
                f"CPU TDP ({watts(cpu_tdp)})"
            ),
            explanation=(
                "The cooler has far more capacity than this CPU needs. Cooling will be "
                "excellent, but a smaller cooler would cost less."
            ),
            recommendation="Worth keeping only if a hotter CPU upgrade is planned.",
            fix=(
                f"For cost optimisation, select a cooler rated between {watts(cpu_tdp)} "
                f"and {watts(cpu_tdp + 50)}."
            ),
            affected=["cpu", "cooler"],
            parts_involved=names,
            spec_keys=spec_keys,
            severity_explanation="No performance issue, only extra cost.",
        )

    return None


def board_pcie_generation(motherboard: Any) -> int | None:
    """The board's GPU-slot PCIe generation, falling back to its slot list."""
    gen = parse_generation(get_spec_value(motherboard, "pcie_generation"))
    if gen is None:
        gen = parse_generation(get_spec_value(motherboard, "pcie_gen_slots"))
    return gen


def check_pcie_mismatch(gpu: Any, motherboard: Any) -> ExtendedCompatibilityIssue | None:
    """A GPU newer than the board's slot runs at reduced link bandwidth."""
    gpu_gen = parse_generation(get_spec_value(gpu, "pcie_generation"))
    mb_gen = board_pcie_generation(motherboard)
    if not gpu_gen or not mb_gen or gpu_gen <= mb_gen:
        return None

    reduction = round((gpu_gen - mb_gen) / gpu_gen * 100)
    return make_issue(
        tier="warning",
        severity="warning",
        type="PCIe Generation Mismatch",
        message=(
            f"GPU (PCIe {gpu_gen}.0) running on older motherboard slot (PCIe {mb_gen}.0)"
        ),
        explanation=(
            f"The GPU supports PCIe {gpu_gen}.0 but the slot is PCIe {mb_gen}.0, so the "
            f"link runs with roughly {reduction}% less bandwidth."
        ),
        recommendation=(
            "Backward compatibility keeps it working; real-world gaming impact is "
            "usually under 5%."
        ),
        fix=(
            f"For maximum performance choose a motherboard with PCIe {gpu_gen}.0, "
            "otherwise no change is needed."
        ),
        affected=["gpu", "motherboard"],
        parts_involved=[part_name(gpu, "Your GPU"), part_name(motherboard, "Your motherboard")],
        spec_keys=["pcie_generation"],
        severity_explanation="Bandwidth is reduced; real-world impact is usually small.",
    )


def psu_headroom_check(
    threshold_pct: float = DEFAULT_HEADROOM_THRESHOLD_PCT,
    baseline_overhead_w: float = BASELINE_OVERHEAD_W,
) -> CatalogCheck:
    """Build the headroom check bound to the configured threshold and overhead."""
    return CatalogCheck(
        "psu_headroom",
        "warning",
        ("psu",),
        functools.partial(
            check_psu_headroom,
            threshold_pct=threshold_pct,
            baseline_overhead_w=baseline_overhead_w,
        ),
        "PSU wattage covers the estimated draw with headroom",
        whole_build=True,
    )


WARNING_CHECKS: tuple[CatalogCheck, ...] = (
    CatalogCheck("ram_downclock", "warning", ("ram", "motherboard"), check_ram_downclock,
                 "RAM speed within the motherboard's maximum"),
    CatalogCheck("bottleneck_risk", "warning", ("cpu", "gpu"), check_bottleneck_risk,
                 "CPU and GPU tiers are within one step"),
    CatalogCheck("cooler_tdp", "warning", ("cpu", "cooler"), check_cooler_tdp,
                 "Cooler rating suits the CPU's TDP"),
    CatalogCheck("pcie_mismatch", "warning", ("gpu", "motherboard"), check_pcie_mismatch,
                 "GPU PCIe generation supported by the slot"),
    psu_headroom_check(),
)
