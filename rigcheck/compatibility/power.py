"""System power estimate shared by the headroom check, health analysis and reports."""

from __future__ import annotations

import logging
import math

from pydantic import BaseModel, Field

from rigcheck.config import BASELINE_OVERHEAD_W, DEFAULT_CPU_TDP_W, DEFAULT_GPU_TDP_W
from rigcheck.models.part import SelectedParts, selected
from rigcheck.specs.accessor import get_number

logger = logging.getLogger(__name__)


class PowerEstimate(BaseModel):
    """Estimated draw versus PSU capacity, in watts."""

    estimated: float
    psu_wattage: float
    headroom: float
    """PSU wattage minus estimated draw (negative when undersized)."""

    headroom_percent: float | None = None
    """Headroom relative to the estimated draw; None when nothing draws power."""

    sufficient: bool
    cpu_tdp: float = 0
    gpu_tdp: float = 0
    baseline_overhead: float = BASELINE_OVERHEAD_W
    assumed: list[str] = Field(default_factory=list)
    """Categories whose TDP was missing and replaced by a default."""


def _tdp(parts: SelectedParts, category: str, default: float, assumed: list[str]) -> float:
    part = selected(parts, category)
    if part is None:
        return 0
    tdp = get_number(part, "tdp_watts", "tdp_w")
    if tdp is None or tdp <= 0:
        assumed.append(category)
        return default
    return tdp


def estimate_power_requirements(
    parts: SelectedParts,
    baseline_overhead_w: float = BASELINE_OVERHEAD_W,
) -> PowerEstimate:
    """Estimate system draw as CPU TDP + GPU TDP + baseline overhead.

    Parameters
    ----------
    parts:
        Selected parts by category.
    baseline_overhead_w:
        Draw attributed to motherboard, RAM, storage and fans.

    Returns
    -------
    PowerEstimate
        ``sufficient`` is True only when a PSU wattage is known and covers
        the estimate (zero headroom is sufficient).
    """
    assumed: list[str] = []
    cpu_tdp = _tdp(parts, "cpu", DEFAULT_CPU_TDP_W, assumed)
    gpu_tdp = _tdp(parts, "gpu", DEFAULT_GPU_TDP_W, assumed)
    psu_wattage = get_number(selected(parts, "psu"), "wattage") or 0

    estimated = cpu_tdp + gpu_tdp + baseline_overhead_w
    headroom = psu_wattage - estimated
    headroom_percent = headroom / estimated * 100 if estimated > 0 else None

    if assumed:
        logger.debug("Assumed default TDP for %s", ", ".join(assumed))

    return PowerEstimate(
        estimated=estimated,
        psu_wattage=psu_wattage,
        headroom=headroom,
        headroom_percent=headroom_percent,
        sufficient=psu_wattage > 0 and headroom >= 0,
        cpu_tdp=cpu_tdp,
        gpu_tdp=gpu_tdp,
        baseline_overhead=baseline_overhead_w,
        assumed=assumed,
    )


def recommended_psu_wattage(estimated: float, margin: float = 1.4) -> int:
    """Round ``estimated * margin`` up to the next 50 W step."""
    return math.ceil(estimated * margin / 50) * 50
