"""Fixed compatibility check catalog, in three tiers: hard, warning, info."""

from __future__ import annotations

from rigcheck.compatibility.catalog.base import CatalogCheck
from rigcheck.compatibility.catalog.hard import HARD_CHECKS
from rigcheck.compatibility.catalog.info import INFO_CHECKS
from rigcheck.compatibility.catalog.warnings import WARNING_CHECKS, psu_headroom_check
from rigcheck.settings import EngineSettings


def build_catalog(settings: EngineSettings | None = None) -> list[CatalogCheck]:
    """Return every catalog check, hard tier first.

    The PSU headroom check is rebound to the configured threshold and
    baseline overhead.
    """
    settings = settings or EngineSettings()
    warnings = [c for c in WARNING_CHECKS if c.name != "psu_headroom"]
    warnings.append(
        psu_headroom_check(settings.headroom_threshold_pct, settings.baseline_overhead_w)
    )
    return [*HARD_CHECKS, *warnings, *INFO_CHECKS]


__all__ = ["CatalogCheck", "HARD_CHECKS", "INFO_CHECKS", "WARNING_CHECKS", "build_catalog"]
