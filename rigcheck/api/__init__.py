"""Python API wrapper.

The :class:`RigCheck` facade is the single entry point for build checks,
analysis, part import and rule administration.
"""

from rigcheck.api.facade import RigCheck

__all__ = ["RigCheck"]
