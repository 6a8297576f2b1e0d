"""Compatibility evaluation — declarative rules plus the fixed check catalog."""

from rigcheck.compatibility.database import RuleDatabase
from rigcheck.compatibility.engine import (
    CompatibilityEngine,
    CompatibilityEvaluation,
    evaluate_advanced_compatibility,
    evaluate_compatibility,
    filter_issues_by_severity,
    get_compatibility_summary,
)
from rigcheck.compatibility.power import PowerEstimate, estimate_power_requirements
from rigcheck.compatibility.report import CompatibilityReport, CompatibilitySummary
from rigcheck.compatibility.rules import (
    CompatibilityConfirmation,
    CompatibilityIssue,
    CompatibilityRule,
    ExtendedCompatibilityIssue,
    evaluate_rule,
)

__all__ = [
    "CompatibilityConfirmation",
    "CompatibilityEngine",
    "CompatibilityEvaluation",
    "CompatibilityIssue",
    "CompatibilityReport",
    "CompatibilityRule",
    "CompatibilitySummary",
    "ExtendedCompatibilityIssue",
    "PowerEstimate",
    "RuleDatabase",
    "estimate_power_requirements",
    "evaluate_advanced_compatibility",
    "evaluate_compatibility",
    "evaluate_rule",
    "filter_issues_by_severity",
    "get_compatibility_summary",
]
