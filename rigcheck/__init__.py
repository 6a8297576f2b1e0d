"""rigcheck — PC build compatibility, health and bottleneck analysis."""

__version__ = "1.0.0"

from rigcheck.analysis.bottleneck import BottleneckAnalysis, BottleneckInsight, analyze_bottlenecks
from rigcheck.analysis.guide import BuildGuide, GuideStep, build_guide
from rigcheck.analysis.health import BuildHealthResult, HealthCategory, analyze_build_health
from rigcheck.api.facade import RigCheck
from rigcheck.compatibility.database import RuleDatabase
from rigcheck.compatibility.engine import (
    CompatibilityEngine,
    evaluate_advanced_compatibility,
    evaluate_compatibility,
    get_compatibility_summary,
)
from rigcheck.compatibility.power import PowerEstimate, estimate_power_requirements
from rigcheck.compatibility.report import CompatibilityReport, CompatibilitySummary
from rigcheck.compatibility.rules import (
    CompatibilityConfirmation,
    CompatibilityIssue,
    CompatibilityRule,
    ExtendedCompatibilityIssue,
)
from rigcheck.models.part import Part
from rigcheck.settings import ConfigManager, EngineSettings
from rigcheck.specs.accessor import get_spec_value
from rigcheck.specs.dictionary import SPEC_DICTIONARY, SpecDefinition
from rigcheck.specs.importer import ImportResult
from rigcheck.specs.validator import ValidationResult

__all__ = [
    "__version__",
    # Facade
    "RigCheck",
    # Compatibility
    "CompatibilityConfirmation",
    "CompatibilityEngine",
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
    "get_compatibility_summary",
    # Analysis
    "BottleneckAnalysis",
    "BottleneckInsight",
    "BuildGuide",
    "BuildHealthResult",
    "GuideStep",
    "HealthCategory",
    "analyze_bottlenecks",
    "analyze_build_health",
    "build_guide",
    # Specs and parts
    "ImportResult",
    "Part",
    "SPEC_DICTIONARY",
    "SpecDefinition",
    "ValidationResult",
    "get_spec_value",
    # Configuration
    "ConfigManager",
    "EngineSettings",
]
