"""RigCheck — the single unified entry point for build evaluation.

Usage::

    from rigcheck import RigCheck

    rc = RigCheck(project_root="/path/to/project")
    report = rc.check({"cpu": cpu, "motherboard": board, "psu": psu})
    rc.analyze_bottlenecks(parts, use_case="gaming", target_resolution="1440p")
    rc.analyze_health(parts)
    rc.build_guide(parts)
    rc.import_csv(csv_text, "gpu")
    rc.add_rule(rule)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rigcheck.analysis.bottleneck import BottleneckAnalysis, analyze_bottlenecks
from rigcheck.analysis.guide import BuildGuide, build_guide
from rigcheck.analysis.health import BuildHealthResult, analyze_build_health
from rigcheck.compatibility.database import RuleDatabase
from rigcheck.compatibility.engine import CompatibilityEngine, CompatibilityEvaluation
from rigcheck.compatibility.power import PowerEstimate
from rigcheck.compatibility.report import CompatibilityReport
from rigcheck.compatibility.rules import CompatibilityRule, ExtendedCompatibilityIssue
from rigcheck.models.part import SelectedParts
from rigcheck.settings import ConfigManager, EngineSettings
from rigcheck.specs.importer import (
    ImportResult,
    generate_csv_template,
    import_parts_from_csv,
    import_parts_from_json,
)
from rigcheck.specs.validator import ValidationResult, validate_part

logger = logging.getLogger(__name__)


class RigCheck:
    """The public interface for rigcheck.

    Loads layered configuration, applies the configured log level to the
    ``rigcheck`` logger and owns the rules store and compatibility engine.

    Parameters
    ----------
    project_root:
        Directory holding ``.rigcheck/config.json`` and ``.env``.  When
        omitted only defaults, profiles and environment variables apply.
    rules_db:
        Rules database path; overrides ``RIGCHECK_RULES_DB``.
    settings:
        Pre-built settings, bypassing configuration loading entirely.
    """

    def __init__(
        self,
        project_root: str | Path | None = None,
        rules_db: str | Path | None = None,
        *,
        settings: EngineSettings | None = None,
    ) -> None:
        self.project_root = Path(project_root).resolve() if project_root else None
        self.config_manager = ConfigManager()
        self.settings = settings or self.config_manager.load_settings(self.project_root)

        level = logging.getLevelName(self.settings.log_level)
        if isinstance(level, int):
            logging.getLogger("rigcheck").setLevel(level)
        else:
            logger.warning("Unknown log level %r; leaving logger level unchanged",
                           self.settings.log_level)

        db_path = str(rules_db) if rules_db is not None else self.settings.rules_db
        self.db = RuleDatabase(db_path)
        self.engine = CompatibilityEngine(settings=self.settings, db=self.db)

    def close(self) -> None:
        self.db.close()

    # -- Compatibility --------------------------------------------------------

    def check(self, parts: SelectedParts) -> CompatibilityReport:
        """Full compatibility check wrapped in a report."""
        return self.engine.check(parts)

    def evaluate(self, parts: SelectedParts) -> CompatibilityEvaluation:
        return self.engine.evaluate(parts)

    def evaluate_advanced(self, parts: SelectedParts) -> list[ExtendedCompatibilityIssue]:
        return self.engine.evaluate_advanced(parts)

    def estimate_power(self, parts: SelectedParts) -> PowerEstimate:
        return self.engine.estimate_power(parts)

    # -- Analysis -------------------------------------------------------------

    def analyze_bottlenecks(
        self,
        parts: SelectedParts,
        use_case: str | None = None,
        target_resolution: str | None = None,
    ) -> BottleneckAnalysis:
        """Advisory insights; use case and resolution default to settings."""
        return analyze_bottlenecks(
            parts,
            use_case or self.settings.use_case,  # type: ignore[arg-type]
            target_resolution or self.settings.target_resolution,  # type: ignore[arg-type]
        )

    def analyze_health(self, parts: SelectedParts) -> BuildHealthResult:
        return analyze_build_health(parts, self.settings)

    def build_guide(self, parts: SelectedParts) -> BuildGuide:
        """Guide progress, using rule and catalog issues for the build."""
        return build_guide(parts, self.engine.evaluate(parts).issues, self.settings)

    # -- Part data ------------------------------------------------------------

    def validate_part(self, part: Any, category: str) -> ValidationResult:
        return validate_part(part, category)

    def import_csv(self, content: str, category: str) -> ImportResult:
        """Parse, convert and validate CSV rows into parts."""
        return import_parts_from_csv(content, category)

    def import_json(self, rows: list[dict[str, Any]], category: str) -> ImportResult:
        return import_parts_from_json(rows, category)

    def csv_template(self, category: str) -> str:
        return generate_csv_template(category)

    # -- Rule administration --------------------------------------------------

    def add_rule(self, rule: CompatibilityRule) -> int:
        rule_id = self.db.add_rule(rule)
        logger.info("Added compatibility rule %d: %s", rule_id, rule.message)
        return rule_id

    def update_rule(self, rule_id: int, updates: dict[str, Any]) -> CompatibilityRule | None:
        return self.db.update_rule(rule_id, updates)

    def activate_rule(self, rule_id: int) -> CompatibilityRule | None:
        return self.db.activate_rule(rule_id)

    def deactivate_rule(self, rule_id: int) -> CompatibilityRule | None:
        return self.db.deactivate_rule(rule_id)

    def delete_rule(self, rule_id: int) -> bool:
        return self.db.delete_rule(rule_id)

    def get_rules(self, *, include_inactive: bool = False) -> list[CompatibilityRule]:
        if include_inactive:
            return self.db.get_all_rules()
        return self.db.get_active_rules()
