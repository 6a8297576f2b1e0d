"""CompatibilityEngine — runs declarative rules and the fixed catalog over a build.

Usage::

    from rigcheck.compatibility import CompatibilityEngine

    engine = CompatibilityEngine()
    report = engine.check({"cpu": cpu, "motherboard": board})
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, Sequence, TypeVar

from pydantic import BaseModel, Field, SerializeAsAny

from rigcheck.compatibility.catalog import CatalogCheck, build_catalog
from rigcheck.compatibility.database import RuleDatabase
from rigcheck.compatibility.power import PowerEstimate, estimate_power_requirements
from rigcheck.compatibility.report import CompatibilityReport, CompatibilitySummary
from rigcheck.compatibility.rules import (
    CompatibilityConfirmation,
    CompatibilityIssue,
    CompatibilityRule,
    ExtendedCompatibilityIssue,
    confirm_rule,
    evaluate_rule,
    rule_passes,
)
from rigcheck.config import SEVERITY_ORDER
from rigcheck.models.part import SelectedParts, selected
from rigcheck.settings import EngineSettings
from rigcheck.specs.accessor import get_spec_value, part_name

logger = logging.getLogger(__name__)

IssueT = TypeVar("IssueT", bound=CompatibilityIssue)


class CompatibilityEvaluation(BaseModel):
    """Issues and confirmations from one evaluation."""

    issues: list[SerializeAsAny[CompatibilityIssue]] = Field(default_factory=list)
    confirmations: list[CompatibilityConfirmation] = Field(default_factory=list)


def sort_issues(issues: Iterable[IssueT]) -> list[IssueT]:
    """Stable sort: errors first, then warnings, then info."""
    return sorted(issues, key=lambda i: SEVERITY_ORDER[i.severity])


def filter_issues_by_severity(issues: Iterable[IssueT], severity: str) -> list[IssueT]:
    return [i for i in issues if i.severity == severity]


def get_compatibility_summary(issues: Sequence[CompatibilityIssue]) -> CompatibilitySummary:
    """Reduce an issue list to counts and the can-build flag."""
    errors = sum(1 for i in issues if i.severity == "error")
    return CompatibilitySummary(
        total_issues=len(issues),
        errors=errors,
        warnings=sum(1 for i in issues if i.severity == "warning"),
        info=sum(1 for i in issues if i.severity == "info"),
        can_build=errors == 0,
    )


def evaluate_rules(
    rules: Iterable[CompatibilityRule],
    parts: SelectedParts,
) -> CompatibilityEvaluation:
    """Run declarative rules; passing rules yield confirmations.

    Rules whose categories are unselected, or whose fields are missing on
    either part, are skipped silently.
    """
    result = CompatibilityEvaluation()
    for rule in rules:
        source = selected(parts, rule.source_category)
        target = selected(parts, rule.target_category)
        if source is None or target is None:
            logger.debug(
                "Skipping rule %s: %s or %s not selected",
                rule.id, rule.source_category, rule.target_category,
            )
            continue

        source_value = get_spec_value(source, rule.source_field)
        target_value = get_spec_value(target, rule.target_field)
        if source_value is None or target_value is None:
            logger.debug("Skipping rule %s: missing %s/%s", rule.id,
                         rule.source_field, rule.target_field)
            continue

        passes = rule_passes(rule, source_value, target_value)
        if passes is None:
            logger.debug("Skipping rule %s: non-numeric value", rule.id)
        elif passes:
            result.confirmations.append(confirm_rule(rule))
        else:
            issue = evaluate_rule(rule, source, target)
            if issue is not None:
                result.issues.append(issue)
    return result


def evaluate_advanced_compatibility(
    parts: SelectedParts,
    checks: Sequence[CatalogCheck] | None = None,
    settings: EngineSettings | None = None,
) -> list[ExtendedCompatibilityIssue]:
    """Run every applicable catalog check and return issues errors-first."""
    if checks is None:
        checks = build_catalog(settings)
    issues: list[ExtendedCompatibilityIssue] = []
    for check in checks:
        issue = check.run(parts)
        if issue is not None:
            issues.append(issue)
    return sort_issues(issues)


def evaluate_compatibility(
    parts: SelectedParts,
    rules: Iterable[CompatibilityRule],
    *,
    checks: Sequence[CatalogCheck] | None = None,
    settings: EngineSettings | None = None,
) -> CompatibilityEvaluation:
    """Evaluate declarative rules plus the catalog.

    Catalog issues whose message duplicates a rule issue are dropped.  The
    merged list is sorted errors-first.
    """
    result = evaluate_rules(rules, parts)
    seen = {i.message for i in result.issues}
    for issue in evaluate_advanced_compatibility(parts, checks, settings):
        if issue.message not in seen:
            result.issues.append(issue)
            seen.add(issue.message)
    result.issues = sort_issues(result.issues)
    return result


class CompatibilityEngine:
    """Evaluate builds against the rules store and the fixed catalog.

    Parameters
    ----------
    db_path:
        Path to the rules database.  Defaults to ``':memory:'`` for an
        ephemeral database seeded with the default rules.
    settings:
        Engine settings; defaults apply when omitted.
    db:
        An existing :class:`RuleDatabase` to use instead of opening *db_path*.
    """

    def __init__(
        self,
        db_path: str | Path = ":memory:",
        *,
        settings: EngineSettings | None = None,
        db: RuleDatabase | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.db = db if db is not None else RuleDatabase(db_path, auto_seed=True)
        self.checks = build_catalog(self.settings)

    def fetch_rules(self) -> list[CompatibilityRule]:
        """Active rules, or none if the store cannot be read."""
        try:
            return self.db.get_active_rules()
        except sqlite3.Error:
            logger.warning(
                "Could not read compatibility rules; continuing with none",
                exc_info=True,
            )
            return []

    def evaluate(self, parts: SelectedParts) -> CompatibilityEvaluation:
        rules = self.fetch_rules()
        result = evaluate_compatibility(parts, rules, checks=self.checks)
        logger.info(
            "Evaluated %d rules and %d checks: %d issues, %d confirmations",
            len(rules),
            len(self.checks),
            len(result.issues),
            len(result.confirmations),
        )
        return result

    def evaluate_advanced(self, parts: SelectedParts) -> list[ExtendedCompatibilityIssue]:
        return evaluate_advanced_compatibility(parts, self.checks)

    def estimate_power(self, parts: SelectedParts) -> PowerEstimate:
        return estimate_power_requirements(parts, self.settings.baseline_overhead_w)

    def check(self, parts: SelectedParts) -> CompatibilityReport:
        """Run the full evaluation and wrap it in a :class:`CompatibilityReport`."""
        result = self.evaluate(parts)
        names = {
            category: part_name(part, category)
            for category, part in parts.items()
            if part
        }
        return CompatibilityReport(
            parts=names,
            issues=result.issues,
            confirmations=result.confirmations,
            summary=get_compatibility_summary(result.issues),
            power=self.estimate_power(parts),
        )
