"""Declarative compatibility rules, issue models and rule evaluation."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from rigcheck.specs.accessor import format_number, get_spec_value, to_number
from rigcheck.specs.dictionary import spec_label, spec_unit

Severity = Literal["error", "warning", "info"]
CheckTier = Literal["hard", "warning", "info"]
Operator = Literal[
    "equals",
    "not_equals",
    "greater_than",
    "less_than",
    "greater_than_or_equal",
    "less_than_or_equal",
    "includes",
    "not_includes",
]

NUMERIC_OPERATORS = frozenset({
    "greater_than",
    "less_than",
    "greater_than_or_equal",
    "less_than_or_equal",
})


class CompatibilityRule(BaseModel):
    """A pairwise field-to-field constraint between two part categories."""

    id: int | None = None
    source_category: str
    target_category: str
    source_field: str
    """Spec key read from the source part."""

    target_field: str
    """Spec key read from the target part."""

    operator: Operator
    severity: Severity
    message: str
    """Short message; text before the first ':' becomes the issue type."""

    description: str | None = None
    active: bool = True


class CompatibilityIssue(BaseModel):
    """A failed check."""

    type: str
    severity: Severity
    message: str
    explanation: str
    fix: str | None = None
    affected: list[str] = Field(default_factory=list)
    """Part categories involved."""

    rule_id: int | None = None


class ExtendedCompatibilityIssue(CompatibilityIssue):
    """Issue raised by a fixed catalog check."""

    category: CheckTier
    """Catalog tier the check belongs to."""

    recommendation: str = ""
    parts_involved: list[str] = Field(default_factory=list)
    """Display names of the parts involved."""

    spec_keys: list[str] = Field(default_factory=list)
    """Spec keys consulted by the check."""

    severity_explanation: str = ""


class CompatibilityConfirmation(BaseModel):
    """Positive feedback for a declarative rule that passed."""

    type: str
    message: str
    explanation: str
    rule_id: int | None = None


def _text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(_text(item) for item in value if item is not None)
    if isinstance(value, float):
        return format_number(value)
    return str(value).lower() if isinstance(value, bool) else str(value)


def _with_unit(value: Any, spec_key: str) -> str:
    return f"{_text(value)}{spec_unit(spec_key)}"


def rule_passes(rule: CompatibilityRule, source_value: Any, target_value: Any) -> bool | None:
    """Apply the rule's operator.

    Returns None when a numeric operator meets a value that is not a number,
    so the rule is skipped rather than failed.
    """
    if rule.operator in NUMERIC_OPERATORS:
        src = to_number(source_value)
        tgt = to_number(target_value)
        if src is None or tgt is None:
            return None
        if rule.operator == "greater_than":
            return src > tgt
        if rule.operator == "less_than":
            return src < tgt
        if rule.operator == "greater_than_or_equal":
            return src >= tgt
        return src <= tgt

    src_s = _text(source_value).lower()
    tgt_s = _text(target_value).lower()
    if rule.operator == "equals":
        return src_s == tgt_s
    if rule.operator == "not_equals":
        return src_s != tgt_s
    contained = src_s in tgt_s or tgt_s in src_s
    if rule.operator == "includes":
        return contained
    return not contained


def issue_type(message: str, default: str) -> str:
    """Return the text before the first ':' in *message*, or *default*."""
    head = message.split(":", 1)[0].strip()
    return head or default


def _suggest_fix(rule: CompatibilityRule, source_value: Any, target_value: Any) -> str:
    """Generate a remediation sentence for a failed rule."""
    src_label = spec_label(rule.source_field)
    tgt_label = spec_label(rule.target_field)
    src = _with_unit(source_value, rule.source_field)
    tgt = _with_unit(target_value, rule.target_field)
    src_cat, tgt_cat = rule.source_category, rule.target_category

    if rule.operator == "equals":
        return (
            f'Select a {tgt_cat} with {tgt_label} matching "{_text(source_value)}" '
            f'or a {src_cat} with {src_label} matching "{_text(target_value)}".'
        )
    if rule.operator == "not_equals":
        return f'Select a {tgt_cat} whose {tgt_label} is not "{_text(source_value)}".'
    if rule.operator in ("less_than_or_equal", "less_than"):
        bound = "at least" if rule.operator == "less_than_or_equal" else "more than"
        upper = "at most" if rule.operator == "less_than_or_equal" else "less than"
        return (
            f"Select a {tgt_cat} with {tgt_label} of {bound} {src}, "
            f"or a {src_cat} with {src_label} of {upper} {tgt}."
        )
    if rule.operator in ("greater_than_or_equal", "greater_than"):
        bound = "at most" if rule.operator == "greater_than_or_equal" else "less than"
        lower = "at least" if rule.operator == "greater_than_or_equal" else "more than"
        return (
            f"Select a {tgt_cat} with {tgt_label} of {bound} {src}, "
            f"or a {src_cat} with {src_label} of {lower} {tgt}."
        )
    if rule.operator == "includes":
        return f'Select a {tgt_cat} whose {tgt_label} supports "{_text(source_value)}".'
    return f"Review the compatibility requirements between {src_cat} and {tgt_cat}."


def evaluate_rule(
    rule: CompatibilityRule,
    source_part: Any,
    target_part: Any,
) -> CompatibilityIssue | None:
    """Evaluate *rule* against a source and target part.

    Parameters
    ----------
    rule:
        The rule to evaluate.
    source_part, target_part:
        Parts selected for ``rule.source_category`` / ``rule.target_category``.

    Returns
    -------
    CompatibilityIssue | None
        None when the rule passes or when either value is missing.
    """
    source_value = get_spec_value(source_part, rule.source_field)
    target_value = get_spec_value(target_part, rule.target_field)
    if source_value is None or target_value is None:
        return None

    passes = rule_passes(rule, source_value, target_value)
    if passes is None or passes:
        return None

    src_label = spec_label(rule.source_field)
    tgt_label = spec_label(rule.target_field)
    explanation = rule.description or (
        f"The {src_label} of the {rule.source_category} "
        f"({_with_unit(source_value, rule.source_field)}) is incompatible with the "
        f"{tgt_label} of the {rule.target_category} "
        f"({_with_unit(target_value, rule.target_field)})."
    )

    return CompatibilityIssue(
        type=issue_type(rule.message, "Compatibility Issue"),
        severity=rule.severity,
        message=rule.message,
        explanation=explanation,
        fix=_suggest_fix(rule, source_value, target_value),
        affected=[rule.source_category, rule.target_category],
        rule_id=rule.id,
    )


def confirm_rule(rule: CompatibilityRule) -> CompatibilityConfirmation:
    """Build the confirmation emitted when *rule* passes."""
    return CompatibilityConfirmation(
        type=issue_type(rule.message, "Compatibility Confirmed"),
        message=(
            f"{spec_label(rule.source_field)} and {spec_label(rule.target_field)} "
            "are compatible."
        ),
        explanation=rule.description
        or f"The {rule.source_category} and {rule.target_category} are compatible.",
        rule_id=rule.id,
    )
