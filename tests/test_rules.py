"""Tests for declarative rule evaluation.

All tests use in-memory values. No database required.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rigcheck.compatibility.engine import evaluate_rules
from rigcheck.compatibility.rules import (
    CompatibilityRule,
    confirm_rule,
    evaluate_rule,
    issue_type,
    rule_passes,
)


def _rule(operator: str, **overrides: object) -> CompatibilityRule:
    fields: dict[str, object] = {
        "id": 1,
        "source_category": "cooler",
        "target_category": "case",
        "source_field": "height_mm",
        "target_field": "cpu_cooler_height_mm",
        "operator": operator,
        "severity": "error",
        "message": "Cooler Height: exceeds case clearance",
    }
    fields.update(overrides)
    return CompatibilityRule(**fields)  # type: ignore[arg-type]


COOLER = {"name": "NH-D15", "data": {"physical": {"height_mm": 165}}}
CASE = {"name": "Small Case", "data": {"physical": {"cpu_cooler_height_mm": 155}}}


# ---------------------------------------------------------------------------
# Rule model
# ---------------------------------------------------------------------------


class TestRuleModel:
    def test_unknown_operator_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _rule("roughly_equals")

    def test_unknown_severity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _rule("equals", severity="fatal")

    def test_defaults(self) -> None:
        rule = _rule("equals")
        assert rule.active is True
        assert rule.description is None


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class TestOperators:
    @pytest.mark.parametrize(
        ("operator", "src", "tgt", "expected"),
        [
            ("equals", "AM5", "am5", True),
            ("equals", "AM5", "LGA1700", False),
            ("not_equals", "DDR4", "DDR5", True),
            ("greater_than", 10, 5, True),
            ("less_than", 10, 5, False),
            ("greater_than_or_equal", 5, 5, True),
            ("less_than_or_equal", 5, 5, True),
            ("less_than_or_equal", "165", 155, False),
            ("includes", "NVMe", "SATA, NVMe", True),
            ("includes", "SATA, NVMe", "nvme", True),
            ("includes", "U.2", "SATA, NVMe", False),
            ("not_includes", "U.2", "SATA, NVMe", True),
            ("equals", ["AM5"], "am5", True),
            ("includes", "NVMe", ["SATA", "NVMe"], True),
        ],
    )
    def test_rule_passes(self, operator: str, src: object, tgt: object, expected: bool) -> None:
        assert rule_passes(_rule(operator), src, tgt) is expected

    def test_numeric_operator_with_text_is_undecided(self) -> None:
        assert rule_passes(_rule("less_than"), "tall", 155) is None


# ---------------------------------------------------------------------------
# evaluate_rule
# ---------------------------------------------------------------------------


class TestEvaluateRule:
    def test_failing_rule_produces_issue(self) -> None:
        issue = evaluate_rule(_rule("less_than_or_equal"), COOLER, CASE)
        assert issue is not None
        assert issue.severity == "error"
        assert issue.type == "Cooler Height"
        assert issue.message == "Cooler Height: exceeds case clearance"
        assert issue.affected == ["cooler", "case"]
        assert issue.rule_id == 1
        assert "165mm" in issue.explanation
        assert "155mm" in issue.explanation
        assert issue.fix

    def test_description_used_as_explanation(self) -> None:
        rule = _rule("less_than_or_equal", description="Too tall for the case.")
        issue = evaluate_rule(rule, COOLER, CASE)
        assert issue is not None
        assert issue.explanation == "Too tall for the case."

    def test_passing_rule(self) -> None:
        small = {"data": {"height_mm": 150}}
        assert evaluate_rule(_rule("less_than_or_equal"), small, CASE) is None

    def test_missing_value_skips(self) -> None:
        assert evaluate_rule(_rule("less_than_or_equal"), {"data": {}}, CASE) is None

    def test_fix_for_upper_bound(self) -> None:
        issue = evaluate_rule(_rule("less_than_or_equal"), COOLER, CASE)
        assert issue is not None
        assert "at least 165mm" in (issue.fix or "")

    def test_fix_for_equals(self) -> None:
        rule = _rule(
            "equals",
            source_category="cpu",
            target_category="motherboard",
            source_field="socket",
            target_field="socket",
        )
        issue = evaluate_rule(rule, {"socket": "AM5"}, {"socket": "LGA1700"})
        assert issue is not None
        assert 'matching "AM5"' in (issue.fix or "")

    def test_issue_type_fallback(self) -> None:
        assert issue_type("Plain message", "Compatibility Issue") == "Plain message"
        assert issue_type(":", "Compatibility Issue") == "Compatibility Issue"

    def test_confirmation(self) -> None:
        confirmation = confirm_rule(_rule("less_than_or_equal"))
        assert confirmation.message == "Height and Max CPU Cooler Height are compatible."
        assert confirmation.rule_id == 1


class TestEvaluateRules:
    def test_issue_and_confirmation(self) -> None:
        passing = _rule(
            "equals",
            id=2,
            source_category="cpu",
            target_category="motherboard",
            source_field="socket",
            target_field="socket",
        )
        parts = {
            "cooler": COOLER,
            "case": CASE,
            "cpu": {"data": {"socket": "AM5"}},
            "motherboard": {"data": {"socket": "AM5"}},
        }
        result = evaluate_rules([_rule("less_than_or_equal"), passing], parts)
        assert [i.rule_id for i in result.issues] == [1]
        assert [c.rule_id for c in result.confirmations] == [2]

    def test_unselected_category_skipped(self) -> None:
        result = evaluate_rules([_rule("less_than_or_equal")], {"cooler": COOLER})
        assert result.issues == []
        assert result.confirmations == []

    def test_missing_field_gives_no_confirmation(self) -> None:
        parts = {"cooler": {"data": {}}, "case": CASE}
        result = evaluate_rules([_rule("less_than_or_equal")], parts)
        assert result.issues == []
        assert result.confirmations == []
