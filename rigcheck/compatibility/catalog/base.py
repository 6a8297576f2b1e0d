"""CatalogCheck registration and shared issue-building helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable

from rigcheck.compatibility.rules import CheckTier, ExtendedCompatibilityIssue, Severity
from rigcheck.models.part import SelectedParts, selected
from rigcheck.specs.accessor import format_number, get_spec_value

CheckFunc = Callable[..., "ExtendedCompatibilityIssue | None"]

_LIST_SEP_RE = re.compile(r"[,/;]")


@dataclass(frozen=True)
class CatalogCheck:
    """A named fixed check and the categories it needs.

    ``func`` receives the selected parts for ``categories`` positionally.
    Checks over the whole build (``categories`` only guards) can set
    ``whole_build`` to receive the full selection instead.
    """

    name: str
    tier: CheckTier
    categories: tuple[str, ...]
    func: CheckFunc
    description: str = ""
    whole_build: bool = False

    def applies_to(self, parts: SelectedParts) -> bool:
        return all(selected(parts, c) is not None for c in self.categories)

    def run(self, parts: SelectedParts) -> ExtendedCompatibilityIssue | None:
        """Run the check, or return None if a required category is unfilled."""
        if not self.applies_to(parts):
            return None
        if self.whole_build:
            return self.func(parts)
        return self.func(*(selected(parts, c) for c in self.categories))


def norm(value: Any) -> str:
    """Upper-case, stripped text form used for socket / type comparisons."""
    return str(value).upper().strip()


def spec_text(part: Any, spec_key: str) -> str | None:
    """Return the spec as non-empty text, or None.

    List values are joined with commas: ``["AM4", "AM5"]`` -> ``"AM4,AM5"``.
    """
    value = get_spec_value(part, spec_key)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (list, tuple)):
        value = ",".join(str(item).strip() for item in value if item is not None)
    text = str(value).strip()
    return text or None


def split_list(value: str) -> str:
    """Normalise a comma-separated list for display: ``"ATX,mATX"`` -> ``"ATX, mATX"``."""
    return ", ".join(item.strip() for item in value.split(",") if item.strip())


def _entries(listing: str) -> set[str]:
    return {norm(item) for item in _LIST_SEP_RE.split(listing) if item.strip()}


def listed(value: str, listing: str) -> bool:
    """True when *value* is one of the comma/slash-separated entries of *listing*.

    Whole entries are compared, so ``"ATX"`` is not found in ``"Micro-ATX"``.
    """
    return norm(value) in _entries(listing)


def shares_entry(first: str, second: str) -> bool:
    """True when two listings have at least one entry in common."""
    return not _entries(first).isdisjoint(_entries(second))


def mm(value: float) -> str:
    return f"{format_number(value)}mm"


def watts(value: float) -> str:
    return f"{format_number(value)}W"


def make_issue(
    *,
    tier: CheckTier,
    severity: Severity,
    type: str,
    message: str,
    explanation: str,
    affected: list[str],
    parts_involved: list[str],
    spec_keys: list[str],
    severity_explanation: str,
    recommendation: str = "",
    fix: str | None = None,
) -> ExtendedCompatibilityIssue:
    """Build an issue; ``affected`` lists categories, ``parts_involved`` names."""
    return ExtendedCompatibilityIssue(
        type=type,
        severity=severity,
        message=message,
        explanation=explanation,
        fix=fix,
        affected=affected,
        category=tier,
        recommendation=recommendation,
        parts_involved=parts_involved,
        spec_keys=spec_keys,
        severity_explanation=severity_explanation,
    )
