"""CompatibilityReport model and Markdown report generation."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, SerializeAsAny

from rigcheck.compatibility.power import PowerEstimate
from rigcheck.compatibility.rules import CompatibilityConfirmation, CompatibilityIssue


class CompatibilitySummary(BaseModel):
    """Issue counts for a build."""

    total_issues: int = 0
    errors: int = 0
    warnings: int = 0
    info: int = 0
    can_build: bool = True
    """True iff no error-severity issue is present."""


class CompatibilityReport(BaseModel):
    """Full compatibility check for one build."""

    parts: dict[str, str] = Field(default_factory=dict)
    """Selected part names by category."""

    issues: list[SerializeAsAny[CompatibilityIssue]] = Field(default_factory=list)
    confirmations: list[CompatibilityConfirmation] = Field(default_factory=list)
    summary: CompatibilitySummary = Field(default_factory=CompatibilitySummary)
    power: PowerEstimate | None = None

    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    """Timestamp of the check."""

    @property
    def status(self) -> str:
        if not self.summary.can_build:
            return "incompatible"
        if self.summary.warnings:
            return "warnings"
        return "compatible"

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["status"] = self.status
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_markdown(self) -> str:
        """Render the report as a Markdown document."""
        lines: list[str] = []

        lines.append("# Compatibility Report")
        lines.append("")
        lines.append(f"**Status:** {self.status.upper()}")
        lines.append(f"**Checked:** {self.checked_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append("")

        s = self.summary
        lines.append(
            f"**Issues:** {s.errors} errors, {s.warnings} warnings, {s.info} info"
        )
        lines.append("")

        if self.parts:
            lines.append("## Parts")
            lines.append("")
            lines.append("| Category | Part |")
            lines.append("|----------|------|")
            for category, name in self.parts.items():
                lines.append(f"| {category} | {_cell(name)} |")
            lines.append("")

        if self.power is not None:
            p = self.power
            lines.append("## Power")
            lines.append("")
            lines.append(f"- Estimated draw: {p.estimated:.0f} W")
            lines.append(f"- PSU wattage: {p.psu_wattage:.0f} W")
            pct = f" ({p.headroom_percent:.0f}%)" if p.headroom_percent is not None else ""
            lines.append(f"- Headroom: {p.headroom:.0f} W{pct}")
            if p.assumed:
                lines.append(f"- Assumed default TDP for: {', '.join(p.assumed)}")
            lines.append("")

        if self.issues:
            lines.append("## Issues")
            lines.append("")
            lines.append("| Severity | Type | Message |")
            lines.append("|----------|------|---------|")
            for issue in self.issues:
                lines.append(
                    f"| {issue.severity.upper()} | {_cell(issue.type)} | {_cell(issue.message)} |"
                )
            lines.append("")

        fixes = [i for i in self.issues if i.fix]
        if fixes:
            lines.append("## Suggested Fixes")
            lines.append("")
            for issue in fixes:
                fix = (issue.fix or "").replace("\n\n", " ")
                lines.append(f"- **{issue.type}:** {fix}")
            lines.append("")

        if self.confirmations:
            lines.append("## Passed Checks")
            lines.append("")
            for c in self.confirmations:
                lines.append(f"- {c.message}")
            lines.append("")

        return "\n".join(lines)


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")
