"""Build guide — step-by-step progress from part selection to final review.

Steps are derived entirely from the selected parts and the compatibility
issues found for them.  Three phases run in order:

- ``component_selection``: one step per part category
- ``system_constraints``: power, thermal, physical fit and upgrade path
- ``validation_review``: the final compatibility review
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, Field

from rigcheck.compatibility.engine import evaluate_advanced_compatibility
from rigcheck.compatibility.power import PowerEstimate, estimate_power_requirements
from rigcheck.compatibility.rules import CompatibilityIssue
from rigcheck.models.part import SelectedParts, selected
from rigcheck.settings import EngineSettings

logger = logging.getLogger(__name__)

GuidePhase = Literal["component_selection", "system_constraints", "validation_review"]
StepStatus = Literal["ready", "in_progress", "completed", "warning"]

PHASES: tuple[GuidePhase, ...] = ("component_selection", "system_constraints", "validation_review")

# Headroom below this many watts leaves the power step unfinished
LOW_HEADROOM_W = 50

# category -> (title, description), in selection order
_SELECTION_STEPS: dict[str, tuple[str, str]] = {
    "cpu": ("Select CPU", "Central processor; sets the platform and socket."),
    "motherboard": ("Select Motherboard", "Main board that connects every other component."),
    "ram": ("Select RAM", "System memory for multitasking and performance."),
    "gpu": ("Select GPU", "Graphics card for gaming and visual work."),
    "storage": ("Select Storage", "Drives for the operating system, games and files."),
    "psu": ("Select PSU", "Power supply feeding every component."),
    "case": ("Select Case", "Enclosure housing all components."),
    "cooler": ("Select Cooler", "CPU cooling for temperature management."),
}


class GuideStep(BaseModel):
    """One step of the build guide."""

    id: str
    phase: GuidePhase
    title: str
    description: str
    status: StepStatus
    progress: int = Field(ge=0, le=100)
    dependencies: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    """Messages of compatibility issues attached to this step."""


class PhaseProgress(BaseModel):
    phase: GuidePhase
    completed_steps: int
    total_steps: int
    progress: int

    @property
    def complete(self) -> bool:
        return self.completed_steps == self.total_steps


class BuildGuide(BaseModel):
    """Guide state for a build: steps, phase roll-ups and what to do next."""

    steps: list[GuideStep] = Field(default_factory=list)
    phases: list[PhaseProgress] = Field(default_factory=list)
    overall_progress: int = 0
    current_step: str = ""
    current_phase: GuidePhase = "component_selection"
    next_action: str = ""
    total_issues: int = 0
    critical_issues: int = 0
    estimated_power: float = 0

    def step(self, step_id: str) -> GuideStep | None:
        return next((s for s in self.steps if s.id == step_id), None)


def _touching(issues: Sequence[CompatibilityIssue], *categories: str) -> list[str]:
    return [i.message for i in issues if any(c in i.affected for c in categories)]


def _selection_steps(parts: SelectedParts) -> list[GuideStep]:
    steps: list[GuideStep] = []
    previous: str | None = None
    for category, (title, description) in _SELECTION_STEPS.items():
        done = selected(parts, category) is not None
        step_id = f"select_{category}"
        steps.append(GuideStep(
            id=step_id,
            phase="component_selection",
            title=title,
            description=description,
            status="completed" if done else "ready",
            progress=100 if done else 0,
            dependencies=[previous] if previous else [],
        ))
        previous = step_id
    return steps


def _power_step(parts: SelectedParts, power: PowerEstimate) -> GuideStep:
    if selected(parts, "psu") is None:
        status, progress = "ready", 0
    elif power.headroom < 0:
        status, progress = "warning", 25
    elif power.headroom < LOW_HEADROOM_W:
        status, progress = "warning", 75
    else:
        status, progress = "completed", 100
    return GuideStep(
        id="power_analysis",
        phase="system_constraints",
        title="Power Consumption Analysis",
        description=(
            f"Estimated draw {power.estimated:.0f}W against a "
            f"{power.psu_wattage:.0f}W PSU."
        ),
        status=status,
        progress=progress,
        dependencies=["select_cpu", "select_gpu", "select_psu"],
    )


def _thermal_step(parts: SelectedParts, issues: Sequence[CompatibilityIssue]) -> GuideStep:
    problems = _touching(issues, "cooler")
    if selected(parts, "cpu") is None:
        status, progress = "ready", 0
    elif selected(parts, "cooler") is None:
        status, progress = "in_progress", 25
    elif selected(parts, "case") is None:
        status, progress = "in_progress", 50
    elif problems:
        status, progress = "warning", 75
    else:
        status, progress = "completed", 100
    return GuideStep(
        id="thermal_analysis",
        phase="system_constraints",
        title="Thermal Considerations",
        description="Cooling capacity and clearance for the CPU cooler.",
        status=status,
        progress=progress,
        dependencies=["select_cpu", "select_case", "select_cooler"],
        issues=problems,
    )


def _physical_fit_step(parts: SelectedParts, issues: Sequence[CompatibilityIssue]) -> GuideStep:
    problems = _touching(issues, "case")
    if selected(parts, "case") is None:
        status, progress = "ready", 0
    elif problems:
        status, progress = "warning", 50
    else:
        status, progress = "completed", 100
    return GuideStep(
        id="physical_fit_analysis",
        phase="system_constraints",
        title="Physical Compatibility Check",
        description="Every component fits inside the case.",
        status=status,
        progress=progress,
        dependencies=["select_motherboard", "select_gpu", "select_case", "select_cooler"],
        issues=problems,
    )


def _upgrade_step(parts: SelectedParts) -> GuideStep:
    needed = ("motherboard", "case", "psu")
    have = sum(selected(parts, c) is not None for c in needed)
    if have == len(needed):
        status = "completed"
    elif have:
        status = "in_progress"
    else:
        status = "ready"
    return GuideStep(
        id="upgrade_analysis",
        phase="system_constraints",
        title="Upgrade Path Planning",
        description="Board, case and PSU decide how far the build can grow.",
        status=status,
        progress=round(have * 100 / len(needed)),
        dependencies=[f"select_{c}" for c in needed],
    )


def _review_step(parts: SelectedParts, issues: Sequence[CompatibilityIssue]) -> GuideStep:
    if not any(selected(parts, c) is not None for c in _SELECTION_STEPS):
        status, progress = "ready", 0
    elif issues:
        status, progress = "warning", 50
    else:
        status, progress = "completed", 100
    return GuideStep(
        id="compatibility_review",
        phase="validation_review",
        title="Final Compatibility Review",
        description="All compatibility checks pass for the selected parts.",
        status=status,
        progress=progress,
        dependencies=["power_analysis", "thermal_analysis", "physical_fit_analysis"],
        issues=[i.message for i in issues],
    )


def _phase_progress(steps: list[GuideStep]) -> list[PhaseProgress]:
    rollup: list[PhaseProgress] = []
    for phase in PHASES:
        in_phase = [s for s in steps if s.phase == phase]
        rollup.append(PhaseProgress(
            phase=phase,
            completed_steps=sum(s.status == "completed" for s in in_phase),
            total_steps=len(in_phase),
            progress=round(sum(s.progress for s in in_phase) / len(in_phase)),
        ))
    return rollup


def _next_action(step: GuideStep) -> str:
    if step.status == "completed":
        return "Build plan complete. Proceed to assembly."
    if step.issues:
        return f"{step.title}: resolve {step.issues[0]}"
    return step.title


def build_guide(
    parts: SelectedParts,
    issues: Sequence[CompatibilityIssue] | None = None,
    settings: EngineSettings | None = None,
) -> BuildGuide:
    """Work out where a build stands and what to do next.

    Parameters
    ----------
    parts:
        Selected parts by category.
    issues:
        Compatibility issues for *parts*.  The catalog is run when omitted.
    settings:
        Supplies the baseline overhead for the power estimate.

    Returns
    -------
    BuildGuide
        ``current_step`` is the first step short of 100 % progress, or the
        last step once everything is done.
    """
    settings = settings or EngineSettings()
    if issues is None:
        issues = evaluate_advanced_compatibility(parts, settings=settings)
    power = estimate_power_requirements(parts, settings.baseline_overhead_w)

    steps = _selection_steps(parts)
    steps.append(_power_step(parts, power))
    steps.append(_thermal_step(parts, issues))
    steps.append(_physical_fit_step(parts, issues))
    steps.append(_upgrade_step(parts))
    steps.append(_review_step(parts, issues))

    current = next((s for s in steps if s.progress < 100), steps[-1])
    guide = BuildGuide(
        steps=steps,
        phases=_phase_progress(steps),
        overall_progress=round(sum(s.progress for s in steps) / len(steps)),
        current_step=current.id,
        current_phase=current.phase,
        next_action=_next_action(current),
        total_issues=len(issues),
        critical_issues=sum(i.severity == "error" for i in issues),
        estimated_power=power.estimated,
    )
    logger.debug("Build guide at %d%%, current step %s", guide.overall_progress, guide.current_step)
    return guide
