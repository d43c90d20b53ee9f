"""Data models for parsed Cucumber reports."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


class StepStatus(Enum):
    """Statuses the Cucumber HTML formatter puts on step elements."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    PENDING = "pending"
    UNDEFINED = "undefined"


# Run-level keys, in output order
RUN_FIELDS = (
    "region",
    "run_date",
    "run_time",
    "retest",
    "report_file_name",
    "valid_run",
    "duration",
    "scenarios_total",
    "scenarios_passed",
    "scenarios_failed",
    "steps_total",
    "steps_passed",
    "steps_failed",
)


def _status_value(status) -> Optional[str]:
    if status is None:
        return None
    return getattr(status, "value", status)


def compute_status(steps: Iterable["Step"]) -> StepStatus:
    """Derive a scenario status from its steps.

    A scenario fails on the first step whose status mentions "failed" or
    "skipped". Pending and undefined steps don't fail it, and a scenario
    with no steps passes.
    """
    for step in steps:
        status = _status_value(step.status)
        if not status:
            continue
        status = status.lower()
        if StepStatus.FAILED.value in status or StepStatus.SKIPPED.value in status:
            return StepStatus.FAILED

    return StepStatus.PASSED


@dataclass(frozen=True)
class Step:
    """Single step of a scenario."""
    name: Optional[str] = None
    status: Optional[StepStatus] = None
    file: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "step_name": self.name,
            "step_status": _status_value(self.status),
            "step_file": self.file,
        }


@dataclass
class Scenario:
    """Scenario with its steps in document order."""
    id: Optional[str] = None
    name: Optional[str] = None
    tag: Optional[str] = None
    file: Optional[str] = None
    steps: list[Step] = field(default_factory=list)
    # Only ever set by calculate_status()
    status: Optional[StepStatus] = field(default=None, init=False)

    def add_step(self, step: Step) -> None:
        self.steps.append(step)

    def calculate_status(self) -> StepStatus:
        """Recompute the status from the full step list and store it."""
        self.status = compute_status(self.steps)
        return self.status

    @property
    def failed(self) -> bool:
        return self.status == StepStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario_id_num": self.id,
            "scenario_name": self.name,
            "scenario_status": _status_value(self.status),
            "scenario_file": self.file,
            "scenario_tag": self.tag,
            "steps": [s.to_dict() for s in self.steps],
        }


@dataclass
class Feature:
    """Named group of scenarios."""
    name: Optional[str] = None
    scenarios: list[Scenario] = field(default_factory=list)

    def add_scenario(self, scenario: Scenario) -> None:
        self.scenarios.append(scenario)

    def to_dict(self) -> dict[str, Any]:
        return {
            "feature_name": self.name,
            "scenarios": [s.to_dict() for s in self.scenarios],
        }


@dataclass
class Report:
    """One parsed report file.

    The six counters come from the summary text Cucumber writes at the top
    of the page. They are kept as-is and not checked against the feature
    tree, since the two can disagree in real reports.
    """
    region: Optional[str] = None
    run_date: Optional[str] = None
    run_time: Optional[str] = None
    retest: bool = False
    report_file_name: Optional[str] = None
    valid_run: bool = True
    duration: Optional[str] = None
    scenarios_total: int = 0
    scenarios_passed: int = 0
    scenarios_failed: int = 0
    steps_total: int = 0
    steps_passed: int = 0
    steps_failed: int = 0
    features: list[Feature] = field(default_factory=list)

    def add_feature(self, feature: Feature) -> None:
        self.features.append(feature)

    @property
    def scenarios(self) -> list[Scenario]:
        """All scenarios across features, in document order."""
        return [s for f in self.features for s in f.scenarios]

    def get_field(self, name: str) -> Any:
        """Value of a run-level field, None for unknown names."""
        if name not in RUN_FIELDS:
            return None
        return getattr(self, name)

    def run_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in RUN_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        return {
            "run": self.run_dict(),
            "features": [f.to_dict() for f in self.features],
        }

    def __str__(self) -> str:
        return (
            f"Report(region='{self.region}', run_date='{self.run_date}', "
            f"run_time='{self.run_time}', retest={self.retest}, "
            f"report_file_name='{self.report_file_name}', valid_run={self.valid_run}, "
            f"duration='{self.duration}', "
            f"scenarios={self.scenarios_total} "
            f"({self.scenarios_passed} passed, {self.scenarios_failed} failed), "
            f"steps={self.steps_total} "
            f"({self.steps_passed} passed, {self.steps_failed} failed), "
            f"features={len(self.features)})"
        )
