"""Compare a base run with its retest."""

from dataclasses import dataclass
from typing import Optional

from .models import Report, Scenario, StepStatus


ScenarioKey = tuple[str, str]


@dataclass
class ScenarioChange:
    """Scenario as seen in one of the compared runs."""
    feature_name: str
    scenario: Scenario

    @property
    def label(self) -> str:
        return f"{self.feature_name} / {self.scenario.name or self.scenario.id}"


@dataclass
class CompareResult:
    """Result of comparing a base report with its retest."""
    fixed: list[ScenarioChange]           # failed in base, passed in retest
    still_failing: list[ScenarioChange]   # failed in both
    new_failures: list[ScenarioChange]    # failed in retest, not failing in base
    not_retested: list[ScenarioChange]    # failed in base, missing from retest


def scenario_key(feature_name: Optional[str], scenario: Scenario) -> ScenarioKey:
    """Match scenarios by feature name plus scenario id (or name)."""
    return (feature_name or "", scenario.id or scenario.name or "")


def index_scenarios(report: Report) -> dict[ScenarioKey, ScenarioChange]:
    """Scenarios by key, first occurrence wins."""
    index = {}
    for feature in report.features:
        for scenario in feature.scenarios:
            key = scenario_key(feature.name, scenario)
            if key not in index:
                index[key] = ScenarioChange(feature_name=feature.name or "", scenario=scenario)
    return index


def compare_reports(base: Report, retest: Report) -> CompareResult:
    """Compare scenario statuses between base and retest runs."""
    old = index_scenarios(base)
    new = index_scenarios(retest)

    old_failed = {k for k, c in old.items() if c.scenario.failed}
    new_failed = {k for k, c in new.items() if c.scenario.failed}
    new_passed = {k for k, c in new.items() if c.scenario.status == StepStatus.PASSED}

    fixed = old_failed & new_passed
    still_failing = old_failed & new_failed
    new_failures = new_failed - old_failed
    not_retested = old_failed - set(new)

    return CompareResult(
        fixed=[new[k] for k in sorted(fixed)],
        still_failing=[new[k] for k in sorted(still_failing)],
        new_failures=[new[k] for k in sorted(new_failures)],
        not_retested=[old[k] for k in sorted(not_retested)],
    )


def _failed_step_lines(scenario: Scenario) -> list[str]:
    lines = []
    for step in scenario.steps:
        if step.status in (StepStatus.FAILED, StepStatus.SKIPPED):
            lines.append(f"    {step.status.value}: {step.name}")
    return lines


def format_compare_result(result: CompareResult) -> str:
    """Format comparison result as readable text."""
    lines = []

    if result.new_failures:
        lines.append(f"NEW FAILURES ({len(result.new_failures)}):")
        for change in result.new_failures:
            lines.append(f"  - {change.label}")
            lines.extend(_failed_step_lines(change.scenario))
        lines.append("")

    if result.fixed:
        lines.append(f"FIXED ON RETEST ({len(result.fixed)}):")
        for change in result.fixed:
            lines.append(f"  + {change.label}")
        lines.append("")

    if result.still_failing:
        lines.append(f"STILL FAILING ({len(result.still_failing)}):")
        for change in result.still_failing:
            lines.append(f"  ~ {change.label}")
            lines.extend(_failed_step_lines(change.scenario))
        lines.append("")

    if result.not_retested:
        lines.append(f"NOT RETESTED ({len(result.not_retested)}):")
        for change in result.not_retested:
            lines.append(f"  ? {change.label}")
        lines.append("")

    # Summary
    lines.append("SUMMARY:")
    lines.append(f"  New failures: {len(result.new_failures)}")
    lines.append(f"  Fixed on retest: {len(result.fixed)}")
    lines.append(f"  Still failing: {len(result.still_failing)}")
    lines.append(f"  Not retested: {len(result.not_retested)}")

    return "\n".join(lines)
