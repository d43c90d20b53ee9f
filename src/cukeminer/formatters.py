"""Output formatters for parsed reports."""

import json
from typing import Sequence

from .models import Feature, Report, Scenario


class Formatter:
    """Base class for formatters."""

    def format(self, reports: dict[str, Report], fields: Sequence[str] = ()) -> str:
        raise NotImplementedError


class TextFormatter(Formatter):
    """Human readable run data and feature tree."""

    def format(self, reports: dict[str, Report], fields: Sequence[str] = ()) -> str:
        lines = []
        banner = "=" * 60
        multiple = len(reports) > 1

        for label, report in reports.items():
            if multiple:
                lines.append(banner)
                lines.append(f"=== {label.upper()} REPORT ===")
                lines.append(banner)

            if fields:
                for name in fields:
                    lines.append(f"{name}: {report.get_field(name)}")
            else:
                lines.extend(self._run_lines(report))
                lines.extend(self._feature_lines(report))

            if multiple:
                lines.append("")

        return "\n".join(lines).rstrip()

    def _run_lines(self, report: Report) -> list[str]:
        return [
            "",
            "--- RUN DATA ---",
            f"  Region: {report.region}",
            f"  Run Date: {report.run_date}",
            f"  Run Time: {report.run_time}",
            f"  Retest: {report.retest}",
            f"  Report File Name: {report.report_file_name}",
            f"  Valid Run: {report.valid_run}",
            f"  Duration: {report.duration}",
            f"  Scenarios: {report.scenarios_total} total, "
            f"{report.scenarios_passed} passed, {report.scenarios_failed} failed",
            f"  Steps: {report.steps_total} total, "
            f"{report.steps_passed} passed, {report.steps_failed} failed",
        ]

    def _feature_lines(self, report: Report) -> list[str]:
        lines = ["", f"--- FEATURES ({len(report.features)}) ---"]
        if not report.features:
            lines.append("  No features found")
            return lines

        for i, feature in enumerate(report.features, start=1):
            lines.extend(self._feature_block(i, feature))
        return lines

    def _feature_block(self, number: int, feature: Feature) -> list[str]:
        lines = [
            "",
            f"  Feature {number}:",
            f"    Name: {feature.name}",
            f"    Scenarios: {len(feature.scenarios)}",
        ]
        for j, scenario in enumerate(feature.scenarios, start=1):
            lines.extend(self._scenario_block(j, scenario))
        return lines

    def _scenario_block(self, number: int, scenario: Scenario) -> list[str]:
        status = scenario.status.value if scenario.status else None
        lines = [
            "",
            f"    Scenario {number}:",
            f"      ID: {scenario.id}",
            f"      Name: {scenario.name}",
            f"      Tag: {scenario.tag}",
            f"      Status: {status}",
            f"      File: {scenario.file}",
            f"      Steps: {len(scenario.steps)}",
        ]
        for k, step in enumerate(scenario.steps, start=1):
            step_status = step.status.value if step.status else None
            lines.append(f"        Step {k}:")
            lines.append(f"          Name: {step.name}")
            lines.append(f"          Status: {step_status}")
            lines.append(f"          File: {step.file}")
        return lines


class JsonFormatter(Formatter):
    """JSON mapping of report label to its serialized form."""

    def format(self, reports: dict[str, Report], fields: Sequence[str] = ()) -> str:
        if fields:
            output = {
                label: {name: report.get_field(name) for name in fields}
                for label, report in reports.items()
            }
        else:
            output = {label: report.to_dict() for label, report in reports.items()}
        return json.dumps(output, indent=2)


FORMATTERS = {
    "text": TextFormatter(),
    "json": JsonFormatter(),
}


def get_formatter(format_name: str) -> Formatter:
    """Get formatter by name."""
    formatter = FORMATTERS.get(format_name.lower())
    if not formatter:
        valid = ", ".join(FORMATTERS.keys())
        raise ValueError(f"Unknown format: {format_name}. Valid: {valid}")
    return formatter
