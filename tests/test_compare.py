"""Tests for base vs retest comparison."""

import pytest

from cukeminer.compare import compare_reports, format_compare_result, scenario_key
from cukeminer.models import Feature, Report, Scenario, Step, StepStatus


def make_scenario(scenario_id, name, status):
    scenario = Scenario(id=scenario_id, name=name)
    scenario.add_step(Step(name=f"Then {name}", status=status))
    scenario.calculate_status()
    return scenario


def make_report(*scenarios, feature="Checkout"):
    report = Report()
    report.add_feature(Feature(name=feature, scenarios=list(scenarios)))
    return report


@pytest.fixture
def base_report():
    return make_report(
        make_scenario("scenario_1", "stable", StepStatus.PASSED),
        make_scenario("scenario_2", "flaky", StepStatus.FAILED),
        make_scenario("scenario_3", "broken", StepStatus.FAILED),
        make_scenario("scenario_4", "newly broken", StepStatus.PASSED),
        make_scenario("scenario_5", "dropped", StepStatus.SKIPPED),
    )


@pytest.fixture
def retest_report():
    return make_report(
        make_scenario("scenario_1", "stable", StepStatus.PASSED),
        make_scenario("scenario_2", "flaky", StepStatus.PASSED),
        make_scenario("scenario_3", "broken", StepStatus.FAILED),
        make_scenario("scenario_4", "newly broken", StepStatus.FAILED),
    )


class TestScenarioKey:
    """Tests for scenario matching keys."""

    def test_prefers_id(self):
        assert scenario_key("F", Scenario(id="scenario_1", name="x")) == ("F", "scenario_1")

    def test_falls_back_to_name(self):
        assert scenario_key(None, Scenario(name="x")) == ("", "x")


class TestCompareReports:
    """Tests for compare_reports."""

    def test_fixed(self, base_report, retest_report):
        result = compare_reports(base_report, retest_report)
        assert [c.scenario.name for c in result.fixed] == ["flaky"]

    def test_still_failing(self, base_report, retest_report):
        result = compare_reports(base_report, retest_report)
        assert [c.scenario.name for c in result.still_failing] == ["broken"]

    def test_new_failures(self, base_report, retest_report):
        result = compare_reports(base_report, retest_report)
        assert [c.scenario.name for c in result.new_failures] == ["newly broken"]

    def test_not_retested(self, base_report, retest_report):
        result = compare_reports(base_report, retest_report)
        assert [c.scenario.name for c in result.not_retested] == ["dropped"]

    def test_same_report_has_no_changes(self, base_report):
        result = compare_reports(base_report, base_report)
        assert result.fixed == []
        assert result.new_failures == []
        assert result.not_retested == []
        assert len(result.still_failing) == 3

    def test_features_keep_scenarios_apart(self):
        base = make_report(make_scenario("scenario_1", "a", StepStatus.FAILED), feature="One")
        retest = make_report(make_scenario("scenario_1", "a", StepStatus.PASSED), feature="Two")
        result = compare_reports(base, retest)
        assert result.fixed == []
        assert [c.feature_name for c in result.not_retested] == ["One"]


class TestFormatCompareResult:
    """Tests for comparison output."""

    def test_sections(self, base_report, retest_report):
        output = format_compare_result(compare_reports(base_report, retest_report))
        assert "NEW FAILURES (1):" in output
        assert "  - Checkout / newly broken" in output
        assert "    failed: Then newly broken" in output
        assert "FIXED ON RETEST (1):" in output
        assert "  + Checkout / flaky" in output
        assert "STILL FAILING (1):" in output
        assert "NOT RETESTED (1):" in output
        assert "  ? Checkout / dropped" in output

    def test_summary_always_present(self):
        output = format_compare_result(compare_reports(Report(), Report()))
        assert output.startswith("SUMMARY:")
        assert "  New failures: 0" in output
        assert "  Fixed on retest: 0" in output
