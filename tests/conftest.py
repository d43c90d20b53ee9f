"""Pytest fixtures for cukeminer tests."""

import pytest

from cukeminer.models import Feature, Report, Scenario, Step, StepStatus


# Trimmed down output of the Cucumber 3.x html formatter
CUCUMBER_HTML = """<!DOCTYPE html>
<html>
<head><title>Cucumber</title></head>
<body>
<div class="cucumber">
<div id="cucumber-header">
  <div id="label"><h1>Cucumber Features</h1></div>
  <div id="summary">
    <p id="totals"></p>
    <p id="duration">Running features...</p>
  </div>
</div>
<div class="feature">
  <h2><span class="val">Feature: Login</span></h2>
  <p class="narrative">As a user I want to log in</p>
  <div class="scenario">
    <span class="scenario_file">features/login.feature:3</span>
    <span class="tag">@smoke</span>
    <h3 id="scenario_1" style="cursor: pointer;"><span class="keyword">Scenario:</span> <span class="val">Scenario: Valid credentials</span></h3>
    <ol>
      <li id="step_1" class="step passed">
        <div class="step_name"><span class="keyword">Given </span><span class="step val">I am on the login page</span></div>
        <div class="step_file"><span>features/step_definitions/login_steps.rb:1</span></div>
      </li>
      <li id="step_2" class="step passed">
        <div class="step_name"><span class="keyword">When </span><span class="step val">I log in as "alice"</span></div>
        <div class="step_file"><span>features/step_definitions/login_steps.rb:5</span></div>
      </li>
    </ol>
  </div>
  <div class="scenario outline">
    <span class="scenario_file">features/login.feature:10</span>
    <h3 id="scenario_2"><span class="val">Scenario Outline: Locked account</span></h3>
    <ol>
      <li id="step_3" class="step passed">
        <div class="step_name"><span class="keyword">Given </span><span class="step val">a locked account</span></div>
      </li>
      <li id="step_4" class="step failed">
        <div class="step_name"><span class="keyword">Then </span><span class="step val">I see an error</span></div>
        <div class="step_file"><span>features/step_definitions/login_steps.rb:12</span></div>
      </li>
      <li id="step_5" class="step skipped">
        <div class="step_name"><span class="keyword">And </span><span class="step val">I am logged out</span></div>
      </li>
    </ol>
  </div>
</div>
<div class="feature">
  <h2><span class="val">Feature: Search</span></h2>
  <div class="scenario">
    <h3 id="scenario_3"><span class="val">Scenario: Empty query</span></h3>
    <ol>
      <li class="step pending">
        <div class="step_name"><span class="keyword">When </span><span class="step val">I search for nothing</span></div>
      </li>
      <li class="step message">
        <div class="step_name"><span class="step val">not a real step</span></div>
      </li>
    </ol>
  </div>
</div>
<script type="text/javascript">document.getElementById('duration').innerHTML = "Finished in <strong>0m1.234s seconds</strong>";</script>
<script type="text/javascript">document.getElementById('totals').innerHTML = "3 scenarios (1 failed, 2 passed)<br />6 steps (1 failed, 1 skipped, 1 pending, 3 passed)";</script>
</div>
</body>
</html>
"""


@pytest.fixture
def cucumber_html():
    return CUCUMBER_HTML


@pytest.fixture
def report_dir(tmp_path):
    """Directory holding a base report and its retest."""
    (tmp_path / "prod-20252008-1012.htm").write_text(CUCUMBER_HTML, encoding="utf-8")

    retest_html = CUCUMBER_HTML.replace(
        '<li id="step_4" class="step failed">', '<li id="step_4" class="step passed">'
    ).replace(
        '<li id="step_5" class="step skipped">', '<li id="step_5" class="step passed">'
    )
    (tmp_path / "prod-20252008-1012(retest).htm").write_text(retest_html, encoding="utf-8")
    return tmp_path


@pytest.fixture
def base_report_file(report_dir):
    return report_dir / "prod-20252008-1012.htm"


@pytest.fixture
def sample_report():
    """Small hand built report."""
    passing = Scenario(id="scenario_1", name="Valid credentials", tag="@smoke", file="login.feature:3")
    passing.add_step(Step(name="Given I am on the login page", status=StepStatus.PASSED))
    passing.calculate_status()

    failing = Scenario(id="scenario_2", name="Locked account")
    failing.add_step(Step(name="Then I see an error", status=StepStatus.FAILED, file="login_steps.rb:12"))
    failing.calculate_status()

    report = Report(
        region="prod",
        run_date="20252008",
        run_time="1012",
        report_file_name="prod-20252008-1012",
        duration="0m1.234s",
        scenarios_total=2,
        scenarios_passed=1,
        scenarios_failed=1,
        steps_total=2,
        steps_passed=1,
        steps_failed=1,
    )
    report.add_feature(Feature(name="Login", scenarios=[passing, failing]))
    return report
