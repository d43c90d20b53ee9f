"""Cucumber HTML report parsing logic."""

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from bs4 import BeautifulSoup, Tag

from .models import Feature, Report, Scenario, Step, StepStatus
from .summary import extract_summary
from .text import strip_prefix


logger = logging.getLogger(__name__)

FEATURE_PREFIX = "Feature:"
# Longest first so "Scenario Outline:" is never cut down to "Outline: ..."
SCENARIO_PREFIXES = ("Scenario Outline:", "Scenario:")

SCENARIO_ID_PREFIX = "scenario_"
RECOGNIZED_STATUSES = {status.value: status for status in StepStatus}

RETEST_SUFFIX = "(retest)"
FILE_EXTENSIONS = (".html", ".htm")
DEFAULT_EXTENSION = ".htm"

# Only used for debug output, counts feature divs in the raw page
FEATURE_DIV_PATTERN = re.compile(r"""<div[^>]*class="[^"]*feature[^"]*"[^>]*>""")

PathLike = Union[str, Path]


class ReportParseError(Exception):
    """Report content could not be parsed at all."""
    pass


def _class_string(tag: Tag) -> str:
    """Class attribute as written in the page."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def class_contains(name: str, fragment: str) -> Callable[[Tag], bool]:
    """Match <name> tags whose class attribute contains fragment anywhere."""
    def predicate(tag: Tag) -> bool:
        return tag.name == name and fragment in _class_string(tag)
    return predicate


def class_equals(name: str, value: str) -> Callable[[Tag], bool]:
    """Match <name> tags whose whole class attribute is value."""
    def predicate(tag: Tag) -> bool:
        return tag.name == name and _class_string(tag) == value
    return predicate


def id_startswith(name: str, prefix: str) -> Callable[[Tag], bool]:
    def predicate(tag: Tag) -> bool:
        return tag.name == name and (tag.get("id") or "").startswith(prefix)
    return predicate


def node_text(tag: Optional[Tag]) -> Optional[str]:
    if tag is None:
        return None
    return tag.get_text().strip()


def parse_step_status(step_li: Tag) -> Optional[StepStatus]:
    """First class token that is a known step status, in attribute order."""
    for token in _class_string(step_li).split():
        if token in RECOGNIZED_STATUSES:
            return RECOGNIZED_STATUSES[token]
    return None


def parse_step_name(step_li: Tag) -> Optional[str]:
    """Build "<keyword> <text>" from the step_name block."""
    name_div = step_li.find(class_equals("div", "step_name"))
    if name_div is None:
        return None

    keyword = node_text(name_div.find(class_contains("span", "keyword"))) or ""
    value = node_text(name_div.find(class_contains("span", "val"))) or ""

    if keyword and value:
        return f"{keyword} {value}"
    if value:
        return value
    return None


def parse_step(step_li: Tag) -> Optional[Step]:
    """Parse a step <li>. Returns None when it carries no known status."""
    status = parse_step_status(step_li)
    if status is None:
        return None

    step_file = None
    for file_div in step_li.find_all(class_equals("div", "step_file")):
        step_file = node_text(file_div.find("span"))
        if step_file is not None:
            break

    return Step(name=parse_step_name(step_li), status=status, file=step_file)


def recognized_steps(step_lis: Iterable[Tag]) -> list[Step]:
    """Parse step nodes, leaving out the ones without a status."""
    steps = []
    for step_li in step_lis:
        step = parse_step(step_li)
        if step is None:
            logger.debug("Skipping step without status: %s", _class_string(step_li))
            continue
        steps.append(step)
    return steps


def parse_scenario_name(heading: Tag) -> Optional[str]:
    name = node_text(heading.find(class_equals("span", "val")))
    if name is None:
        return None
    for prefix in SCENARIO_PREFIXES:
        if name.startswith(prefix):
            return strip_prefix(name, prefix)
    return name


def parse_scenario(scenario_div: Tag) -> Scenario:
    """Parse a scenario block and compute its status from its steps."""
    scenario = Scenario(
        file=node_text(scenario_div.find(class_equals("span", "scenario_file"))),
        tag=node_text(scenario_div.find(class_equals("span", "tag"))),
    )

    heading = scenario_div.find(id_startswith("h3", SCENARIO_ID_PREFIX))
    if heading is not None:
        scenario.id = heading.get("id")
        scenario.name = parse_scenario_name(heading)

    for step in recognized_steps(scenario_div.find_all(class_contains("li", "step"))):
        scenario.add_step(step)

    scenario.calculate_status()
    return scenario


def parse_feature_name(feature_div: Tag) -> Optional[str]:
    for heading in feature_div.find_all("h2"):
        name = node_text(heading.find(class_equals("span", "val")))
        if name is not None:
            return strip_prefix(name, FEATURE_PREFIX)
    return None


def parse_feature(feature_div: Tag) -> Feature:
    feature = Feature(name=parse_feature_name(feature_div))
    for scenario_div in feature_div.find_all(class_contains("div", "scenario")):
        feature.add_scenario(parse_scenario(scenario_div))
    return feature


def named_features(features: Iterable[Feature]) -> list[Feature]:
    """Drop features whose name could not be read."""
    kept = []
    for feature in features:
        if not feature.name:
            logger.debug("Skipping unnamed feature with %d scenario(s)", len(feature.scenarios))
            continue
        kept.append(feature)
    return kept


def parse_document(html_content: str) -> Report:
    """Parse Cucumber HTML content into a Report.

    Pages without any report markers give an empty Report. Raises
    ReportParseError only when the content can't be parsed at all.
    """
    try:
        soup = BeautifulSoup(html_content, "html.parser")
    except Exception as e:
        raise ReportParseError(f"Could not parse HTML: {e}") from e

    report = Report()

    try:
        summary = extract_summary(soup)
    except ValueError as e:
        raise ReportParseError(f"Could not read run summary: {e}") from e

    report.duration = summary.duration
    report.scenarios_total = summary.scenarios_total
    report.scenarios_passed = summary.scenarios_passed
    report.scenarios_failed = summary.scenarios_failed
    report.steps_total = summary.steps_total
    report.steps_passed = summary.steps_passed
    report.steps_failed = summary.steps_failed

    features = (parse_feature(div) for div in soup.find_all(class_contains("div", "feature")))
    for feature in named_features(features):
        report.add_feature(feature)

    return report


def strip_extension(filename: str) -> str:
    for extension in FILE_EXTENSIONS:
        if filename.endswith(extension):
            return filename[: -len(extension)]
    return filename


def parse_filename_metadata(file_path: PathLike) -> dict:
    """Get run metadata from a name like prod-20252008-1012(retest).htm."""
    filename = Path(file_path).name
    basename = strip_extension(filename)
    parts = basename.replace(RETEST_SUFFIX, "").split("-")

    metadata = {
        "region": None,
        "run_date": None,
        "run_time": None,
        "retest": RETEST_SUFFIX in filename,
        "report_file_name": basename,
    }

    if len(parts) >= 3:
        metadata["region"] = parts[0]
        metadata["run_date"] = parts[1]
        metadata["run_time"] = parts[2]

    return metadata


def _log_outline(report: Report) -> None:
    logger.debug("Parsed %d feature(s)", len(report.features))
    for i, feature in enumerate(report.features, start=1):
        logger.debug("Feature %d: '%s' with %d scenario(s)", i, feature.name, len(feature.scenarios))
        for j, scenario in enumerate(feature.scenarios, start=1):
            logger.debug("  Scenario %d: '%s' (ID: %s)", j, scenario.name, scenario.id)


def parse_report_file(file_path: PathLike, debug: bool = False) -> Report:
    """Parse a single Cucumber HTML report file.

    Never raises for unreadable or unparsable files: the returned Report
    has valid_run set to False instead, with whatever metadata the file
    name gave.
    """
    file_path = Path(file_path)
    report = Report()

    metadata = parse_filename_metadata(file_path)
    report.region = metadata["region"]
    report.run_date = metadata["run_date"]
    report.run_time = metadata["run_time"]
    report.retest = metadata["retest"]
    report.report_file_name = metadata["report_file_name"]

    try:
        html_content = file_path.read_text(encoding="utf-8", errors="replace")

        if debug:
            logger.debug("File size: %d bytes", len(html_content))
            feature_divs = FEATURE_DIV_PATTERN.findall(html_content)
            logger.debug("Found %d feature div(s) in HTML", len(feature_divs))
            if feature_divs:
                logger.debug("First feature div: %s", feature_divs[0])

        parsed = parse_document(html_content)
    except (OSError, ReportParseError) as e:
        logger.warning("Failed to parse %s: %s", file_path, e, exc_info=debug)
        report.valid_run = False
        return report

    if debug:
        _log_outline(parsed)

    report.duration = parsed.duration
    report.scenarios_total = parsed.scenarios_total
    report.scenarios_passed = parsed.scenarios_passed
    report.scenarios_failed = parsed.scenarios_failed
    report.steps_total = parsed.steps_total
    report.steps_passed = parsed.steps_passed
    report.steps_failed = parsed.steps_failed
    report.features = parsed.features

    return report


def _existing(candidates: list[Path]) -> Optional[Path]:
    for path in candidates:
        if path.is_file():
            return path
    return None


def find_related_files(
    basename: str,
    search_path: Optional[PathLike] = None,
) -> tuple[Optional[Path], Optional[Path]]:
    """Find the base report and its retest for a name like prod-20252008-1012.

    Returns (base_file, retest_file), either may be None.
    """
    basename = strip_extension(basename)
    directory = Path(search_path) if search_path else Path()

    # .htm is what the runner writes, .html is accepted too
    extensions = (DEFAULT_EXTENSION,) + tuple(e for e in FILE_EXTENSIONS if e != DEFAULT_EXTENSION)
    base_file = _existing([directory / f"{basename}{ext}" for ext in extensions])
    retest_file = _existing([directory / f"{basename}{RETEST_SUFFIX}{ext}" for ext in extensions])

    return base_file, retest_file


def parse_related_reports(
    base_file: Optional[Path],
    retest_file: Optional[Path],
    debug: bool = False,
    progress_callback=None,
) -> dict[str, Report]:
    """Parse the base and retest files that exist, keyed "base"/"retest"."""
    targets = [(label, path) for label, path in (("base", base_file), ("retest", retest_file)) if path]
    reports = {}

    for label, path in targets:
        if progress_callback:
            progress_callback(label, path)
        reports[label] = parse_report_file(path, debug=debug)

    return reports
