"""Run summary (duration and totals) extraction.

Cucumber's HTML formatter writes the run summary twice: as inline scripts
that fill in the header once the run is over, e.g.

    document.getElementById('totals').innerHTML = "1 scenario (1 passed)<br />4 steps (4 passed)";
    document.getElementById('duration').innerHTML = "Finished in <strong>0m0.012s seconds</strong>";

and, in some generators, as static ``<p id="totals">`` / ``<p id="duration">``
markup. The script values win; the markup is only read for whatever the
scripts did not provide.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from .text import extract_pair_counts


logger = logging.getLogger(__name__)

TOTALS_ID = "totals"
DURATION_ID = "duration"

# getElementById('<id>').innerHTML = "<html fragment>"
INNER_HTML_TEMPLATE = r"""getElementById\(['"]({id})['"]\)\.innerHTML\s*=\s*['"]([^'"]+)['"]"""
TOTALS_SCRIPT_PATTERN = re.compile(INNER_HTML_TEMPLATE.format(id=TOTALS_ID))
DURATION_SCRIPT_PATTERN = re.compile(INNER_HTML_TEMPLATE.format(id=DURATION_ID))

STRONG_PATTERN = re.compile(r"<strong>([^<]+)</strong>")
SCENARIOS_PATTERN = re.compile(r"(\d+)\s+scenarios?\s*\((.*?)\)", re.IGNORECASE)
STEPS_PATTERN = re.compile(r"(\d+)\s+steps?\s*\((.*?)\)", re.IGNORECASE)

LINE_BREAKS = ("<br />", "<br>")
DURATION_SUFFIX = " seconds"


@dataclass
class RunSummary:
    """Duration and pass/fail totals for a whole run."""
    duration: Optional[str] = None
    scenarios_total: int = 0
    scenarios_passed: int = 0
    scenarios_failed: int = 0
    steps_total: int = 0
    steps_passed: int = 0
    steps_failed: int = 0


def parse_totals_text(text: str, summary: Optional[RunSummary] = None) -> RunSummary:
    """Parse "8 scenarios (2 failed, 6 passed)" / "104 steps (...)" text.

    A unit that isn't mentioned keeps whatever counts summary already had.
    """
    if summary is None:
        summary = RunSummary()

    scenario_match = SCENARIOS_PATTERN.search(text)
    if scenario_match:
        summary.scenarios_total = int(scenario_match.group(1))
        failed, passed = extract_pair_counts(scenario_match.group(2))
        summary.scenarios_failed = failed
        summary.scenarios_passed = passed

    step_match = STEPS_PATTERN.search(text)
    if step_match:
        summary.steps_total = int(step_match.group(1))
        failed, passed = extract_pair_counts(step_match.group(2))
        summary.steps_failed = failed
        summary.steps_passed = passed

    return summary


def parse_duration_html(fragment: str) -> Optional[str]:
    """Get "9m15.076s" out of "Finished in <strong>9m15.076s seconds</strong>"."""
    match = STRONG_PATTERN.search(fragment)
    if not match:
        return None
    duration = match.group(1).strip()
    return duration.removesuffix(DURATION_SUFFIX).strip()


def normalize_line_breaks(fragment: str) -> str:
    for tag in LINE_BREAKS:
        fragment = fragment.replace(tag, "\n")
    return fragment


def _scan_scripts(soup: BeautifulSoup, summary: RunSummary) -> None:
    for script in soup.find_all("script"):
        script_text = script.string or ""

        totals_match = TOTALS_SCRIPT_PATTERN.search(script_text)
        if totals_match:
            parse_totals_text(normalize_line_breaks(totals_match.group(2)), summary)

        duration_match = DURATION_SCRIPT_PATTERN.search(script_text)
        if duration_match:
            duration = parse_duration_html(duration_match.group(2))
            if duration is not None:
                summary.duration = duration


def _apply_markup_fallback(soup: BeautifulSoup, summary: RunSummary) -> None:
    if not summary.duration:
        duration_node = soup.find("p", id=DURATION_ID)
        if duration_node:
            strong = duration_node.find("strong")
            if strong:
                logger.debug("Duration taken from static markup")
                summary.duration = strong.get_text().strip()

    if summary.scenarios_total == 0:
        totals_node = soup.find("p", id=TOTALS_ID)
        if totals_node:
            logger.debug("Totals taken from static markup")
            parse_totals_text(totals_node.get_text("\n"), summary)


def extract_summary(soup: BeautifulSoup) -> RunSummary:
    """Recover the run duration and totals from a parsed report page."""
    summary = RunSummary()
    _scan_scripts(soup, summary)
    _apply_markup_fallback(soup, summary)
    return summary
