"""Small text helpers shared by the summary and document parsers."""

import re


# Counts inside a totals detail like "2 failed, 4 skipped, 98 passed"
FAILED_COUNT_PATTERN = re.compile(r"(\d+)\s+failed")
PASSED_COUNT_PATTERN = re.compile(r"(\d+)\s+passed")


def strip_prefix(text: str, prefix: str) -> str:
    """Remove a leading label like 'Feature:' and trim what is left."""
    if text.startswith(prefix):
        return text[len(prefix):].strip()
    return text


def extract_count(text: str, pattern: re.Pattern) -> int:
    """Return the first captured number for pattern, or 0."""
    match = pattern.search(text)
    if match:
        return int(match.group(1))
    return 0


def extract_pair_counts(detail_text: str) -> tuple[int, int]:
    """Get (failed, passed) counts from a totals detail string.

    The two numbers are looked up independently, so their order and
    any other counts in between (skipped, undefined...) don't matter.
    """
    failed = extract_count(detail_text, FAILED_COUNT_PATTERN)
    passed = extract_count(detail_text, PASSED_COUNT_PATTERN)
    return failed, passed
