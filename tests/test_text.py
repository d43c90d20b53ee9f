"""Tests for text helpers."""

from cukeminer.text import extract_pair_counts, strip_prefix


class TestStripPrefix:
    """Tests for label prefix removal."""

    def test_removes_prefix_and_trims(self):
        assert strip_prefix("Scenario Outline: Login", "Scenario Outline:") == "Login"

    def test_leaves_text_without_prefix(self):
        assert strip_prefix("Scenario: Login", "Scenario Outline:") == "Scenario: Login"

    def test_is_case_sensitive(self):
        assert strip_prefix("feature: Login", "Feature:") == "feature: Login"

    def test_prefix_only(self):
        assert strip_prefix("Feature:", "Feature:") == ""

    def test_does_not_trim_unmatched_text(self):
        assert strip_prefix("  Login  ", "Feature:") == "  Login  "


class TestExtractPairCounts:
    """Tests for failed/passed count extraction."""

    def test_failed_and_passed(self):
        assert extract_pair_counts("2 failed, 6 passed") == (2, 6)

    def test_ignores_other_counts(self):
        assert extract_pair_counts("2 failed, 4 skipped, 98 passed") == (2, 98)

    def test_order_does_not_matter(self):
        assert extract_pair_counts("6 passed, 2 failed") == (2, 6)

    def test_missing_counts_default_to_zero(self):
        assert extract_pair_counts("4 passed") == (0, 4)
        assert extract_pair_counts("1 undefined") == (0, 0)

    def test_words_are_case_sensitive(self):
        assert extract_pair_counts("3 FAILED, 1 Passed") == (0, 0)

    def test_empty_text(self):
        assert extract_pair_counts("") == (0, 0)
