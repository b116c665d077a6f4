# Tests for WildcardMatcher
# =========================

import pytest

from slicer.search import WildcardMatcher, WildcardPattern, wildcard_filter


class TestWildcardPattern:
    """Pattern parsing."""

    def test_parse_tokens_and_anchors(self):
        pattern = WildcardPattern.parse("*ab*cd")
        assert pattern.tokens == ("ab", "cd")
        assert pattern.has_leading_wildcard
        assert not pattern.has_trailing_wildcard

    def test_parse_drops_empty_tokens(self):
        """Runs of '*' and blank pieces produce no tokens."""
        pattern = WildcardPattern.parse("a** *b")
        assert pattern.tokens == ("a", "b")

    def test_parse_star_only(self):
        pattern = WildcardPattern.parse("*")
        assert pattern.tokens == ()


class TestWildcardAnchoring:
    """Anchoring rules."""

    def test_trailing_wildcard_anchors_start(self):
        """'SA*' matches SA123 but not XSA1."""
        matcher = WildcardMatcher("SA*")
        assert matcher.matches("SA123")
        assert not matcher.matches("XSA1")

    def test_leading_wildcard_anchors_end(self):
        """'*45' matches A45 but not 45A."""
        matcher = WildcardMatcher("*45")
        assert matcher.matches("A45")
        assert not matcher.matches("45A")

    def test_inner_wildcard(self):
        """'A*B*C' needs A at the start, C at the end and B between."""
        matcher = WildcardMatcher("A*B*C")
        assert matcher.matches("AxByC")
        assert matcher.matches("ABC")
        assert not matcher.matches("AxByCd")
        assert not matcher.matches("xAByC")
        assert not matcher.matches("ACB")

    def test_tokens_do_not_overlap(self):
        matcher = WildcardMatcher("a*a")
        assert not matcher.matches("a")
        assert matcher.matches("aa")

    def test_both_wildcards_floating(self):
        matcher = WildcardMatcher("*mid*")
        assert matcher.matches("the middle part")
        assert not matcher.matches("nothing here")

    def test_case_insensitive_by_default(self):
        assert WildcardMatcher("sa*").matches("SA1")

    def test_case_sensitive(self):
        assert not WildcardMatcher("SA*", case_sensitive=True).matches("sa1")

    def test_star_matches_everything(self):
        """A pattern with no literal tokens matches all with score 0."""
        matcher = WildcardMatcher("*")
        assert matcher.score("anything") == 0.0
        assert matcher.score("") == 0.0


class TestWildcardScoring:
    """Scores and ordering."""

    def test_anchored_start_score(self):
        """+5 anchored start, minus 0.005 per character."""
        assert WildcardMatcher("SA*").score("SA123") == pytest.approx(5 - 5 * 0.005)

    def test_floating_start_score(self):
        """Leading wildcard: 2 - 0.05 x index, +3 anchored end."""
        assert WildcardMatcher("*45").score("A45") == pytest.approx(2 - 0.05 + 3 - 3 * 0.005)

    def test_gap_penalty(self):
        """Each gap character between tokens costs 0.02."""
        tight = WildcardMatcher("A*B*C").score("ABC")
        loose = WildcardMatcher("A*B*C").score("AxByC")
        assert tight == pytest.approx(8 - 3 * 0.005)
        assert loose == pytest.approx(8 - 2 * 0.02 - 5 * 0.005)
        assert tight > loose

    def test_non_match_scores_none(self):
        assert WildcardMatcher("SA*").score("XSA1") is None

    def test_filter_ranks_shorter_first(self):
        results = wildcard_filter(["SA12345", "XSA1", "SA1"], "SA*")
        assert [m.text for m in results] == ["SA1", "SA12345"]

    def test_filter_ties_keep_order(self):
        results = wildcard_filter(["SA1", "sa1", "Sa1"], "SA*")
        assert [m.text for m in results] == ["SA1", "sa1", "Sa1"]

    def test_filter_skips_non_strings(self):
        results = WildcardMatcher("SA*").filter(["SA1", None, 5])
        assert [m.text for m in results] == ["SA1"]
