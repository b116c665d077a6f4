# Tests for RankedSearchEngine
# ============================

import pytest

from slicer.search import (
    RankedSearchEngine,
    MatchType,
    SearchOptions,
    search,
    get_suggestions,
    highlight_matches,
)


class TestMatchCascade:
    """Each strategy of the cascade."""

    def test_exact_match(self, engine):
        """Case-insensitive equality scores 1.0."""
        results = engine.search(["Apple"], "apple")
        assert len(results) == 1
        assert results[0].match_type == MatchType.EXACT
        assert results[0].score == 1.0

    def test_starts_with(self, engine):
        """Prefix score drops 0.01 per extra character."""
        result = engine.search(["Apple Pie"], "apple")[0]
        assert result.match_type == MatchType.STARTS_WITH
        assert result.score == pytest.approx(0.91)

    def test_starts_with_floor(self, engine):
        """Long candidates bottom out at 0.8."""
        result = engine.search(["Application form builder for teams"], "app")[0]
        assert result.match_type == MatchType.STARTS_WITH
        assert result.score == pytest.approx(0.8)

    def test_contains(self, engine):
        """Substring score drops 0.01 per position."""
        result = engine.search(["Pineapple"], "apple")[0]
        assert result.match_type == MatchType.CONTAINS
        assert result.score == pytest.approx(0.66)

    def test_token_match_all_exact(self, engine):
        """Every query word found exactly, in any order, caps at 1.0."""
        result = engine.search(["Red Delicious Apple"], "apple red")[0]
        assert result.match_type == MatchType.TOKEN_MATCH
        assert result.score == pytest.approx(1.0)

    def test_token_match_partial(self, engine):
        """Prefix word (0.9) and exact word (1.0) average to 0.95."""
        result = engine.search(["Red Delicious Apple"], "deli apple")[0]
        assert result.match_type == MatchType.TOKEN_MATCH
        assert result.score == pytest.approx(0.95)

    def test_token_match_typo(self, engine):
        """A one-letter typo still matches through the token fuzzy rule."""
        result = engine.search(["Apple"], "aple")[0]
        assert result.match_type == MatchType.TOKEN_MATCH
        assert result.score == pytest.approx(0.64)

    def test_acronym(self, engine):
        """Initial letters of successive words."""
        results = engine.search(["Laryngeal Mask Airway", "Banana"], "LMA")
        assert [r.text for r in results] == ["Laryngeal Mask Airway"]
        assert results[0].match_type == MatchType.ACRONYM
        assert results[0].score == pytest.approx(0.6)

    def test_fuzzy(self, engine):
        """Whole-string fuzzy match is weighted by 0.8."""
        result = engine.search(["banana split"], "bananasplit")[0]
        assert result.match_type == MatchType.FUZZY
        assert result.score == pytest.approx(11 / 12 * 0.8)

    def test_no_match(self, engine):
        assert engine.search(["Banana"], "xyz") == []

    def test_diacritics_ignored(self, engine):
        """Unaccented queries find accented candidates."""
        result = engine.search(["Crème brûlée"], "creme")[0]
        assert result.match_type == MatchType.STARTS_WITH

    def test_case_sensitive(self, engine):
        """With case sensitivity on, differently-cased text is no longer exact."""
        results = engine.search(["Apple"], "apple", SearchOptions(case_sensitive=True))
        assert results
        assert results[0].match_type != MatchType.EXACT
        assert results[0].score < 1.0


class TestSearchResults:
    """Ordering, limits and edge cases of the result list."""

    def test_sorted_by_score(self, engine):
        results = engine.search(["Pineapple", "Apple Pie", "Apple"], "apple")
        assert [r.text for r in results] == ["Apple", "Apple Pie", "Pineapple"]

    def test_ties_keep_input_order(self, engine):
        """Equal scores stay in candidate order."""
        results = engine.search(["Apple", "apple", "APPLE"], "apple")
        assert [r.text for r in results] == ["Apple", "apple", "APPLE"]

    def test_empty_query_returns_everything(self, engine):
        """An empty query matches every candidate exactly."""
        results = engine.search(["b", "a"], "")
        assert [r.text for r in results] == ["b", "a"]
        assert all(r.score == 1.0 and r.match_type == MatchType.EXACT for r in results)

    def test_whitespace_query_returns_everything(self, engine):
        assert len(engine.search(["b", "a"], "   ")) == 2

    def test_non_string_candidates_skipped(self, engine):
        results = engine.search(["Apple", None, 42], "apple")
        assert [r.text for r in results] == ["Apple"]

    def test_non_string_candidates_skipped_for_empty_query(self, engine):
        results = engine.search(["Apple", None, 42, "Banana"], "")
        assert [r.text for r in results] == ["Apple", "Banana"]

    def test_min_score(self, engine):
        results = engine.search(["Apple Pie", "Apple"], "apple", SearchOptions(min_score=0.95))
        assert [r.text for r in results] == ["Apple"]

    def test_max_results(self, engine):
        results = engine.search(["Apple", "Apple Pie", "Pineapple"], "apple", SearchOptions(max_results=2))
        assert len(results) == 2

    def test_scores_in_range(self, engine):
        """Every score lies in [0, 1] and exact always means 1.0."""
        candidates = ["Apple", "Apple Pie", "Pineapple", "Red Delicious Apple",
                      "Laryngeal Mask Airway", "banana split", "Aple sauce"]
        for query in ["apple", "aple", "LMA", "red", "bananasplit", "a"]:
            for result in engine.search(candidates, query):
                assert 0.0 <= result.score <= 1.0
                if result.match_type == MatchType.EXACT:
                    assert result.score == 1.0

    def test_deterministic(self, engine):
        candidates = ["Apple", "Apple Pie", "Pineapple", "Grape", "Maple"]
        first = [r.to_dict() for r in engine.search(candidates, "aple")]
        second = [r.to_dict() for r in engine.search(candidates, "aple")]
        assert first == second

    def test_module_level_search(self):
        results = search(["Apple"], "apple")
        assert results[0].match_type == MatchType.EXACT

    def test_result_to_dict(self, engine):
        data = engine.search(["Apple"], "apple")[0].to_dict()
        assert data == {"text": "Apple", "score": 1.0, "match_type": "exact"}


class TestScoringErrors:
    """A failure on one candidate does not stop the batch."""

    def test_failing_candidate_is_skipped(self):
        class FlakyEngine(RankedSearchEngine):
            def _match_item(self, candidate, query, query_tokens, opts):
                if candidate == "boom":
                    raise RuntimeError("scoring failed")
                return super()._match_item(candidate, query, query_tokens, opts)

        results = FlakyEngine().search(["boom", "Apple"], "apple")
        assert [r.text for r in results] == ["Apple"]


class TestSuggestionsAndHighlighting:
    """Suggestions and match highlighting."""

    def test_get_suggestions(self):
        candidates = ["Apple", "Apple Pie", "Pineapple", "Banana"]
        assert get_suggestions(candidates, "apple", limit=2) == ["Apple", "Apple Pie"]

    def test_get_suggestions_min_score(self):
        """Weak matches below 0.4 are not suggested."""
        assert get_suggestions(["Banana"], "apple") == []

    def test_highlight_whole_query(self):
        assert highlight_matches("Apple Pie", "pie") == "Apple <mark>Pie</mark>"

    def test_highlight_tokens(self):
        """Without a whole-query hit, each word is highlighted."""
        assert highlight_matches("Red Delicious Apple", "apple red") == \
            "<mark>Red</mark> Delicious <mark>Apple</mark>"

    def test_highlight_custom_tags(self):
        assert highlight_matches("Apple", "app", "[", "]") == "[App]le"

    def test_highlight_empty_query(self):
        assert highlight_matches("Apple", "") == "Apple"
