"""Tests for the fuzzy matcher (field-weighted rapidfuzz similarity)."""
from __future__ import annotations

from search_fallback.models.search_term import SearchTerm
from search_fallback.services.matcher import FuzzyMatcher, field_similarity
from search_fallback.utils.text import normalize_text


def _term(text: str, term_id: str | None = None, aliases: list[str] | None = None) -> SearchTerm:
    meta = {"aliases": aliases} if aliases else {}
    return SearchTerm(
        id=term_id or normalize_text(text),
        term=text,
        type="product",
        normalized_term=normalize_text(text),
        meta=meta,
    )


class TestFieldSimilarity:
    def test_identical_strings(self):
        assert field_similarity("macbook pro", "MacBook Pro") == 1.0

    def test_empty_value(self):
        assert field_similarity("macbook", "") == 0.0

    def test_word_order_tolerated(self):
        assert field_similarity("pro macbook", "MacBook Pro") >= 0.9


class TestFuzzyMatcher:
    def test_exact_normalized_match_is_zero_distance(self):
        matcher = FuzzyMatcher()
        [match] = matcher.match("iphone 15 pro", [_term("iPhone 15 Pro")])
        assert match.raw_score == 0.0

    def test_partial_query_matches(self):
        matcher = FuzzyMatcher()
        matches = matcher.match("iphone 15", [_term("iPhone 15 Pro")])
        assert len(matches) == 1
        assert matches[0].raw_score < 0.5

    def test_typo_tolerated(self):
        matcher = FuzzyMatcher()
        matches = matcher.match("macbok pro", [_term("MacBook Pro")])
        assert len(matches) == 1
        assert matches[0].raw_score < 0.3

    def test_alias_pulls_distance_down(self):
        matcher = FuzzyMatcher()
        with_alias = _term("PlayStation 5", term_id="a", aliases=["PS5"])
        without_alias = _term("PlayStation 5", term_id="b")
        [aliased] = matcher.match("ps5", [with_alias])
        assert aliased.raw_score < 0.3
        assert matcher.distance("ps5", without_alias) > aliased.raw_score

    def test_threshold_drops_unrelated_terms(self):
        matcher = FuzzyMatcher(threshold=0.6)
        terms = [_term("iPhone 15 Pro"), _term("Samsung Galaxy S24")]
        matches = matcher.match("iphone 15", terms)
        assert [m.term.term for m in matches] == ["iPhone 15 Pro"]

    def test_zero_threshold_keeps_only_exact(self):
        matcher = FuzzyMatcher(threshold=0.0)
        terms = [_term("MacBook Pro"), _term("MacBook Air")]
        matches = matcher.match("macbook pro", terms)
        assert [m.term.term for m in matches] == ["MacBook Pro"]

    def test_scores_are_within_unit_interval(self):
        matcher = FuzzyMatcher(threshold=1.0)
        terms = [_term("iPhone 15 Pro"), _term("Plumbing"), _term("Dyson Vacuum")]
        for match in matcher.match("vacum", terms):
            assert 0.0 <= match.raw_score <= 1.0

    def test_duplicate_terms_are_scored_once(self):
        matcher = FuzzyMatcher()
        term = _term("MacBook Pro")
        assert len(matcher.match("macbook", [term, term])) == 1

    def test_empty_query_returns_nothing(self):
        matcher = FuzzyMatcher()
        assert matcher.match("   ", [_term("MacBook Pro")]) == []

    def test_empty_catalog_returns_nothing(self):
        assert FuzzyMatcher().match("macbook", []) == []

    def test_arabic_alias(self):
        matcher = FuzzyMatcher()
        term = _term("حاسوب", aliases=["كمبيوتر", "لابتوب"])
        [match] = matcher.match("لابتوب", [term])
        assert match.raw_score < 0.3

    def test_short_overlap_is_not_a_match(self):
        matcher = FuzzyMatcher()
        terms = [_term("Samsung Galaxy S23"), _term("Instant Pot"), _term("OnePlus")]
        assert matcher.match("xyz", terms) == []
        assert matcher.match("zzz-nonexistent-zzz", terms) == []


class TestPartialCredit:
    def test_short_query_gets_no_substring_credit(self):
        assert field_similarity("xyz", "Samsung Galaxy S23") < 0.6

    def test_whole_word_subset_still_scores_full(self):
        assert field_similarity("pro", "iPhone 15 Pro") == 1.0

    def test_short_fragment_of_a_word_is_weak(self):
        assert field_similarity("axy", "Samsung Galaxy S23") < 0.6
