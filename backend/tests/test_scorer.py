"""Tests for the ranking scorer."""
from __future__ import annotations

import pytest

from search_fallback.models.search_term import SearchTerm
from search_fallback.services.matcher import FuzzyMatch
from search_fallback.services.scorer import RankingScorer, compute_probability


def _match(term_id: str, text: str, raw_score: float, search_count: int = 0) -> FuzzyMatch:
    term = SearchTerm(
        id=term_id,
        term=text,
        type="product",
        normalized_term=text.lower(),
        search_count=search_count,
        meta={},
    )
    return FuzzyMatch(term=term, raw_score=raw_score)


class TestComputeProbability:
    def test_exact_match_without_boosts(self):
        assert compute_probability(0.0, 0.0, 0) == 100

    def test_base_score_only(self):
        assert compute_probability(0.4, 0.0, 0) == 60

    def test_edge_boost_is_capped_at_thirty_points(self):
        assert compute_probability(0.8, 1.0, 0) == 30
        assert compute_probability(0.8, 10.0, 0) == 50
        assert compute_probability(0.8, 100.0, 0) == 50

    def test_popularity_boost_is_capped_at_ten_points(self):
        assert compute_probability(0.8, 0.0, 50) == 25
        assert compute_probability(0.8, 0.0, 100_000) == 30

    def test_total_never_exceeds_hundred(self):
        assert compute_probability(0.0, 50.0, 10_000) == 100

    def test_rounds_half_up(self):
        assert compute_probability(0.375, 0.0, 0) == 63

    @pytest.mark.parametrize("raw", [0.0, 0.25, 0.6, 1.0])
    def test_bounds(self, raw):
        assert 0 <= compute_probability(raw, 3.0, 500) <= 100


class TestRankingScorer:
    def test_orders_by_probability(self):
        ranked = RankingScorer().rank(
            [_match("a", "Alpha", 0.3), _match("b", "Beta", 0.1), _match("c", "Gamma", 0.2)],
            edge_weights={},
            limit=3,
            min_probability=0,
        )
        assert [r.term for r in ranked] == ["Beta", "Gamma", "Alpha"]

    def test_ties_broken_by_popularity_then_text(self):
        ranked = RankingScorer().rank(
            [
                _match("a", "Zeta", 0.2),
                _match("b", "Alpha", 0.2),
                _match("c", "Mid", 0.2, search_count=3),
            ],
            edge_weights={},
            limit=3,
            min_probability=0,
        )
        assert [r.term for r in ranked] == ["Mid", "Alpha", "Zeta"]

    def test_filters_below_min_probability(self):
        ranked = RankingScorer().rank(
            [_match("a", "Close", 0.1), _match("b", "Far", 0.55)],
            edge_weights={},
            limit=3,
            min_probability=50,
        )
        assert [r.term for r in ranked] == ["Close"]
        assert all(r.probability >= 50 for r in ranked)

    def test_truncates_to_limit(self):
        matches = [_match(str(i), f"Term {i}", 0.1) for i in range(6)]
        ranked = RankingScorer().rank(matches, edge_weights={}, limit=2, min_probability=0)
        assert len(ranked) == 2

    def test_edge_weight_lifts_candidate(self):
        ranked = RankingScorer().rank(
            [_match("a", "Alpha", 0.2), _match("b", "Beta", 0.3)],
            edge_weights={"b": 2.0},
            limit=3,
            min_probability=0,
        )
        assert ranked[0].term == "Beta"
        assert ranked[0].probability == 90
        assert ranked[0].edge_weight == 2.0
        assert ranked[1].edge_weight == 0.0

    def test_result_carries_transparency_fields(self):
        [result] = RankingScorer().rank(
            [_match("a", "Alpha", 0.25)], edge_weights={}, limit=1, min_probability=0
        )
        assert result.term_id == "a"
        assert result.type == "product"
        assert result.raw_score == 0.25
        assert result.probability == 75

    def test_empty_input(self):
        assert RankingScorer().rank([], edge_weights={}, limit=3, min_probability=50) == []
