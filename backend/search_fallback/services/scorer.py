"""Ranking scorer — fuses fuzzy similarity, learned edge weight and popularity."""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from search_fallback.models.search import RankedResult
from search_fallback.services.matcher import FuzzyMatch

EDGE_BOOST_FACTOR = 0.1
EDGE_BOOST_CAP = 0.3        # at most 30 points from learned selections
POPULARITY_DIVISOR = 1000.0
POPULARITY_CAP = 0.1        # at most 10 points from search_count


def compute_probability(raw_score: float, edge_weight: float, search_count: int) -> int:
    """Probability (0-100) that a candidate is what the user meant."""
    base_score = 1.0 - raw_score
    edge_boost = min(max(edge_weight, 0.0) * EDGE_BOOST_FACTOR, EDGE_BOOST_CAP)
    popularity_boost = min(max(search_count, 0) / POPULARITY_DIVISOR, POPULARITY_CAP)
    probability = min((base_score + edge_boost + popularity_boost) * 100.0, 100.0)
    # Round half up; round() would send 62.5 to 62
    return max(0, min(100, math.floor(probability + 0.5)))


class RankingScorer:
    """Turn fuzzy matches into a filtered, ordered, truncated result list."""

    def rank(
        self,
        matches: Iterable[FuzzyMatch],
        edge_weights: Mapping[str, float],
        limit: int,
        min_probability: int,
    ) -> list[RankedResult]:
        scored: list[tuple[RankedResult, int]] = []
        for match in matches:
            term = match.term
            edge_weight = edge_weights.get(term.id, 0.0)
            probability = compute_probability(match.raw_score, edge_weight, term.search_count)
            if probability < min_probability:
                continue
            scored.append(
                (
                    RankedResult(
                        term_id=term.id,
                        term=term.term,
                        type=term.type,
                        probability=probability,
                        raw_score=match.raw_score,
                        category_id=term.category_id,
                        metadata=term.meta or None,
                        edge_weight=edge_weight,
                    ),
                    term.search_count,
                )
            )

        # Deterministic order: probability, then popularity, then text
        scored.sort(key=lambda item: (-item[0].probability, -item[1], item[0].term, item[0].term_id))
        return [result for result, _ in scored[:limit]]
