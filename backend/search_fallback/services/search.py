"""Search service — fallback suggestions when a direct lookup found nothing."""
from __future__ import annotations

import logging

from sqlmodel import Session

from search_fallback.config import Settings
from search_fallback.models.search import SearchFallbackResponse
from search_fallback.repositories import EdgeWeightRepository, TermRepository
from search_fallback.services.matcher import FuzzyMatcher
from search_fallback.services.scorer import RankingScorer
from search_fallback.utils.text import normalize_text
from search_fallback.validation import validate_search_params

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 3
DEFAULT_MIN_PROBABILITY = 50


class SearchService:
    """Answers "what did the user probably mean?" for a failed lookup.

    1. Load the most popular catalog terms (plus any term already linked
       to this query by a learned edge).
    2. Fuzzy-match the query against them.
    3. Rank by similarity + edge weight + popularity, filter, truncate.
    """

    __slots__ = ("matcher", "scorer", "catalog_scan_limit")

    def __init__(self, settings: Settings) -> None:
        self.matcher = FuzzyMatcher(threshold=settings.similarity_threshold)
        self.scorer = RankingScorer()
        self.catalog_scan_limit = settings.catalog_scan_limit

    def search_fallback(
        self,
        session: Session,
        query: str,
        limit: int = DEFAULT_LIMIT,
        min_probability: int = DEFAULT_MIN_PROBABILITY,
    ) -> SearchFallbackResponse:
        validate_search_params(query, limit, min_probability)
        normalized_query = normalize_text(query)

        edge_weights = EdgeWeightRepository(session).weights_for_query(normalized_query)
        terms = TermRepository(session).list_for_matching(
            self.catalog_scan_limit, include_ids=edge_weights.keys()
        )

        matches = self.matcher.match(normalized_query, terms)
        results = self.scorer.rank(matches, edge_weights, limit, min_probability)

        logger.info(
            "Fallback search %r: %d terms scanned, %d fuzzy candidates, %d returned",
            normalized_query,
            len(terms),
            len(matches),
            len(results),
        )
        for rank, result in enumerate(results, start=1):
            logger.debug(
                "  %d. %s (%d%%, type=%s, edge=%.1f)",
                rank,
                result.term,
                result.probability,
                result.type,
                result.edge_weight,
            )

        return SearchFallbackResponse(results=results, has_results=bool(results))
