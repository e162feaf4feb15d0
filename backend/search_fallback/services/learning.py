"""Reinforce a (query, term) edge when the user picks a suggestion."""
from __future__ import annotations

import logging

from sqlmodel import Session

from search_fallback.errors import NotFoundError
from search_fallback.models.edge_weight import EdgeWeight
from search_fallback.repositories import EdgeWeightRepository, TermRepository, commit
from search_fallback.utils.clock import utcnow
from search_fallback.utils.text import normalize_text
from search_fallback.validation import validate_edge_selection

logger = logging.getLogger(__name__)


class LearningService:
    """Single mutation path for edge weights and term popularity.

    Weights only grow: +WEIGHT_STEP per repeated selection, starting
    from INITIAL_WEIGHT. There is no decay.
    """

    WEIGHT_STEP = 0.5
    INITIAL_WEIGHT = 1.0

    def record_selection(
        self,
        session: Session,
        search_query: str,
        selected_term_id: str,
        selected_type: str,
        selected_id: str,
    ) -> EdgeWeight:
        """Create or bump the edge for (query, term) and count the term as searched.

        Both writes happen in one transaction; on any failure nothing is
        committed.
        """
        validate_edge_selection(search_query, selected_term_id, selected_type, selected_id)
        normalized_query = normalize_text(search_query)

        terms = TermRepository(session)
        try:
            if terms.get(selected_term_id) is None:
                raise NotFoundError(f"Search term {selected_term_id} not found")

            edge = EdgeWeightRepository(session).record_selection(
                normalized_query,
                selected_term_id,
                selected_type=selected_type,
                selected_id=selected_id.strip(),
                step=self.WEIGHT_STEP,
                initial_weight=self.INITIAL_WEIGHT,
            )
            terms.increment_search_count(selected_term_id, now=utcnow())
        except Exception:
            session.rollback()
            raise
        commit(session, "Recording selection")

        logger.info(
            "Edge %r -> %s now weight=%.1f after %d selection(s)",
            normalized_query,
            selected_term_id,
            edge.weight,
            edge.selection_count,
        )
        return edge
