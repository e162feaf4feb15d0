from __future__ import annotations

from typing import Any

from search_fallback.models.base import CamelModel


class SearchFallbackRequest(CamelModel):
    query: str
    limit: int = 3
    min_probability: int = 50


class RankedResult(CamelModel):
    term_id: str
    term: str
    type: str
    probability: int  # 0-100
    raw_score: float  # fuzzy distance, 0.0 = exact
    category_id: str | None = None
    metadata: dict[str, Any] | None = None
    edge_weight: float = 0.0


class SearchFallbackResponse(CamelModel):
    results: list[RankedResult]
    has_results: bool
