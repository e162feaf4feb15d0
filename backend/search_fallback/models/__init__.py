from __future__ import annotations

from search_fallback.models.search_term import SearchTerm  # noqa: F401
from search_fallback.models.edge_weight import EdgeWeight  # noqa: F401
from search_fallback.models.interest import InterestRequest  # noqa: F401
