"""Field-weighted, typo-tolerant similarity against the catalog."""
from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from rapidfuzz import fuzz, utils

from search_fallback.models.search_term import SearchTerm

DEFAULT_THRESHOLD = 0.6
MIN_PARTIAL_LENGTH = 4   # shorter side needed before substring credit is given
PARTIAL_SCALE = 0.9      # substring alignments never outrank a full match


@dataclass(frozen=True, slots=True)
class FuzzyMatch:
    """A catalog term that survived the similarity threshold."""
    term: SearchTerm
    raw_score: float  # distance: 0.0 = exact match, 1.0 = no similarity


def field_similarity(processed_query: str, value: str) -> float:
    """Similarity in [0, 1] between an already-processed query and a field value.

    Plain ratio covers typos, token-set ratio covers word reordering and a
    query whose words are a subset of the term. Partial (substring) credit
    is only given when the shorter side has at least ``MIN_PARTIAL_LENGTH``
    characters and is at least half as long as the other, so two- or
    three-letter overlaps such as "xyz" inside "galaxy" score nothing extra.
    """
    processed_value = utils.default_process(value)
    if not processed_query or not processed_value:
        return 0.0
    score = max(
        fuzz.ratio(processed_query, processed_value),
        fuzz.token_set_ratio(processed_query, processed_value),
    )
    shorter, longer = sorted((len(processed_query), len(processed_value)))
    if shorter >= MIN_PARTIAL_LENGTH and shorter * 2 >= longer:
        score = max(score, fuzz.partial_ratio(processed_query, processed_value) * PARTIAL_SCALE)
    return score / 100.0


class FuzzyMatcher:
    """Distance between a free-text query and catalog terms over three fields.

    Field distances are combined as a weighted geometric mean over the
    fields a term actually has, so one strong field (e.g. an alias hit)
    pulls the total close to zero while weak fields still count.
    """

    __slots__ = ("threshold",)

    TERM_WEIGHT = 0.5        # display text
    NORMALIZED_WEIGHT = 0.3  # normalized_term
    ALIAS_WEIGHT = 0.2       # best alias in metadata.aliases
    MIN_DISTANCE = 0.001     # floor per field so log() stays finite
    MIN_FIELD_SIMILARITY = 0.6

    def __init__(self, threshold: float = DEFAULT_THRESHOLD) -> None:
        self.threshold = threshold

    def match(self, query: str, terms: Iterable[SearchTerm]) -> list[FuzzyMatch]:
        """Score every term and keep those within the threshold.

        Unordered; each term id appears at most once. Empty query or empty
        catalog gives an empty list.
        """
        processed_query = utils.default_process(query or "")
        if not processed_query:
            return []

        matches: list[FuzzyMatch] = []
        seen: set[str] = set()
        for term in terms:
            if term.id in seen:
                continue
            seen.add(term.id)
            distance = self.distance(processed_query, term)
            if distance <= self.threshold:
                matches.append(FuzzyMatch(term=term, raw_score=distance))
        return matches

    def distance(self, processed_query: str, term: SearchTerm) -> float:
        if processed_query == utils.default_process(term.normalized_term or ""):
            return 0.0

        fields: list[tuple[float, list[str]]] = [
            (self.TERM_WEIGHT, [term.term]),
            (self.NORMALIZED_WEIGHT, [term.normalized_term]),
            (self.ALIAS_WEIGHT, term.aliases),
        ]

        log_sum = 0.0
        weight_sum = 0.0
        best = 0.0
        for weight, values in fields:
            values = [v for v in values if v]
            if not values:
                continue
            similarity = max(field_similarity(processed_query, v) for v in values)
            best = max(best, similarity)
            log_sum += weight * math.log(max(1.0 - similarity, self.MIN_DISTANCE))
            weight_sum += weight

        # At least one field has to resemble the query on its own
        if weight_sum == 0.0 or best < self.MIN_FIELD_SIMILARITY:
            return 1.0
        return round(min(math.exp(log_sum / weight_sum), 1.0), 4)
