"""Error taxonomy shared by services and routers.

Services raise these; routers translate them into HTTP status codes.
"""
from __future__ import annotations


class SearchFallbackError(Exception):
    """Base class for all engine errors."""


class ValidationError(SearchFallbackError):
    """Malformed input rejected at the service boundary. No partial effect."""


class NotFoundError(SearchFallbackError):
    """A referenced entity (e.g. a selected search term) does not exist."""


class StorageError(SearchFallbackError):
    """The underlying store failed (connection lost, constraint engine error...)."""


class DispatchError(SearchFallbackError):
    """The notification channel failed to deliver a message."""
