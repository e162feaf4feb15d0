"""Text normalization shared by the catalog, the learning store and interest matching."""
from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: str) -> str:
    """Lower-case, trim and collapse inner whitespace.

    The normalized form is what uniqueness constraints and edge-weight keys
    are built on, so "  iPhone   15 " and "iphone 15" share one key.
    """
    return _WHITESPACE.sub(" ", value.strip()).lower()
