"""Transcript normalization for intent matching.

The normalized form drives classification. The raw transcript is kept
alongside it for entity extraction, where digits and casing matter.
"""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")


def normalize(raw: str) -> str:
    """Lower-case, trim, and collapse internal whitespace."""
    return _WHITESPACE.sub(" ", raw).strip().lower()
