"""Text normalization for keyword-based intent parsing."""

from __future__ import annotations

import re

# ASCII word semantics: "'s" is only a possessive when no letter/digit follows it.
_POSSESSIVE_RE = re.compile(r"'s\b|’s\b", flags=re.ASCII)


def normalize_request(text: str | None) -> str:
    """Normalize a raw request for keyword matching.

    Normalization is intentionally minimal:
        - Lowercase.
        - Drop possessive suffixes (`'s` and `’s`), so "John's phone" becomes "john phone".
        - Trim surrounding whitespace.

    Punctuation and inner spacing are left untouched; value extraction depends on them.
    """

    value = (text or "").lower()
    value = _POSSESSIVE_RE.sub("", value)
    return value.strip()
