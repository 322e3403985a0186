"""Keyword-based intent classifier.

Rules are evaluated in `CLASSIFICATION_RULES` order and the first match wins, so a request that
mentions both "name" and "delete" (even as part of another word) is a name update.

Matching is plain substring containment. Whole-word matching is available behind the explicit
`word_boundaries` flag only.
"""

from __future__ import annotations

import re
from functools import lru_cache

from src.intent.dictionaries import ACTION_WORDS, CLASSIFICATION_RULES, KeywordRule
from src.intent.schema import Intent


@lru_cache(maxsize=None)
def _word_re(word: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(word)}\b")


def contains_keyword(text: str, word: str, *, word_boundaries: bool = False) -> bool:
    """Whether `word` occurs in `text` (as a substring, or as a whole word)."""

    if word_boundaries:
        return _word_re(word).search(text) is not None
    return word in text


def _rule_matches(text: str, rule: KeywordRule, *, word_boundaries: bool) -> bool:
    if not contains_keyword(text, rule.keyword, word_boundaries=word_boundaries):
        return False
    if not rule.needs_action_word:
        return True
    return any(
        contains_keyword(text, action, word_boundaries=word_boundaries) for action in ACTION_WORDS
    )


def classify_intent(text: str, *, word_boundaries: bool = False) -> Intent | None:
    """Classify a normalized request into an Intent.

    Returns:
        The intent of the first matching rule, or `None` if no rule matches.
    """

    for rule in CLASSIFICATION_RULES:
        if _rule_matches(text, rule, word_boundaries=word_boundaries):
            return Intent.for_type(rule.intent_type)
    return None
