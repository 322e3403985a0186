"""Positional value extraction from a normalized mutation request.

Extraction is first-occurrence splitting, not parsing:
    - `user_id` is whatever follows "for user";
    - current/new values are read from the text before "for user" using the `to` token and the
      intent keyword as anchors;
    - any value that ends up empty is absent.
"""

from __future__ import annotations

import re

from src.intent.dictionaries import (
    FILLER_WORDS,
    KEYWORD_QUALIFIERS,
    REQUIRED_VALUES,
    TO_TOKEN,
    USER_ID_MARKER,
)
from src.intent.schema import ExtractedValues, Intent, IntentType

# Only the first action word is removed, and it may be part of a longer word.
_ACTION_WORD_RE = re.compile(r"(update|change)")


def _strip_action_word(text: str) -> str:
    return _ACTION_WORD_RE.sub("", text, count=1).strip()


def _strip_filler(text: str, qualifier: str | None = None) -> str:
    tokens = text.split(" ")
    while tokens and not tokens[0]:
        tokens.pop(0)
    if qualifier and tokens and tokens[0] == qualifier:
        tokens.pop(0)
    while tokens and (tokens[0] in FILLER_WORDS or not tokens[0]):
        tokens.pop(0)
    return " ".join(tokens).strip()


def _segment_after(text: str, marker: str) -> str | None:
    """Text between the first and second occurrence of `marker` (or the end)."""

    parts = text.split(marker)
    if len(parts) < 2:
        return None
    return parts[1].strip()


def _token_index(tokens: list[str], token: str) -> int:
    try:
        return tokens.index(token)
    except ValueError:
        return -1


def _tokens_after(tokens: list[str], idx: int) -> str | None:
    if idx < 0 or idx >= len(tokens) - 1:
        return None
    return " ".join(tokens[idx + 1:]).strip()


def _extract_name(region: str) -> tuple[str | None, str | None]:
    tokens = region.split(" ")
    name_idx = _token_index(tokens, "name")
    to_idx = _token_index(tokens, TO_TOKEN)

    current = None
    if name_idx > 0:
        current = _strip_filler(_strip_action_word(" ".join(tokens[:name_idx])))
    if not current and 0 <= name_idx < to_idx:
        # "update the name john doe to jane doe"
        current = _strip_filler(" ".join(tokens[name_idx + 1:to_idx]))

    new = _tokens_after(tokens, to_idx) if to_idx > 0 else None
    return current or None, new


def _extract_field(region: str, intent_type: IntentType) -> tuple[str | None, str | None]:
    keyword = intent_type.value
    tokens = region.split(" ")
    to_idx = _token_index(tokens, TO_TOKEN)
    if to_idx <= 0:
        return None, None

    before_to = " ".join(tokens[:to_idx]).strip()
    head, sep, tail = before_to.partition(keyword)
    current = _strip_filler(_strip_action_word(head))
    if not current and sep:
        # "update phone 555-1111 to 555-2222"
        current = _strip_filler(tail.strip(), KEYWORD_QUALIFIERS.get(intent_type))

    new = " ".join(tokens[to_idx + 1:]).strip()
    return current or None, new or None


def extract_values(text: str, intent: Intent) -> ExtractedValues:
    """Extract `current_value`, `new_value` and `user_id` from a normalized request."""

    region = text.split(USER_ID_MARKER)[0].strip()
    current_value = new_value = None

    if intent.type == IntentType.name:
        current_value, new_value = _extract_name(region)
    elif intent.type in {IntentType.phone, IntentType.email, IntentType.status}:
        current_value, new_value = _extract_field(region, intent.type)
    elif intent.type == IntentType.delete:
        current_value = _segment_after(region, "delete")
    elif intent.type == IntentType.insert:
        new_value = _segment_after(region, "insert")

    return ExtractedValues(
        current_value=current_value,
        new_value=new_value,
        user_id=_segment_after(text, USER_ID_MARKER),
    )


def missing_values(values: ExtractedValues, intent_type: IntentType) -> list[str]:
    """Names of the values required by `intent_type` that were not extracted."""

    return [field for field in REQUIRED_VALUES[intent_type] if getattr(values, field) is None]
