"""Keyword dictionaries for the mutation-request classifier and value extractor.

These mappings drive the rules-based parser and should remain small and deterministic. Rule order
matters: the first matching rule wins.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.intent.schema import IntentType

ACTION_WORDS: tuple[str, ...] = ("update", "change")

USER_ID_MARKER = "for user"

TO_TOKEN = "to"

# Leading words that never belong to a current value ("update the name ...").
FILLER_WORDS: frozenset[str] = frozenset({"the", "of"})

# Word that may directly follow a field keyword ("phone number", "email address").
KEYWORD_QUALIFIERS: dict[IntentType, str] = {
    IntentType.phone: "number",
    IntentType.email: "address",
}


@dataclass(frozen=True)
class KeywordRule:
    """`keyword` must be present; if `needs_action_word`, one of `ACTION_WORDS` too."""

    intent_type: IntentType
    keyword: str
    needs_action_word: bool


CLASSIFICATION_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(IntentType.name, "name", needs_action_word=True),
    KeywordRule(IntentType.phone, "phone", needs_action_word=True),
    KeywordRule(IntentType.email, "email", needs_action_word=True),
    KeywordRule(IntentType.status, "status", needs_action_word=True),
    KeywordRule(IntentType.delete, "delete", needs_action_word=False),
    KeywordRule(IntentType.insert, "insert", needs_action_word=False),
)

# Which extracted values must be present before a script can be built.
REQUIRED_VALUES: dict[IntentType, tuple[str, ...]] = {
    IntentType.name: ("current_value", "new_value"),
    IntentType.phone: ("current_value", "new_value"),
    IntentType.email: ("current_value", "new_value"),
    IntentType.status: ("current_value", "new_value"),
    IntentType.delete: ("current_value",),
    IntentType.insert: ("new_value",),
}
