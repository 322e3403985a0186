"""Intent and extracted-value models (Pydantic).

These models are the contract between the keyword classifier/value extractor and the template
script builder. They are immutable once created.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

NO_MATCH_SCRIPT = "/* No match found */"


class IntentType(StrEnum):
    """Which kind of mutation the request describes."""

    name = "name"
    phone = "phone"
    email = "email"
    status = "status"
    delete = "delete"
    insert = "insert"


class Action(StrEnum):
    """SQL mutation verb implied by an intent type."""

    update = "update"
    delete = "delete"
    insert = "insert"


ACTION_BY_TYPE: dict[IntentType, Action] = {
    IntentType.name: Action.update,
    IntentType.phone: Action.update,
    IntentType.email: Action.update,
    IntentType.status: Action.update,
    IntentType.delete: Action.delete,
    IntentType.insert: Action.insert,
}

UPDATE_TYPES: frozenset[IntentType] = frozenset(
    t for t, action in ACTION_BY_TYPE.items() if action == Action.update
)


class Intent(BaseModel):
    """A classified `(type, action)` pair."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: IntentType
    action: Action

    @model_validator(mode="after")
    def validate_action(self) -> Intent:
        """Reject pairs whose action does not belong to the type."""

        if ACTION_BY_TYPE[self.type] != self.action:
            raise ValueError(f"action={self.action} is not valid for type={self.type}")
        return self

    @classmethod
    def for_type(cls, intent_type: IntentType) -> Intent:
        return cls(type=intent_type, action=ACTION_BY_TYPE[intent_type])


class ExtractedValues(BaseModel):
    """Literal values pulled out of a request.

    Empty strings are stored as `None` so that "absent" has exactly one representation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    current_value: str | None = None
    new_value: str | None = None
    user_id: str | None = None

    @field_validator("current_value", "new_value", "user_id")
    @classmethod
    def empty_is_absent(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value or None


class GenerationResult(BaseModel):
    """Pipeline output: a script draft plus a human-readable explanation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    script: str
    explanation: str

    @property
    def matched(self) -> bool:
        """Whether a real script was produced (as opposed to the no-match sentinel)."""

        return self.script != NO_MATCH_SCRIPT

    @classmethod
    def no_match(cls, explanation: str) -> GenerationResult:
        return cls(script=NO_MATCH_SCRIPT, explanation=explanation)
