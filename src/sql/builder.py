"""Template-driven SQL script builder.

The builder rewrites a library template with values extracted from a request and wraps the result
in a transaction shell whose COMMIT/ROLLBACK are commented out. Scripts are drafts for a human to
review; nothing here executes SQL or escapes literals.

Every step is a pure string function over the template text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.intent.schema import ExtractedValues, IntentType
from src.sql.columns import (
    BEGIN_STATEMENT,
    COMMIT_STATEMENT,
    DEFAULT_TABLE,
    INSERT_DEFAULT_VALUES,
    MATCH_ALL_CONDITION,
    NAME_CONCAT_EXPR,
    NAME_SELECT_COLUMNS,
    NAME_TARGET_COLUMN,
    ROLLBACK_STATEMENT,
    USER_ID_PLACEHOLDER,
    WHERE_COLUMN,
)

_TABLE_RE = re.compile(
    r"\b(update|insert|delete)\s+(?:(?:into|from)\s+)?([^\s(;]+)",
    flags=re.IGNORECASE,
)
_SET_RE = re.compile(r"\bset\s+([^;]+?)(?=where|\s*;)", flags=re.IGNORECASE)
_WHERE_RE = re.compile(r"where\s+(.+?)(?=\s*;|$)", flags=re.IGNORECASE)
_VALUES_RE = re.compile(r"values\s*\(([^)]+)\)", flags=re.IGNORECASE)
_LITERAL_USER_ID_RE = re.compile(r"user_id = \d+")
_REPEATED_TERMINATOR_RE = re.compile(r";{2,}")
_TRAILING_TERMINATOR_RE = re.compile(r"\s*;\s*$")
_TRANSACTION_CONTROL_RE = re.compile(
    r"(?:--[ \t]*)?\b(?:begin(?:[ \t]+transaction)?|start[ \t]+transaction|commit|rollback)"
    r"[ \t]*;[ \t]*\n?",
    flags=re.IGNORECASE,
)


@dataclass(frozen=True)
class TemplateParts:
    """Structural pieces recovered from a template."""

    table: str
    columns: tuple[str, ...]
    has_set: bool


def _assignment_re(column: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(column)}\s*=\s*['\"]?[^'\"]*['\"]?", flags=re.IGNORECASE)


def parse_template(template: str) -> TemplateParts:
    """Recover table name and SET columns; missing pieces fall back to defaults."""

    table_match = _TABLE_RE.search(template)
    table = table_match.group(2) if table_match else DEFAULT_TABLE

    set_match = _SET_RE.search(template)
    columns: tuple[str, ...] = ()
    if set_match:
        columns = tuple(
            clause.strip().split("=")[0].strip().lower() for clause in set_match.group(1).split(",")
        )
    return TemplateParts(table=table, columns=columns, has_set=set_match is not None)


def target_column(parts: TemplateParts, intent_type: IntentType) -> str:
    """First SET column, or the intent type when the template has none."""

    if parts.columns and parts.columns[0]:
        return parts.columns[0]
    return intent_type.value


def build_where_clause(user_id: str | None) -> str:
    return f"{WHERE_COLUMN} = {user_id or USER_ID_PLACEHOLDER}"


def strip_transaction_control(template: str) -> str:
    """Drop BEGIN/COMMIT/ROLLBACK statements so the builder's shell is the only one."""

    return _TRANSACTION_CONTROL_RE.sub("", template)


def rewrite_mutation(
        template: str,
        parts: TemplateParts,
        intent_type: IntentType,
        values: ExtractedValues,
        where_clause: str,
) -> str:
    """Substitute extracted values into the template's mutation statement."""

    new_value = values.new_value or ""
    if parts.has_set:
        if intent_type == IntentType.name:
            column = NAME_TARGET_COLUMN
        else:
            column = target_column(parts, intent_type)
        assignment = f"{column} = '{new_value}'"
        mutation = _assignment_re(column).sub(lambda _m: assignment, template, count=1)
    elif intent_type == IntentType.delete:
        mutation = _WHERE_RE.sub(lambda _m: f"WHERE {where_clause}", template, count=1)
    elif intent_type == IntentType.insert:
        row = values.new_value or INSERT_DEFAULT_VALUES
        mutation = _VALUES_RE.sub(lambda _m: f"VALUES ({row})", template, count=1)
    else:
        mutation = template

    mutation = _LITERAL_USER_ID_RE.sub(lambda _m: where_clause, mutation, count=1)
    mutation = _REPEATED_TERMINATOR_RE.sub(";", mutation)
    return _TRAILING_TERMINATOR_RE.sub(";", mutation)


def build_diagnostic_selects(
        parts: TemplateParts,
        intent_type: IntentType,
        values: ExtractedValues,
        where_clause: str,
) -> tuple[str, str | None]:
    """SELECTs that help a reviewer locate the affected rows.

    Returns:
        `(before, after)`; `after` is only produced for name updates, where the row can be looked
        up by both the old and the new name.
    """

    if intent_type == IntentType.name:
        prefix = f"SELECT {NAME_SELECT_COLUMNS} FROM {parts.table} WHERE {NAME_CONCAT_EXPR} LIKE"
        return (
            f"{prefix} '%{values.current_value}%';",
            f"{prefix} '%{values.new_value}%';",
        )

    if intent_type in {IntentType.delete, IntentType.insert}:
        selected = "*"
    else:
        selected = f"{WHERE_COLUMN}, {target_column(parts, intent_type)}"
    condition = MATCH_ALL_CONDITION if USER_ID_PLACEHOLDER in where_clause else where_clause
    return f"SELECT {selected} FROM {parts.table} WHERE {condition};", None


def build_script(template: str, intent_type: IntentType, values: ExtractedValues) -> str:
    """Build the reviewed-draft script for a matched template."""

    template = strip_transaction_control(template)
    parts = parse_template(template)
    where_clause = build_where_clause(values.user_id)

    mutation = rewrite_mutation(template, parts, intent_type, values, where_clause)
    select_before, select_after = build_diagnostic_selects(parts, intent_type, values, where_clause)

    # BEGIN, SELECT before, mutation, SELECT after (name updates only), COMMIT, ROLLBACK.
    lines = ["", BEGIN_STATEMENT, select_before, mutation]
    if select_after is not None:
        lines.append(select_after)
    lines.extend([COMMIT_STATEMENT, ROLLBACK_STATEMENT])
    return "\n".join(lines)
