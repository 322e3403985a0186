"""Fixed SQL identifiers and tokens used when rewriting templates.

Everything the builder emits that does not come from the template or the request is defined here.
"""

from __future__ import annotations

DEFAULT_TABLE = "users"

WHERE_COLUMN = "user_id"

USER_ID_PLACEHOLDER = "<USER_ID_HERE>"

# Name updates always target this column, whatever the template's first SET column is.
NAME_TARGET_COLUMN = "last_name"

NAME_SELECT_COLUMNS = "user_id, first_name, last_name"

NAME_CONCAT_EXPR = "CONCAT(first_name, ' ', last_name)"

INSERT_DEFAULT_VALUES = "default"

MATCH_ALL_CONDITION = "1=1"

BEGIN_STATEMENT = "BEGIN TRANSACTION;"

COMMIT_STATEMENT = "--COMMIT;"

ROLLBACK_STATEMENT = "--ROLLBACK;"
