"""SQL Builders: positional parameter binding and sparse UPDATE construction.

Invariants:
    - Values never appear in SQL text; every value travels as a bound parameter
    - Column names only come from a static field -> column mapping, never from input
    - An empty patch is a client error (MissingFieldsError), not a no-op UPDATE

Design Decisions:
    - Statements are written with `?` placeholders and rewritten to named binds
      (:p0, :p1, ...) so the same SQL runs on asyncpg and aiosqlite
"""

from collections.abc import Mapping, Sequence
from typing import Any

from campspot.core.errors import MissingFieldsError

PLACEHOLDER = "?"

# Single source of truth for which user fields a profile update may touch.
USER_PATCH_COLUMNS: dict[str, str] = {
    "username": "username",
    "email": "email",
    "role": "role",
}


def bind_positional(
    statement: str, parameters: Sequence[Any] = (),
) -> tuple[str, dict[str, Any]]:
    """Rewrite `?` placeholders to named binds and pair them with their values.

    Raises ValueError when the placeholder count and parameter count differ.
    """
    pieces = statement.split(PLACEHOLDER)
    expected = len(pieces) - 1
    if expected != len(parameters):
        raise ValueError(
            f"Statement has {expected} placeholder(s) but "
            f"{len(parameters)} parameter(s) were given",
        )
    binds = {f"p{i}": value for i, value in enumerate(parameters)}
    sql = pieces[0] + "".join(
        f":p{i}{piece}" for i, piece in enumerate(pieces[1:])
    )
    return sql, binds


def build_update(
    table: str,
    patch: Mapping[str, Any],
    columns: Mapping[str, str],
    key_column: str,
    key_value: Any,
    touch: str | None = "updated_at",
) -> tuple[str, list[Any]]:
    """Build `UPDATE table SET ... WHERE key = ?` from the supplied patch fields.

    Fields whose value is None count as not supplied. `touch` names a timestamp
    column set to CURRENT_TIMESTAMP on every update (None to skip).
    """
    unknown = sorted(set(patch) - set(columns))
    if unknown:
        raise ValueError(f"Unknown patch field(s): {', '.join(unknown)}")

    assignments: list[str] = []
    params: list[Any] = []
    for field_name, column in columns.items():
        value = patch.get(field_name)
        if value is None:
            continue
        assignments.append(f"{column} = {PLACEHOLDER}")
        params.append(value)

    if not assignments:
        raise MissingFieldsError(
            list(columns),
            message=f"At least one of {', '.join(columns)} is required",
        )

    if touch:
        assignments.append(f"{touch} = CURRENT_TIMESTAMP")
    params.append(key_value)
    sql = (
        f"UPDATE {table} SET {', '.join(assignments)} "
        f"WHERE {key_column} = {PLACEHOLDER}"
    )
    return sql, params
