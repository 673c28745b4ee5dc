"""Helpers for interpreting database integrity errors.

PostgreSQL reports unique violations with SQLSTATE 23505 and a detail
line such as ``Key (email)=(a@b.io) already exists``. SQLite only names
the column: ``UNIQUE constraint failed: users.email``.
"""

import re
from typing import Optional

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

_PG_DETAIL_PATTERN = re.compile(
    r"Key \((?P<field>[^)]+)\)=\((?P<value>.*?)\) already exists",
)
_SQLITE_UNIQUE_PATTERN = re.compile(r"UNIQUE constraint failed: \w+\.(?P<field>\w+)")


def _sqlstate(error: IntegrityError) -> Optional[str]:
    orig = error.orig
    for attr in ("pgcode", "sqlstate"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    # asyncpg errors are wrapped by the SQLAlchemy adapter
    cause = getattr(orig, "__cause__", None)
    code = getattr(cause, "sqlstate", None)
    return str(code) if code else None


def parse_unique_violation(
    error: IntegrityError,
) -> Optional[tuple[str, Optional[str]]]:
    """Return ``(field, value)`` for a unique violation, else None.

    The value is None when the driver does not report it.
    """
    message = str(error.orig) if error.orig is not None else str(error)

    match = _PG_DETAIL_PATTERN.search(message)
    if match:
        return match.group("field"), match.group("value")

    match = _SQLITE_UNIQUE_PATTERN.search(message)
    if match:
        return match.group("field"), None

    if _sqlstate(error) == UNIQUE_VIOLATION:
        return "unknown", None
    return None


def is_foreign_key_violation(error: IntegrityError) -> bool:
    if _sqlstate(error) == FOREIGN_KEY_VIOLATION:
        return True
    message = str(error.orig) if error.orig is not None else str(error)
    return (
        "FOREIGN KEY constraint failed" in message
        or "foreign key" in message.lower()
    )
