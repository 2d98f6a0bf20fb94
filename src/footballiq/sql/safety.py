"""Keyword and table policy applied to user SQL before it reaches the sandbox.

The keyword check is substring matching, not parsing. It rejects a keyword
anywhere in the text (string literals, comments and identifiers such as
``updated_at`` included) and can still be bypassed by anything the database
accepts that the check does not spell out. The read-only transaction opened
by :class:`footballiq.sql.executor.QueryExecutor` is the actual guard against
writes. On PostgreSQL that transaction also switches to ``sandbox_role``,
which can only read the football dataset; the table check below covers
SQLite, which has no roles.
"""

from __future__ import annotations

import re

from footballiq.db.models import GameAnswer, GameSession, Question, User
from footballiq.errors import UnsafeQueryError

BLOCKED_KEYWORDS: tuple[str, ...] = (
    "DROP",
    "DELETE",
    "UPDATE",
    "INSERT",
    "ALTER",
    "CREATE",
    "TRUNCATE",
    "EXEC",
    "EXECUTE",
)

# Application tables share the database with the dataset; user SQL never sees them.
PRIVATE_TABLES: tuple[str, ...] = (
    *(model.__tablename__ for model in (User, Question, GameSession, GameAnswer)),
    "alembic_version",
)

_PRIVATE_TABLE_RE = re.compile(r"\b(" + "|".join(PRIVATE_TABLES) + r")\b", re.IGNORECASE)


def check_query_safety(query: str) -> str:
    """Return the trimmed query or raise :class:`UnsafeQueryError`.

    The statement must start with ``SELECT`` (case-insensitive, after
    trimming), must not contain any of :data:`BLOCKED_KEYWORDS` and must not
    name any of :data:`PRIVATE_TABLES`.
    """
    normalized = query.strip().upper()
    if not normalized.startswith("SELECT"):
        msg = "Only SELECT queries allowed"
        raise UnsafeQueryError(msg)
    for keyword in BLOCKED_KEYWORDS:
        if keyword in normalized:
            msg = f"{keyword} not allowed"
            raise UnsafeQueryError(msg)
    private = _PRIVATE_TABLE_RE.search(query)
    if private is not None:
        msg = f"Table {private.group(1).lower()} not allowed"
        raise UnsafeQueryError(msg)
    return query.strip()
