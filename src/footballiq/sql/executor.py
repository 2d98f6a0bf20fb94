"""Read-only execution of user SQL against the football dataset."""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time as dt_time
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from footballiq.errors import SqlExecutionError


def _plain(value: Any) -> Any:
    """Convert driver values into JSON-friendly Python values."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (datetime, date, dt_time)):
        return value.isoformat()
    if isinstance(value, (bytes, memoryview)):
        return bytes(value).hex()
    return value


@dataclass
class QueryResult:
    columns: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    elapsed_ms: int = 0

    @property
    def truncated(self) -> bool:
        return self.row_count > len(self.rows)


class QueryExecutor:
    """Runs one statement per call inside a transaction that is always rolled back.

    On PostgreSQL the transaction is ``READ ONLY``, carries a
    ``statement_timeout`` and runs as ``role`` when one is given. On SQLite
    ``PRAGMA query_only`` is switched on for the duration of the statement.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        statement_timeout_ms: int = 5000,
        role: str | None = None,
    ) -> None:
        self.engine = engine
        self.statement_timeout_ms = statement_timeout_ms
        self.role = role or None

    @property
    def _is_sqlite(self) -> bool:
        return self.engine.dialect.name == "sqlite"

    async def _enter_read_only(self, conn: AsyncConnection) -> None:
        if self._is_sqlite:
            await conn.exec_driver_sql("PRAGMA query_only = ON")
        elif self.engine.dialect.name == "postgresql":
            await conn.exec_driver_sql("SET TRANSACTION READ ONLY")
            await conn.exec_driver_sql(f"SET LOCAL statement_timeout = {int(self.statement_timeout_ms)}")
            if self.role is not None:
                role = self.engine.dialect.identifier_preparer.quote(self.role)
                await conn.exec_driver_sql(f"SET LOCAL ROLE {role}")

    async def _leave_read_only(self, conn: AsyncConnection) -> None:
        if self._is_sqlite:
            await conn.exec_driver_sql("PRAGMA query_only = OFF")

    async def run(self, query: str, max_rows: int | None = None) -> QueryResult:
        """Execute ``query`` and keep at most ``max_rows`` rows (all when None).

        ``row_count`` is always the full number of rows the statement produced.

        Raises:
            SqlExecutionError: The database rejected or aborted the statement.
        """
        async with self.engine.connect() as conn:
            try:
                await self._enter_read_only(conn)
                started = time.perf_counter()
                result = await conn.exec_driver_sql(query)
                if not result.returns_rows:
                    return QueryResult(columns=[], elapsed_ms=int((time.perf_counter() - started) * 1000))
                columns = list(result.keys())
                rows: list[dict[str, Any]] = []
                count = 0
                for row in result:
                    count += 1
                    if max_rows is None or count <= max_rows:
                        rows.append({col: _plain(val) for col, val in zip(columns, row)})
                elapsed_ms = int((time.perf_counter() - started) * 1000)
            except DBAPIError as e:
                raise SqlExecutionError(str(e.orig)) from e
            finally:
                await self._leave_read_only(conn)
                await conn.rollback()
        return QueryResult(columns=columns, rows=rows, row_count=count, elapsed_ms=elapsed_ms)


async def grant_dataset_access(conn: AsyncConnection, role: str, tables: Iterable[str]) -> None:
    """Grant ``role`` read access to ``tables`` (PostgreSQL only)."""
    quote = conn.dialect.identifier_preparer.quote
    await conn.exec_driver_sql(f"GRANT USAGE ON SCHEMA public TO {quote(role)}")
    for table in tables:
        await conn.exec_driver_sql(f"GRANT SELECT ON {quote(table)} TO {quote(role)}")
