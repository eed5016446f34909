"""Query Access Layer: bounded async connection pool plus one execute() primitive.

Invariants:
    - Every statement is parameterized; values are bound, never formatted into SQL
    - Each execute() checks out one connection, runs one statement in its own
      autocommitted unit, and returns the connection on success or failure
    - Pool never grows past pool_size (max_overflow=0); callers queue for a
      free connection up to pool_timeout seconds
    - Driver exceptions propagate unchanged (no retry, no wrapping): callers classify
    - close() refuses new statements, waits for in-flight ones, then disposes the pool

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - No transaction spans more than one statement; multi-statement sequences in
      the routes are deliberately non-atomic
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from campspot.core.sql_builder import bind_positional

logger = logging.getLogger(__name__)


class QueryResult(Sequence):
    """Rows returned by a statement (each a column -> value dict) plus rowcount."""

    def __init__(self, rows: list[dict[str, Any]], rowcount: int = -1):
        self.rows = rows
        self.rowcount = rowcount

    def __getitem__(self, index):
        return self.rows[index]

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"QueryResult(rows={self.rows!r}, rowcount={self.rowcount})"


class Database:
    """Pooled database access with graceful shutdown and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 10, pool_timeout: float = 300.0,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=0,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._closed = False
        self._in_flight = 0
        self._drained = asyncio.Event()
        self._drained.set()

    @property
    def closed(self) -> bool:
        return self._closed

    async def execute(
        self, statement: str, parameters: Sequence[Any] = (),
    ) -> QueryResult:
        """Run one parameterized statement (`?` placeholders) and return its rows."""
        if self._closed:
            raise RuntimeError("Database pool is closed")
        sql, binds = bind_positional(statement, parameters)

        self._in_flight += 1
        self._drained.clear()
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(text(sql), binds)
                rows = (
                    [dict(row) for row in result.mappings()]
                    if result.returns_rows else []
                )
                return QueryResult(rows, result.rowcount)
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._drained.set()

    async def close(self) -> None:
        """Drain in-flight statements and close every pooled connection."""
        if self._closed:
            return
        self._closed = True
        if self._in_flight:
            logger.info(f"Waiting for {self._in_flight} in-flight statement(s)")
        await self._drained.wait()
        await self.engine.dispose()
        logger.info("Database pool closed")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness checks)."""
        try:
            await self.execute("SELECT 1")
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False


# Singleton (initialized on startup)
db_manager: Database | None = None


def init_db(database_url: str, **kwargs) -> Database:
    global db_manager
    db_manager = Database(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.close()
        db_manager = None


async def get_db() -> Database:
    """FastAPI dependency for the process-wide pool."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
