"""Query Access Layer: execute(), pooling, graceful close and health checks.

Tests cover:
    - Rows come back as column -> value dicts; rowcount for writes
    - Values are bound, never interpolated
    - Driver errors propagate unwrapped
    - Callers beyond the pool size queue and still succeed
    - close() drains in-flight statements and refuses new ones
"""

import asyncio

import pytest
from sqlalchemy.exc import SQLAlchemyError

from campspot.db.base import Base
from campspot.infrastructure.database import Database, QueryResult
import campspot.infrastructure.database as db_module


async def _add_user(database, username, email):
    return await database.execute(
        "INSERT INTO users (username, email, password, role) VALUES (?, ?, ?, ?)",
        [username, email, "pw", "camper"],
    )


async def test_execute_returns_rows_as_dicts(database):
    await _add_user(database, "alice", "a@x.com")
    rows = await database.execute(
        "SELECT username, role FROM users WHERE email = ?", ["a@x.com"],
    )
    assert isinstance(rows, QueryResult)
    assert list(rows) == [{"username": "alice", "role": "camper"}]


async def test_execute_select_without_match_is_empty(database):
    rows = await database.execute("SELECT id FROM users WHERE email = ?", ["none"])
    assert len(rows) == 0
    assert not rows


async def test_execute_reports_rowcount_for_writes(database):
    await _add_user(database, "alice", "a@x.com")
    await _add_user(database, "bob", "b@x.com")
    result = await database.execute(
        "UPDATE users SET role = ? WHERE role = ?", ["owner", "camper"],
    )
    assert result.rowcount == 2
    assert list(result) == []


async def test_execute_binds_values_instead_of_interpolating(database):
    await _add_user(database, "alice", "a@x.com")
    rows = await database.execute(
        "SELECT id FROM users WHERE email = ?", ["' OR '1'='1"],
    )
    assert len(rows) == 0


async def test_execute_propagates_driver_errors(database):
    with pytest.raises(SQLAlchemyError):
        await database.execute("SELECT * FROM no_such_table")


async def test_execute_propagates_constraint_violations(database):
    await _add_user(database, "alice", "a@x.com")
    with pytest.raises(SQLAlchemyError):
        await _add_user(database, "alice2", "a@x.com")


async def test_execute_rejects_parameter_count_mismatch(database):
    with pytest.raises(ValueError):
        await database.execute("SELECT id FROM users WHERE email = ?", [])


async def test_callers_queue_when_pool_is_exhausted(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'tiny.db'}", pool_size=1)
    try:
        results = await asyncio.gather(*(
            db.execute("SELECT ? AS n", [i]) for i in range(5)
        ))
        assert [r[0]["n"] for r in results] == [0, 1, 2, 3, 4]
        assert db.engine.pool.size() == 1
    finally:
        await db.close()


async def test_failed_statement_returns_connection_to_pool(tmp_path):
    db = Database(
        f"sqlite+aiosqlite:///{tmp_path / 'tiny.db'}", pool_size=1, pool_timeout=2,
    )
    try:
        with pytest.raises(SQLAlchemyError):
            await db.execute("SELECT * FROM no_such_table")
        rows = await db.execute("SELECT 1 AS one")
        assert rows[0]["one"] == 1
    finally:
        await db.close()


async def test_close_waits_for_in_flight_statement(database):
    slow = asyncio.create_task(database.execute(
        "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c WHERE x < 200000) "
        "SELECT count(*) AS n FROM c",
    ))
    await asyncio.sleep(0)

    await database.close()

    assert slow.done()
    assert slow.result()[0]["n"] == 200000


async def test_execute_after_close_raises(database):
    await database.close()
    assert database.closed
    with pytest.raises(RuntimeError, match="closed"):
        await database.execute("SELECT 1")


async def test_close_is_idempotent(database):
    await database.close()
    await database.close()


async def test_health_check(database):
    assert await database.health_check() is True
    await database.close()
    assert await database.health_check() is False


async def test_init_get_and_close_db(tmp_path, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    with pytest.raises(RuntimeError, match="not initialized"):
        await db_module.get_db()

    db = db_module.init_db(f"sqlite+aiosqlite:///{tmp_path / 'app.db'}", pool_size=2)
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    assert await db_module.get_db() is db

    await db_module.close_db()
    assert db.closed
    assert db_module.db_manager is None
