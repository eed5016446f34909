"""Root conftest: shared test configuration and a throwaway SQLite pool."""

import os
import tempfile

import pytest

# Human-readable logs in test output
os.environ.setdefault("LOG_FORMAT", "text")
# The /uploads static mount reads this when campspot.main is first imported
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="campspot-uploads-")

from campspot.db.base import Base  # noqa: E402
from campspot.infrastructure.database import Database  # noqa: E402
import campspot.models  # noqa: E402,F401


@pytest.fixture
async def database(tmp_path):
    """File-backed SQLite (memory databases are per-connection) with the full schema."""
    db = Database(
        f"sqlite+aiosqlite:///{tmp_path / 'campspot.db'}", pool_size=5, pool_timeout=10,
    )
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.close()
