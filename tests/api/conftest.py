"""API test fixtures: FastAPI test client plus seeded rows.

Invariants:
    - get_db is overridden to the per-test SQLite pool from the root conftest
    - get_settings is overridden so uploads land in the directory the /uploads
      mount serves; that directory is emptied before each test
    - Seed fixtures insert through the same raw SQL path the routes use
"""

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from campspot.config import Settings, get_settings
from campspot.infrastructure.database import get_db
from campspot.main import app, settings as app_settings


@pytest.fixture
def upload_dir():
    directory = Path(app_settings.upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    for stale in directory.iterdir():
        stale.unlink()
    return directory


@pytest.fixture
async def client(database, upload_dir):
    """FastAPI test client with DB and settings dependencies overridden."""
    async def override_get_db():
        return database

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: Settings(
        _env_file=None, upload_dir=str(upload_dir),
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(database):
    """Factory: insert a user and return its id, username, email and role."""
    async def _make(username, email, password="secret", role="camper"):
        await database.execute(
            "INSERT INTO users (username, email, password, role) VALUES (?, ?, ?, ?)",
            [username, email, password, role],
        )
        rows = await database.execute(
            "SELECT id, username, email, role FROM users WHERE email = ?", [email],
        )
        return rows[0]
    return _make


@pytest.fixture
def make_spot(database):
    """Factory: insert a camping spot and return its id."""
    async def _make(owner_id, name="Pine Hollow", price=25.0):
        await database.execute(
            "INSERT INTO camping_spots "
            "(name, description, location, price_per_night, image_path, owner_user_id) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            [name, "Shady pitch by the creek", "Lake District", price, None, owner_id],
        )
        rows = await database.execute(
            "SELECT id FROM camping_spots WHERE name = ?", [name],
        )
        return rows[0]["id"]
    return _make


@pytest.fixture
async def owner(make_user):
    return await make_user(
        "olivia", "olivia@example.com", password="trail-mix", role="owner",
    )


@pytest.fixture
async def camper(make_user):
    return await make_user("carl", "carl@example.com")


@pytest.fixture
async def spot_id(make_spot, owner):
    return await make_spot(owner["id"])
