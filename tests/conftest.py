"""
Pytest configuration for PetAdopt API tests.

Every test gets a fresh SQLite database file (aiosqlite) with the schema
created from the ORM metadata, and an httpx client bound to an app
instance that uses it. No Redis: rate limiting is skipped unless a test
installs its own client on app.state.redis.
"""

import os
import uuid

# Must be set before petadopt.core.config is imported
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx
import pytest
import pytest_asyncio

from petadopt.core.database import Database
from petadopt.main import create_app


def pytest_configure(config):
    """Configure pytest-asyncio mode."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest_asyncio.fixture()
async def db(tmp_path):
    """Fresh database per test, schema created from the models."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'petadopt.db'}")
    await database.create_all()
    try:
        yield database
    finally:
        await database.dispose()


@pytest_asyncio.fixture()
async def session(db):
    """A session for direct service-level tests."""
    async with db.session_factory() as session:
        yield session


@pytest.fixture()
def app(db):
    return create_app(database=db)


@pytest_asyncio.fixture()
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def unique_email(prefix: str) -> str:
    """Generate a unique email so tests never collide."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register_org(
    client: httpx.AsyncClient,
    email: str | None = None,
    password: str = "secret123",
    name: str = "Happy Paws",
    city: str = "Sao Paulo",
) -> dict:
    """Register an org and return {"org": ..., "token": ...}."""
    resp = await client.post("/orgs", json={
        "name": name,
        "email": email or unique_email("org"),
        "password": password,
        "whatsapp": "+5511999990000",
        "address": {"city": city, "street": "Rua das Flores 10"},
    })
    assert resp.status_code == 201, f"Register failed: {resp.text}"
    return resp.json()


async def create_pet(
    client: httpx.AsyncClient,
    token: str,
    name: str = "Rex",
    photo_urls: list[str] | None = None,
    **attrs,
) -> dict:
    body = {
        "name": name,
        "photo_urls": photo_urls or ["https://example.com/rex.jpg"],
        **attrs,
    }
    resp = await client.post("/pets", json=body, headers=auth(token))
    assert resp.status_code == 201, f"Create pet failed: {resp.text}"
    return resp.json()
