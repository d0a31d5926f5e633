"""
Seed command tests.
"""

import pytest
from sqlalchemy import func, select

from petadopt.models import Organization, Pet, Photo
from petadopt.seed import SEED_ORG_EMAIL, SEED_PASSWORD, seed


async def count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_seed_creates_org_pet_and_photo(session):
    org = await seed(session)

    assert org.email == SEED_ORG_EMAIL
    assert await count(session, Organization) == 1
    assert await count(session, Pet) == 1
    assert await count(session, Photo) == 1


@pytest.mark.asyncio
async def test_seed_is_idempotent(session):
    first = await seed(session)
    second = await seed(session)

    assert first.id == second.id
    assert await count(session, Organization) == 1
    assert await count(session, Pet) == 1


@pytest.mark.asyncio
async def test_seed_org_can_log_in_and_is_searchable(client, session):
    await seed(session)

    login = await client.post(
        "/sessions", json={"email": SEED_ORG_EMAIL, "password": SEED_PASSWORD}
    )
    assert login.status_code == 200

    resp = await client.get("/pets", params={"city": "SeedCity"})
    items = resp.json()["items"]
    assert [p["name"] for p in items] == ["Rex"]
    assert items[0]["photos"] == ["https://placekitten.com/400/400"]
