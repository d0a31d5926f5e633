"""
Seed the database with a sample organization and pet.

Usage:
    python -m petadopt.seed [--reset]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.config import settings
from petadopt.core.database import Database, run_in_transaction
from petadopt.core.security import hash_password
from petadopt.models import Level, Organization, Pet, PetSize, Photo, Species

logger = logging.getLogger(__name__)

SEED_ORG_EMAIL = "seed@example.com"
SEED_PASSWORD = "123456"


async def seed(session: AsyncSession) -> Organization:
    """
    Create the seed org with one pet and photo in a single transaction.

    Returns the existing org untouched if it was seeded before.
    """
    result = await session.execute(
        select(Organization).where(Organization.email == SEED_ORG_EMAIL)
    )
    existing = result.scalar_one_or_none()
    if existing is not None:
        logger.info("Seed org already present (%s), skipping", existing.id)
        return existing

    async def work() -> Organization:
        org = Organization(
            name="Seed Org",
            email=SEED_ORG_EMAIL,
            password_hash=hash_password(SEED_PASSWORD),
            whatsapp="+5511999999999",
            address=json.dumps({"city": "SeedCity", "street": "Seed Street 1"}, ensure_ascii=False),
        )
        session.add(org)
        await session.flush()

        pet = Pet(
            org_id=org.id,
            name="Rex",
            species=Species.dog,
            description="Friendly seed dog",
            age=3,
            size=PetSize.medium,
            energy_level=Level.medium,
        )
        session.add(pet)
        await session.flush()

        await session.execute(
            insert(Photo),
            [{"pet_id": pet.id, "url": "https://placekitten.com/400/400", "position": 0}],
        )
        return org

    org = await run_in_transaction(session, work)
    logger.info("Seeded org %s", org.id)
    return org


async def main(reset: bool = False) -> None:
    database = Database(str(settings.DATABASE_URL), echo=settings.DEBUG)
    try:
        if reset:
            await database.clear()
        async with database.session_factory() as session:
            await seed(session)
    finally:
        await database.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the PetAdopt database")
    parser.add_argument("--reset", action="store_true", help="delete all rows first")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    asyncio.run(main(reset=args.reset))
