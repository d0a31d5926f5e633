"""
Pet business logic.

Handles pet CRUD, adoption status, photo sets and the city search.
Every mutation is authorized against the owning org before it touches a row.
"""

from __future__ import annotations

import logging
import math
from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from petadopt.core.database import run_in_transaction
from petadopt.core.exceptions import NotFoundError
from petadopt.models.base import utcnow
from petadopt.models.organization import Organization
from petadopt.models.pet import Environment, Level, Pet, PetSize, Species
from petadopt.models.photo import Photo
from petadopt.schemas.pet import (
    DeletePetResponse,
    PetCreateRequest,
    PetFilters,
    PetOrgResponse,
    PetPageResponse,
    PetResponse,
    PetUpdateRequest,
)
from petadopt.services.ownership import authorize_pet_owner

logger = logging.getLogger(__name__)

ORG_PETS_DEFAULT_LIMIT = 20

_ENUM_COLUMNS = {
    "species": Species,
    "size": PetSize,
    "energy_level": Level,
    "independence": Level,
    "environment": Environment,
}


def _coerce_attributes(attrs: dict[str, Any]) -> dict[str, Any]:
    """Turn validated request strings into column values."""
    values = dict(attrs)
    for field, enum_cls in _ENUM_COLUMNS.items():
        if values.get(field) is not None:
            values[field] = enum_cls(values[field])
    return values


def _enum_value(value: Any) -> str | None:
    return value.value if value is not None else None


def format_pet(pet: Pet) -> PetResponse:
    """Hydrate a pet loaded with its photos and organization."""
    urls = [photo.url for photo in pet.photos]
    return PetResponse(
        id=pet.id,
        name=pet.name,
        description=pet.description,
        species=pet.species.value,
        age=pet.age,
        size=_enum_value(pet.size),
        energy_level=_enum_value(pet.energy_level),
        independence=_enum_value(pet.independence),
        environment=_enum_value(pet.environment),
        adopted=pet.adopted,
        photos=urls,
        photo_urls=list(urls),
        org=PetOrgResponse.from_org(pet.organization) if pet.organization else None,
        created_at=pet.created_at,
        updated_at=pet.updated_at,
    )


def _page(items: list[PetResponse], total: int, page: int, limit: int) -> PetPageResponse:
    return PetPageResponse(
        items=items,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


class PetService:
    """Handles all pet operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # Create Pet
    # -----------------------------------------------------------------------

    async def create_pet(self, org_id: UUID, data: PetCreateRequest) -> PetResponse:
        """
        Create a pet and its photo set in one transaction.

        If any photo insert fails the pet insert is rolled back as well.
        """
        attrs = _coerce_attributes(data.attributes())
        urls = data.photo_url_strings()

        async def work() -> PetResponse:
            pet = Pet(org_id=org_id, **attrs)
            self.db.add(pet)
            await self.db.flush()
            await self._insert_photos(pet.id, urls)
            return format_pet(await self._load_pet(pet.id))

        created = await run_in_transaction(self.db, work)
        logger.info("Org %s created pet %s with %s photo(s)", org_id, created.id, len(urls))
        return created

    # -----------------------------------------------------------------------
    # Search
    # -----------------------------------------------------------------------

    async def list_pets(self, filters: PetFilters) -> PetPageResponse:
        """
        Search pets by city plus optional attribute filters.

        Stage one resolves the orgs whose serialized address contains the
        city; stage two filters and paginates their pets, newest first.
        """
        org_result = await self.db.execute(
            select(Organization.id).where(
                Organization.address.contains(filters.city, autoescape=True)
            )
        )
        org_ids = list(org_result.scalars().all())

        if not org_ids:
            return _page([], 0, filters.page, filters.limit)

        stmt = select(Pet).where(Pet.org_id.in_(org_ids))

        if filters.species is not None:
            stmt = stmt.where(Pet.species == Species(filters.species))
        if filters.size is not None:
            stmt = stmt.where(Pet.size == PetSize(filters.size))
        if filters.energy_level is not None:
            stmt = stmt.where(Pet.energy_level == Level(filters.energy_level))
        if filters.independence is not None:
            stmt = stmt.where(Pet.independence == Level(filters.independence))
        if filters.environment is not None:
            stmt = stmt.where(Pet.environment == Environment(filters.environment))
        if filters.adopted is not None:
            stmt = stmt.where(Pet.adopted == filters.adopted)

        return await self._paginate(stmt, filters.page, filters.limit)

    async def list_pets_by_org(
        self, org_id: UUID, page: int = 1, limit: int = ORG_PETS_DEFAULT_LIMIT
    ) -> PetPageResponse:
        """List one org's pets, newest first. Unknown orgs yield an empty page."""
        stmt = select(Pet).where(Pet.org_id == org_id)
        return await self._paginate(stmt, page, limit)

    # -----------------------------------------------------------------------
    # Get Pet
    # -----------------------------------------------------------------------

    async def get_pet(self, pet_id: UUID) -> PetResponse:
        return format_pet(await self._load_pet(pet_id))

    # -----------------------------------------------------------------------
    # Update Pet
    # -----------------------------------------------------------------------

    async def update_pet(
        self, org_id: UUID, pet_id: UUID, data: PetUpdateRequest
    ) -> PetResponse:
        """
        Apply a partial update.

        Only supplied attributes change. A supplied photo list replaces the
        existing photos wholesale inside the same transaction.
        """
        await authorize_pet_owner(self.db, pet_id, org_id)

        attrs = _coerce_attributes(data.attributes())
        urls = data.photo_url_strings()

        async def work() -> PetResponse:
            await self.db.execute(
                update(Pet).where(Pet.id == pet_id).values(**attrs, updated_at=utcnow())
            )
            if urls is not None:
                await self.db.execute(delete(Photo).where(Photo.pet_id == pet_id))
                await self._insert_photos(pet_id, urls)
            return format_pet(await self._load_pet(pet_id))

        updated = await run_in_transaction(self.db, work)
        logger.info(
            "Org %s updated pet %s (fields=%s, photos_replaced=%s)",
            org_id,
            pet_id,
            sorted(attrs),
            urls is not None,
        )
        return updated

    # -----------------------------------------------------------------------
    # Adopt Pet
    # -----------------------------------------------------------------------

    async def adopt_pet(self, org_id: UUID, pet_id: UUID, adopted: bool) -> None:
        await authorize_pet_owner(self.db, pet_id, org_id)

        await self.db.execute(update(Pet).where(Pet.id == pet_id).values(adopted=adopted))
        await self.db.commit()
        logger.info("Org %s set pet %s adopted=%s", org_id, pet_id, adopted)

    # -----------------------------------------------------------------------
    # Delete Pet
    # -----------------------------------------------------------------------

    async def delete_pet(self, org_id: UUID, pet_id: UUID) -> DeletePetResponse:
        """Delete a pet. Its photos go with it through the FK cascade."""
        await authorize_pet_owner(self.db, pet_id, org_id)

        await self.db.execute(delete(Pet).where(Pet.id == pet_id))
        await self.db.commit()
        logger.info("Org %s deleted pet %s", org_id, pet_id)
        return DeletePetResponse(success=True, message="Pet deleted successfully")

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    async def _insert_photos(self, pet_id: UUID, urls: list[str]) -> None:
        """Insert a photo set with a single bulk INSERT."""
        if not urls:
            return
        await self.db.execute(
            insert(Photo),
            [
                {"pet_id": pet_id, "url": url, "position": position}
                for position, url in enumerate(urls)
            ],
        )

    async def _load_pet(self, pet_id: UUID) -> Pet:
        result = await self.db.execute(
            select(Pet)
            .where(Pet.id == pet_id)
            .options(selectinload(Pet.photos), joinedload(Pet.organization))
            .execution_options(populate_existing=True)
        )
        pet = result.scalar_one_or_none()
        if pet is None:
            raise NotFoundError("Pet")
        return pet

    async def _paginate(self, stmt: Select, page: int, limit: int) -> PetPageResponse:
        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()

        result = await self.db.execute(
            stmt.options(selectinload(Pet.photos), joinedload(Pet.organization))
            .order_by(Pet.created_at.desc(), Pet.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        pets = list(result.scalars().unique().all())
        return _page([format_pet(p) for p in pets], total, page, limit)
