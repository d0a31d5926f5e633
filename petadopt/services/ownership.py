"""
Ownership authorization for pet mutations.

Existence is always resolved before ownership, so the error a caller sees
is deterministic: 404 for a missing pet, 403 for somebody else's pet.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.exceptions import ForbiddenError, NotFoundError
from petadopt.models.pet import Pet

logger = logging.getLogger(__name__)


async def authorize_pet_owner(db: AsyncSession, pet_id: UUID, caller_id: UUID) -> UUID:
    """
    Check that caller_id owns pet_id.

    Returns the owning org id.
    Raises NotFoundError if the pet does not exist, ForbiddenError if it
    belongs to another organization.
    """
    result = await db.execute(select(Pet.org_id).where(Pet.id == pet_id))
    owner_id = result.scalar_one_or_none()

    if owner_id is None:
        raise NotFoundError("Pet")

    if owner_id != caller_id:
        logger.info("Org %s denied access to pet %s owned by %s", caller_id, pet_id, owner_id)
        raise ForbiddenError("You are not the owner of this pet")

    return owner_id
