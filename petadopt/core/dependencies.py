"""
FastAPI dependency injection functions.

Provides the caller identity (optional or required) and service instances.
"""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.database import get_db
from petadopt.core.exceptions import UnauthorizedError
from petadopt.core.security import Identity
from petadopt.services.organization_service import OrganizationService
from petadopt.services.pet_service import PetService

# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

def get_optional_identity(request: Request) -> Identity | None:
    """
    Identity resolved by BearerIdentityMiddleware, or None.

    Used by public routes; an invalid token simply yields None.
    """
    return getattr(request.state, "identity", None)


def get_current_identity(
    identity: Identity | None = Depends(get_optional_identity),
) -> Identity:
    """
    Identity of the calling organization (required).

    Raises 401 if no valid bearer token accompanied the request.
    """
    if identity is None:
        raise UnauthorizedError()
    return identity


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

def get_org_service(db: AsyncSession = Depends(get_db)) -> OrganizationService:
    """Dependency that constructs OrganizationService."""
    return OrganizationService(db=db)


def get_pet_service(db: AsyncSession = Depends(get_db)) -> PetService:
    """Dependency that constructs PetService."""
    return PetService(db=db)
