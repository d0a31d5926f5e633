"""
Pet endpoints.

Public search and detail; create, update, adopt and delete for the owning org.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Response, status

from petadopt.core.dependencies import get_current_identity, get_pet_service
from petadopt.core.security import Identity
from petadopt.schemas.pet import (
    ENVIRONMENT_PATTERN,
    LEVEL_PATTERN,
    SIZE_PATTERN,
    SPECIES_PATTERN,
    AdoptPetRequest,
    DeletePetResponse,
    PetCreateRequest,
    PetFilters,
    PetPageResponse,
    PetResponse,
    PetUpdateRequest,
)
from petadopt.services.pet_service import ORG_PETS_DEFAULT_LIMIT, PetService

router = APIRouter()


# ---------------------------------------------------------------------------
# Create Pet
# ---------------------------------------------------------------------------

@router.post(
    "/pets",
    response_model=PetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a pet with its photos",
)
async def create_pet(
    data: PetCreateRequest,
    identity: Identity = Depends(get_current_identity),
    service: PetService = Depends(get_pet_service),
) -> PetResponse:
    return await service.create_pet(identity.org_id, data)


# ---------------------------------------------------------------------------
# Search Pets
# ---------------------------------------------------------------------------

@router.get(
    "/pets",
    response_model=PetPageResponse,
    summary="Search pets in a city",
)
async def list_pets(
    city: str = Query(..., min_length=2),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=100),
    species: str | None = Query(default=None, pattern=SPECIES_PATTERN),
    size: str | None = Query(default=None, pattern=SIZE_PATTERN),
    energy_level: str | None = Query(default=None, pattern=LEVEL_PATTERN),
    independence: str | None = Query(default=None, pattern=LEVEL_PATTERN),
    environment: str | None = Query(default=None, pattern=ENVIRONMENT_PATTERN),
    adopted: bool | None = Query(default=None),
    service: PetService = Depends(get_pet_service),
) -> PetPageResponse:
    """
    List pets of organizations whose address mentions `city`.

    All other filters are optional and combined with AND.
    Results are newest first.
    """
    filters = PetFilters(
        city=city,
        page=page,
        limit=limit,
        species=species,
        size=size,
        energy_level=energy_level,
        independence=independence,
        environment=environment,
        adopted=adopted,
    )
    return await service.list_pets(filters)


# ---------------------------------------------------------------------------
# Get Pet
# ---------------------------------------------------------------------------

@router.get(
    "/pets/{pet_id}",
    response_model=PetResponse,
    summary="Get pet detail",
)
async def get_pet(
    pet_id: UUID,
    service: PetService = Depends(get_pet_service),
) -> PetResponse:
    return await service.get_pet(pet_id)


# ---------------------------------------------------------------------------
# Adopt Pet
# ---------------------------------------------------------------------------

@router.patch(
    "/pets/{pet_id}/adopt",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Mark a pet as adopted (or not)",
)
async def adopt_pet(
    pet_id: UUID,
    data: AdoptPetRequest | None = Body(default=None),
    identity: Identity = Depends(get_current_identity),
    service: PetService = Depends(get_pet_service),
) -> Response:
    """Without a body the pet is marked adopted. Owner only."""
    adopted = data.adopted if data is not None else True
    await service.adopt_pet(identity.org_id, pet_id, adopted)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Update Pet
# ---------------------------------------------------------------------------

@router.patch(
    "/pets/{pet_id}",
    response_model=PetResponse,
    summary="Update pet",
)
async def update_pet(
    pet_id: UUID,
    data: PetUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    service: PetService = Depends(get_pet_service),
) -> PetResponse:
    return await service.update_pet(identity.org_id, pet_id, data)


# ---------------------------------------------------------------------------
# Delete Pet
# ---------------------------------------------------------------------------

@router.delete(
    "/pets/{pet_id}",
    response_model=DeletePetResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete a pet and its photos",
)
async def delete_pet(
    pet_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: PetService = Depends(get_pet_service),
) -> DeletePetResponse:
    return await service.delete_pet(identity.org_id, pet_id)


# ---------------------------------------------------------------------------
# Org Pets
# ---------------------------------------------------------------------------

@router.get(
    "/orgs/{org_id}/pets",
    response_model=PetPageResponse,
    summary="List an organization's pets",
)
async def list_org_pets(
    org_id: UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ORG_PETS_DEFAULT_LIMIT, ge=1, le=100),
    service: PetService = Depends(get_pet_service),
) -> PetPageResponse:
    return await service.list_pets_by_org(org_id, page, limit)
