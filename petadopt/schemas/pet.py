"""
Pet schemas.

Request/response models for pet CRUD, adoption and search endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from petadopt.schemas.organization import parse_address

SPECIES_PATTERN = "^(dog|cat|other)$"
SIZE_PATTERN = "^(small|medium|large)$"
LEVEL_PATTERN = "^(low|medium|high)$"
ENVIRONMENT_PATTERN = "^(apartment|house|both)$"

# Attribute columns a client may set directly.
PET_ATTRIBUTES = (
    "name",
    "description",
    "species",
    "age",
    "size",
    "energy_level",
    "independence",
    "environment",
)


# ---------------------------------------------------------------------------
# Pet Create
# ---------------------------------------------------------------------------

class PetCreateRequest(BaseModel):
    """Request body for POST /pets."""

    name: str = Field(min_length=2, max_length=100)
    description: str | None = None
    species: str = Field(default="dog", pattern=SPECIES_PATTERN)
    age: int | None = Field(default=None, ge=0, le=30)
    size: str | None = Field(default=None, pattern=SIZE_PATTERN)
    energy_level: str | None = Field(default=None, pattern=LEVEL_PATTERN)
    independence: str | None = Field(default=None, pattern=LEVEL_PATTERN)
    environment: str | None = Field(default=None, pattern=ENVIRONMENT_PATTERN)
    photo_urls: list[HttpUrl] = Field(min_length=1, max_length=10)

    def attributes(self) -> dict[str, Any]:
        return {field: getattr(self, field) for field in PET_ATTRIBUTES}

    def photo_url_strings(self) -> list[str]:
        return [str(url) for url in self.photo_urls]


# ---------------------------------------------------------------------------
# Pet Update
# ---------------------------------------------------------------------------

class PetUpdateRequest(BaseModel):
    """
    Request body for PATCH /pets/{pet_id}.

    Omitted (or null) fields leave the stored value untouched. A photo_urls
    list, even an empty one, replaces the whole photo set.
    """

    name: str | None = Field(default=None, min_length=2, max_length=100)
    description: str | None = None
    species: str | None = Field(default=None, pattern=SPECIES_PATTERN)
    age: int | None = Field(default=None, ge=0, le=30)
    size: str | None = Field(default=None, pattern=SIZE_PATTERN)
    energy_level: str | None = Field(default=None, pattern=LEVEL_PATTERN)
    independence: str | None = Field(default=None, pattern=LEVEL_PATTERN)
    environment: str | None = Field(default=None, pattern=ENVIRONMENT_PATTERN)
    photo_urls: list[HttpUrl] | None = Field(default=None, max_length=10)

    def attributes(self) -> dict[str, Any]:
        return {
            field: getattr(self, field)
            for field in PET_ATTRIBUTES
            if getattr(self, field) is not None
        }

    def photo_url_strings(self) -> list[str] | None:
        if self.photo_urls is None:
            return None
        return [str(url) for url in self.photo_urls]


# ---------------------------------------------------------------------------
# Adopt
# ---------------------------------------------------------------------------

class AdoptPetRequest(BaseModel):
    """Optional body for PATCH /pets/{pet_id}/adopt."""

    adopted: bool = True


# ---------------------------------------------------------------------------
# Search filters
# ---------------------------------------------------------------------------

class PetFilters(BaseModel):
    """Validated query for GET /pets. Every attribute filter is an equality match."""

    city: str = Field(min_length=2)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1, le=100)
    species: str | None = Field(default=None, pattern=SPECIES_PATTERN)
    size: str | None = Field(default=None, pattern=SIZE_PATTERN)
    energy_level: str | None = Field(default=None, pattern=LEVEL_PATTERN)
    independence: str | None = Field(default=None, pattern=LEVEL_PATTERN)
    environment: str | None = Field(default=None, pattern=ENVIRONMENT_PATTERN)
    adopted: bool | None = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class PetOrgResponse(BaseModel):
    """Public owner summary embedded in every pet."""

    id: UUID
    name: str
    whatsapp: str
    email: str
    address: Any = None

    @classmethod
    def from_org(cls, org: Any) -> PetOrgResponse:
        return cls(
            id=org.id,
            name=org.name,
            whatsapp=org.whatsapp,
            email=org.email,
            address=parse_address(org.address),
        )


class PetResponse(BaseModel):
    """A fully hydrated pet."""

    id: UUID
    name: str
    description: str | None
    species: str
    age: int | None
    size: str | None
    energy_level: str | None
    independence: str | None
    environment: str | None
    adopted: bool
    photos: list[str]
    photo_urls: list[str]
    org: PetOrgResponse | None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class PetPageResponse(BaseModel):
    """One page of pets plus the full match count."""

    items: list[PetResponse]
    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)


class DeletePetResponse(BaseModel):
    success: bool
    message: str
