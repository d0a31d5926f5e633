"""
Organization schemas.

Request/response models for registration, sessions and the org profile.
"""

from __future__ import annotations

import json
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


def parse_address(value: Any) -> Any:
    """Stored addresses are JSON text; hand back the structured value."""
    if isinstance(value, str):
        if not value:
            return None
        return json.loads(value)
    return value


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------

class RegisterOrgRequest(BaseModel):
    """Request body for POST /orgs."""

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    whatsapp: str = Field(min_length=8, max_length=30)
    address: Any = None

    @field_validator("address")
    @classmethod
    def address_must_be_serializable(cls, v: Any) -> Any:
        try:
            json.dumps(v)
        except (TypeError, ValueError):
            raise ValueError("Address must be JSON-serializable")
        return v


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

class LoginRequest(BaseModel):
    """Request body for POST /sessions."""

    email: EmailStr
    password: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class OrganizationResponse(BaseModel):
    """Organization profile. The address is returned parsed."""

    id: UUID
    name: str
    email: str
    whatsapp: str
    address: Any = None

    @classmethod
    def from_org(cls, org: Any) -> OrganizationResponse:
        """Build from an Organization row, decoding the stored address."""
        return cls(
            id=org.id,
            name=org.name,
            email=org.email,
            whatsapp=org.whatsapp,
            address=parse_address(org.address),
        )


class OrganizationSummary(BaseModel):
    """Compact org info returned alongside a session token."""

    id: UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class RegisterOrgResponse(BaseModel):
    """Response for POST /orgs."""

    org: OrganizationResponse
    token: str


class SessionResponse(BaseModel):
    """Response for POST /sessions."""

    token: str
    org: OrganizationSummary
