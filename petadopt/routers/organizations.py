"""
Organization endpoints.

Register, sessions (login) and the current org profile.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from petadopt.core.dependencies import get_current_identity, get_org_service
from petadopt.core.security import Identity
from petadopt.schemas.organization import (
    LoginRequest,
    OrganizationResponse,
    RegisterOrgRequest,
    RegisterOrgResponse,
    SessionResponse,
)
from petadopt.services.organization_service import OrganizationService

router = APIRouter()


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------

@router.post(
    "/orgs",
    response_model=RegisterOrgResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new organization",
)
async def register_org(
    data: RegisterOrgRequest,
    service: OrganizationService = Depends(get_org_service),
) -> RegisterOrgResponse:
    """
    Create a new organization account.

    - Email must be globally unique (409 otherwise)
    - Password must be at least 6 characters
    - Returns the org and an access token valid for 24 hours
    """
    return await service.register(data)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

@router.post(
    "/sessions",
    response_model=SessionResponse,
    summary="Login with email and password",
)
async def create_session(
    data: LoginRequest,
    service: OrganizationService = Depends(get_org_service),
) -> SessionResponse:
    return await service.authenticate(data)


# ---------------------------------------------------------------------------
# Me
# ---------------------------------------------------------------------------

@router.get(
    "/orgs/me",
    response_model=OrganizationResponse,
    summary="Get the authenticated organization",
)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    service: OrganizationService = Depends(get_org_service),
) -> OrganizationResponse:
    return await service.get_profile(identity.org_id)
