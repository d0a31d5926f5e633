"""
Organization business logic.

Handles registration, credential checks and the org profile.
Routers only handle HTTP concerns.
"""

from __future__ import annotations

import json
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.database import run_in_transaction
from petadopt.core.exceptions import (
    EmailInUseError,
    InvalidCredentialsError,
    NotFoundError,
)
from petadopt.core.security import create_access_token, hash_password, verify_password
from petadopt.models.organization import Organization
from petadopt.schemas.organization import (
    LoginRequest,
    OrganizationResponse,
    OrganizationSummary,
    RegisterOrgRequest,
    RegisterOrgResponse,
    SessionResponse,
)

logger = logging.getLogger(__name__)


class OrganizationService:
    """Handles all organization account operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # Register
    # -----------------------------------------------------------------------

    async def register(self, data: RegisterOrgRequest) -> RegisterOrgResponse:
        """
        Register a new organization.

        - Validates email uniqueness
        - Hashes password
        - Stores the address as JSON text
        - Issues an access token

        Raises EmailInUseError without writing anything if the email is taken.
        """
        email = data.email.lower()
        password_hash = hash_password(data.password)

        async def work() -> Organization:
            existing = await self.db.execute(
                select(Organization.id).where(Organization.email == email)
            )
            if existing.scalar_one_or_none() is not None:
                raise EmailInUseError()

            org = Organization(
                name=data.name,
                email=email,
                password_hash=password_hash,
                whatsapp=data.whatsapp,
                address=(
                    json.dumps(data.address, ensure_ascii=False)
                    if data.address is not None
                    else None
                ),
            )
            self.db.add(org)
            await self.db.flush()
            return org

        try:
            org = await run_in_transaction(self.db, work)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise EmailInUseError()

        logger.info("Registered org %s", org.id)
        return RegisterOrgResponse(
            org=OrganizationResponse.from_org(org),
            token=create_access_token(org.id, org.email),
        )

    # -----------------------------------------------------------------------
    # Login
    # -----------------------------------------------------------------------

    async def authenticate(self, data: LoginRequest) -> SessionResponse:
        """
        Authenticate an organization with email + password.

        Raises InvalidCredentialsError for an unknown email or a wrong
        password (never reveals which one).
        """
        result = await self.db.execute(
            select(Organization).where(Organization.email == data.email.lower())
        )
        org = result.scalar_one_or_none()

        if org is None or not verify_password(data.password, org.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        return SessionResponse(
            token=create_access_token(org.id, org.email),
            org=OrganizationSummary.model_validate(org),
        )

    # -----------------------------------------------------------------------
    # Profile
    # -----------------------------------------------------------------------

    async def get_profile(self, org_id: UUID) -> OrganizationResponse:
        """Return the org's public profile with its address parsed."""
        result = await self.db.execute(
            select(Organization).where(Organization.id == org_id)
        )
        org = result.scalar_one_or_none()

        if org is None:
            raise NotFoundError("Org")

        return OrganizationResponse.from_org(org)
