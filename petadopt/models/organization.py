"""
Organization ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from petadopt.models.pet import Pet


class Organization(Base, UUIDMixin, TimestampMixin):
    """An adoption organization: the account that owns and publishes pets."""

    __tablename__ = "orgs"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    whatsapp: Mapped[str] = mapped_column(String(30), nullable=False)
    # Free-form address serialized as JSON text; searched by substring.
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    pets: Mapped[list[Pet]] = relationship(
        "Pet",
        back_populates="organization",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Organization id={self.id} email={self.email!r}>"
