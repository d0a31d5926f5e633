"""
Pet ORM model.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from petadopt.models.organization import Organization
    from petadopt.models.photo import Photo


class Species(str, enum.Enum):
    dog = "dog"
    cat = "cat"
    other = "other"


class PetSize(str, enum.Enum):
    small = "small"
    medium = "medium"
    large = "large"


class Level(str, enum.Enum):
    """Shared scale for energy level and independence."""

    low = "low"
    medium = "medium"
    high = "high"


class Environment(str, enum.Enum):
    apartment = "apartment"
    house = "house"
    both = "both"


def _enum(enum_cls: type[enum.Enum], name: str) -> Enum:
    return Enum(enum_cls, name=name, native_enum=False, length=20)


class Pet(Base, UUIDMixin, TimestampMixin):
    """A pet listed for adoption by exactly one organization."""

    __tablename__ = "pets"

    org_id: Mapped[UUID] = mapped_column(
        ForeignKey("orgs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    species: Mapped[Species] = mapped_column(
        _enum(Species, "pet_species"), nullable=False, default=Species.dog
    )
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    size: Mapped[PetSize | None] = mapped_column(_enum(PetSize, "pet_size"), nullable=True)
    energy_level: Mapped[Level | None] = mapped_column(
        _enum(Level, "pet_energy_level"), nullable=True
    )
    independence: Mapped[Level | None] = mapped_column(
        _enum(Level, "pet_independence"), nullable=True
    )
    environment: Mapped[Environment | None] = mapped_column(
        _enum(Environment, "pet_environment"), nullable=True
    )
    adopted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    # Relationships
    organization: Mapped[Organization] = relationship("Organization", back_populates="pets")
    photos: Mapped[list[Photo]] = relationship(
        "Photo",
        back_populates="pet",
        order_by="Photo.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Pet id={self.id} name={self.name!r} org_id={self.org_id}>"
