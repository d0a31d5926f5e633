"""
Photo ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.models.base import Base, UUIDMixin

if TYPE_CHECKING:
    from petadopt.models.pet import Pet


class Photo(Base, UUIDMixin):
    """A photo URL belonging to a pet. Lives and dies with its pet."""

    __tablename__ = "photos"

    pet_id: Mapped[UUID] = mapped_column(
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    pet: Mapped[Pet] = relationship("Pet", back_populates="photos")

    def __repr__(self) -> str:
        return f"<Photo id={self.id} pet_id={self.pet_id} position={self.position}>"
