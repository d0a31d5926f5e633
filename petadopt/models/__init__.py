"""
SQLAlchemy ORM models.

All models imported here to ensure they are registered with Base.metadata.
Import order matters: base models before dependent models.
"""

from petadopt.models.base import Base, TimestampMixin, UUIDMixin
from petadopt.models.organization import Organization
from petadopt.models.pet import Environment, Level, Pet, PetSize, Species
from petadopt.models.photo import Photo

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "Organization",
    "Pet",
    "Photo",
    "Species",
    "PetSize",
    "Level",
    "Environment",
]
