"""
Pet model for the vet-records package.

This module contains the Pet SQLAlchemy model. Every pet is owned by exactly
one Owner; consultations and hospitalizations reference the pet by id.
"""

import enum
import uuid
from datetime import date
from typing import Any, Optional

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class PetSpecies(enum.Enum):
    """Enumeration of pet species handled by the practice."""

    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    RODENT = "rodent"
    REPTILE = "reptile"
    OTHER = "other"


class PetSex(enum.Enum):
    """Enumeration of pet sexes."""

    MALE = "male"
    FEMALE = "female"


class Pet(BaseModel):
    """
    Pet record with identification and basic care data.

    The owner reference is required and must resolve to an existing Owner
    when the pet is created or reassigned.
    """

    __tablename__ = "pets"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize Pet with default values."""
        if "species" not in kwargs:
            kwargs["species"] = PetSpecies.DOG
        if "castrated" not in kwargs:
            kwargs["castrated"] = False
        if "active" not in kwargs:
            kwargs["active"] = True

        super().__init__(**kwargs)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("owners.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="UUID of the pet's owner",
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="Pet's name")

    breed: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, comment="Pet's breed"
    )

    species: Mapped[PetSpecies] = mapped_column(
        Enum(PetSpecies), nullable=False, index=True, comment="Pet's species"
    )

    birth_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="Pet's birth date"
    )

    sex: Mapped[PetSex] = mapped_column(
        Enum(PetSex), nullable=False, comment="Pet's sex"
    )

    allergies: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Known allergies"
    )

    castrated: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the pet is spayed or neutered",
    )

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the pet is still a patient of the practice",
    )

    details: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Free-form notes about the pet"
    )

    __table_args__ = (Index("idx_pets_owner_name", "owner_id", "name"),)

    def __repr__(self) -> str:
        """String representation of the Pet model."""
        return f"<Pet(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"

    @property
    def age_in_years(self) -> Optional[int]:
        """Calculate pet's age in whole years from the birth date."""
        if self.birth_date is None:
            return None
        today = date.today()
        age = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            age -= 1
        return max(0, age)
