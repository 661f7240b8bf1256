"""
Pet Pydantic schemas for input validation and serialization.

This module contains Pydantic schemas for Pet records, including create,
update and response schemas.
"""

import re
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.pet import PetSex, PetSpecies


class PetBase(BaseModel):
    """Base Pet schema with common fields."""

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    name: str = Field(..., description="Pet's name", min_length=1, max_length=100)
    breed: Optional[str] = Field(None, description="Pet's breed", max_length=100)
    species: PetSpecies = Field(PetSpecies.DOG, description="Pet's species")
    birth_date: Optional[date] = Field(None, description="Pet's birth date")
    sex: PetSex = Field(..., description="Pet's sex")
    allergies: Optional[str] = Field(None, description="Known allergies")
    castrated: bool = Field(False, description="Whether the pet is spayed or neutered")
    active: bool = Field(True, description="Whether the pet is an active patient")
    details: Optional[str] = Field(None, description="Free-form notes about the pet")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate pet name."""
        # Allow letters, numbers, spaces, hyphens, apostrophes, and periods
        if not re.match(r"^[\w\s\-'.]+$", v):
            raise ValueError(
                "Pet name can only contain letters, numbers, spaces, hyphens, apostrophes, and periods"
            )
        return v

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v: Optional[date]) -> Optional[date]:
        """Validate birth date."""
        if v is not None and v > date.today():
            raise ValueError("Birth date cannot be in the future")
        return v


class PetCreate(PetBase):
    """Schema for registering a new pet."""

    owner_id: UUID = Field(..., description="UUID of the pet's owner")


class PetUpdate(PetBase):
    """
    Schema for replacing a pet's fields.

    ``owner_id`` reassigns the pet when supplied; when omitted the current
    owner is kept, since a pet can never be left without one.
    """

    owner_id: Optional[UUID] = Field(None, description="UUID of the new owner")


class PetResponse(PetBase):
    """Schema for pet response data."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: UUID = Field(..., description="Pet's unique identifier")
    owner_id: UUID = Field(..., description="UUID of the pet's owner")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
