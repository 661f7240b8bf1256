"""
Veterinarian Pydantic schemas for input validation and serialization.
"""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class VeterinarianBase(BaseModel):
    """Base Veterinarian schema with common fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    name: str = Field(
        ..., description="Veterinarian's first name", min_length=1, max_length=100
    )
    lastname: str = Field(
        ..., description="Veterinarian's last name", min_length=1, max_length=100
    )
    license_number: str = Field(
        ..., description="Professional license number", min_length=1, max_length=50
    )
    email: Optional[EmailStr] = Field(None, description="Contact email address")
    phone: Optional[str] = Field(None, description="Contact phone number", max_length=30)
    specialty: Optional[str] = Field(None, description="Primary specialty", max_length=100)

    @field_validator("license_number")
    @classmethod
    def validate_license_number(cls, v: str) -> str:
        """Normalize license numbers to upper case without inner spaces."""
        v = re.sub(r"\s+", "", v).upper()
        if not re.match(r"^[A-Z0-9\-]+$", v):
            raise ValueError(
                "License number can only contain letters, numbers, and hyphens"
            )
        return v


class VeterinarianCreate(VeterinarianBase):
    """Schema for registering a veterinarian."""


class VeterinarianUpdate(VeterinarianBase):
    """Schema for replacing a veterinarian's fields."""


class VeterinarianResponse(VeterinarianBase):
    """Schema for veterinarian response data."""

    id: UUID = Field(..., description="Veterinarian's unique identifier")
    email: Optional[str] = Field(None, description="Contact email address")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
