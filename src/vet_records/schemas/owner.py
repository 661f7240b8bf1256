"""
Owner Pydantic schemas for input validation and serialization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class OwnerBase(BaseModel):
    """Base Owner schema with common fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    name: str = Field(..., description="Owner's first name", min_length=1, max_length=100)
    lastname: str = Field(
        ..., description="Owner's last name", min_length=1, max_length=100
    )
    dni: Optional[str] = Field(
        None, description="National identity document number", max_length=20
    )
    email: Optional[EmailStr] = Field(None, description="Contact email address")
    phone: Optional[str] = Field(None, description="Contact phone number", max_length=30)
    address: Optional[str] = Field(None, description="Postal address", max_length=255)

    @field_validator("dni", "phone", "address")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank optional strings as absent."""
        if v is not None and not v.strip():
            return None
        return v


class OwnerCreate(OwnerBase):
    """Schema for registering a new owner."""


class OwnerUpdate(OwnerBase):
    """Schema for replacing an owner's fields."""


class OwnerResponse(OwnerBase):
    """Schema for owner response data."""

    id: UUID = Field(..., description="Owner's unique identifier")
    email: Optional[str] = Field(None, description="Contact email address")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
