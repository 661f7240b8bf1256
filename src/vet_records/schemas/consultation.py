"""
Consultation Pydantic schemas for input validation and serialization.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models.consultation import ConsultationState


class ConsultationBase(BaseModel):
    """Base Consultation schema with the scalar fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    name: str = Field(
        ..., description="Short title of the consultation", min_length=1, max_length=200
    )
    consultation_date: date = Field(..., description="Date of the consultation")
    anamnesis: str = Field(
        ..., description="Clinical history reported at the visit", min_length=1
    )
    observations: str = Field(
        ..., description="Veterinarian's observations", min_length=1
    )
    state: ConsultationState = Field(
        ConsultationState.SCHEDULED, description="Current state of the consultation"
    )
    cost: Optional[Decimal] = Field(
        None, description="Cost of the consultation", ge=0, max_digits=10, decimal_places=2
    )


class ConsultationCreate(ConsultationBase):
    """Schema for opening a consultation; pet and veterinarian are required."""

    pet_id: UUID = Field(..., description="UUID of the examined pet")
    veterinarian_id: UUID = Field(..., description="UUID of the attending veterinarian")


class ConsultationUpdate(ConsultationBase):
    """
    Schema for replacing a consultation's fields.

    Scalar fields are overwritten. The pet and veterinarian are reassigned
    only when a new id is supplied.
    """

    pet_id: Optional[UUID] = Field(None, description="UUID of the new pet")
    veterinarian_id: Optional[UUID] = Field(
        None, description="UUID of the new veterinarian"
    )


class ConsultationResponse(ConsultationBase):
    """Schema for consultation response data."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: UUID = Field(..., description="Consultation's unique identifier")
    pet_id: UUID = Field(..., description="UUID of the examined pet")
    veterinarian_id: UUID = Field(..., description="UUID of the attending veterinarian")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
