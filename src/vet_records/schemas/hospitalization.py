"""
Hospitalization Pydantic schemas for input validation and serialization.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class HospitalizationBase(BaseModel):
    """Base Hospitalization schema with the scalar fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    admission_date: date = Field(..., description="Date the pet was admitted")
    discharge_date: Optional[date] = Field(None, description="Date the pet was discharged")
    reason: Optional[str] = Field(None, description="Reason for admission")
    observations: Optional[str] = Field(None, description="Notes recorded during the stay")
    cost: Optional[Decimal] = Field(
        None, description="Cost of the stay", ge=0, max_digits=10, decimal_places=2
    )

    @model_validator(mode="after")
    def validate_discharge_date(self) -> "HospitalizationBase":
        """Validate that discharge does not precede admission."""
        if self.discharge_date and self.discharge_date < self.admission_date:
            raise ValueError("Discharge date cannot be before admission date")
        return self


class HospitalizationCreate(HospitalizationBase):
    """Schema for admitting a pet."""

    pet_id: UUID = Field(..., description="UUID of the hospitalized pet")


class HospitalizationUpdate(HospitalizationBase):
    """Schema for replacing a hospitalization; the pet changes only if supplied."""

    pet_id: Optional[UUID] = Field(None, description="UUID of the new pet")


class HospitalizationResponse(HospitalizationBase):
    """Schema for hospitalization response data."""

    id: UUID = Field(..., description="Hospitalization's unique identifier")
    pet_id: UUID = Field(..., description="UUID of the hospitalized pet")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
