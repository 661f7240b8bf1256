"""
Treatment and Surgery Pydantic schemas for input validation and serialization.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TreatmentBase(BaseModel):
    """Base Treatment schema with the scalar fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    name: str = Field(
        ..., description="Name of the treatment", min_length=1, max_length=200
    )
    description: Optional[str] = Field(None, description="Treatment instructions")
    start_date: Optional[date] = Field(None, description="First day of treatment")
    end_date: Optional[date] = Field(None, description="Last day of treatment")
    duration: Optional[str] = Field(
        None, description="Human-readable duration", max_length=100
    )
    cost: Optional[Decimal] = Field(
        None, description="Cost of the treatment", ge=0, max_digits=10, decimal_places=2
    )

    @model_validator(mode="after")
    def validate_date_order(self) -> "TreatmentBase":
        """Validate that the treatment does not end before it starts."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class TreatmentCreate(TreatmentBase):
    """Schema for prescribing a treatment for a diagnosis."""

    diagnosis_id: UUID = Field(..., description="UUID of the treated diagnosis")


class TreatmentUpdate(BaseModel):
    """
    Schema for partially updating a treatment.

    Only the fields present in the input are applied; omitted fields keep
    their stored value.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration: Optional[str] = Field(None, max_length=100)
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    diagnosis_id: Optional[UUID] = Field(None, description="UUID of the new diagnosis")

    @field_validator("name")
    @classmethod
    def validate_name_present(cls, v: Optional[str]) -> str:
        """A supplied name may not be null."""
        if v is None:
            raise ValueError("Treatment name cannot be null")
        return v


class TreatmentResponse(TreatmentBase):
    """Schema for treatment response data."""

    id: UUID = Field(..., description="Treatment's unique identifier")
    diagnosis_id: UUID = Field(..., description="UUID of the treated diagnosis")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class SurgeryBase(BaseModel):
    """Base Surgery schema with the scalar fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    name: str = Field(
        ..., description="Name of the procedure", min_length=1, max_length=200
    )
    surgery_date: Optional[date] = Field(None, description="Date of the procedure")
    description: Optional[str] = Field(None, description="Procedure notes")
    cost: Optional[Decimal] = Field(
        None, description="Cost of the procedure", ge=0, max_digits=10, decimal_places=2
    )


class SurgeryCreate(SurgeryBase):
    """Schema for recording a surgery for a diagnosis."""

    diagnosis_id: UUID = Field(..., description="UUID of the diagnosis")


class SurgeryUpdate(SurgeryBase):
    """Schema for replacing a surgery; the diagnosis moves only if supplied."""

    diagnosis_id: Optional[UUID] = Field(None, description="UUID of the new diagnosis")


class SurgeryResponse(SurgeryBase):
    """Schema for surgery response data."""

    id: UUID = Field(..., description="Surgery's unique identifier")
    diagnosis_id: UUID = Field(..., description="UUID of the diagnosis")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
