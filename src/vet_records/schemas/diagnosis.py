"""
Diagnosis Pydantic schemas for input validation and serialization.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DiagnosisBase(BaseModel):
    """Base Diagnosis schema with the scalar fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    name: str = Field(
        ..., description="Name of the diagnosed condition", min_length=1, max_length=200
    )
    description: Optional[str] = Field(None, description="Description of the diagnosis")
    diagnosis_date: Optional[date] = Field(
        None, description="Date the diagnosis was established"
    )
    observations: Optional[str] = Field(
        None, description="Additional clinical observations"
    )


class DiagnosisCreate(DiagnosisBase):
    """Schema for recording a diagnosis within a consultation."""

    consultation_id: UUID = Field(..., description="UUID of the owning consultation")


class DiagnosisUpdate(DiagnosisBase):
    """Schema for replacing a diagnosis; the consultation moves only if supplied."""

    consultation_id: Optional[UUID] = Field(
        None, description="UUID of the new owning consultation"
    )


class DiagnosisResponse(DiagnosisBase):
    """Schema for diagnosis response data."""

    id: UUID = Field(..., description="Diagnosis' unique identifier")
    consultation_id: UUID = Field(..., description="UUID of the owning consultation")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
