"""
Invoice Pydantic schemas for input validation and serialization.

The name snapshots and the total are optional on input. When an invoice is
linked to a consultation, missing values are filled from it.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class InvoiceBase(BaseModel):
    """Base Invoice schema with the scalar fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    invoice_date: date = Field(..., description="Date the invoice was issued")
    total_cost: Optional[Decimal] = Field(
        None, description="Total amount invoiced", ge=0, max_digits=10, decimal_places=2
    )
    veterinarian_name: Optional[str] = Field(None, max_length=200)
    owner_name: Optional[str] = Field(None, max_length=200)
    pet_name: Optional[str] = Field(None, max_length=100)


class InvoiceCreate(InvoiceBase):
    """Schema for issuing an invoice, optionally for a consultation."""

    consultation_id: Optional[UUID] = Field(
        None, description="UUID of the billed consultation"
    )


class InvoiceUpdate(InvoiceBase):
    """Schema for replacing an invoice; no consultation id unlinks it."""

    consultation_id: Optional[UUID] = Field(
        None, description="UUID of the billed consultation"
    )


class InvoiceResponse(BaseModel):
    """Schema for invoice response data."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Invoice's unique identifier")
    consultation_id: Optional[UUID] = None
    invoice_date: date
    total_cost: Decimal
    veterinarian_name: str
    owner_name: str
    pet_name: str
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
