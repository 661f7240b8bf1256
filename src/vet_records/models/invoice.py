"""
Invoice model for the vet-records package.

An invoice stores a total and name snapshots taken when it was issued, so it
stays readable after the consultation it billed is removed. The link to the
consultation is optional and one-to-one (``consultation_id`` is unique).
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Invoice(BaseModel):
    """Invoice issued for a consultation."""

    __tablename__ = "invoices"

    consultation_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("consultations.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
        comment="UUID of the billed consultation",
    )

    invoice_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True, comment="Date the invoice was issued"
    )

    total_cost: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, comment="Total amount invoiced"
    )

    veterinarian_name: Mapped[str] = mapped_column(
        String(200), nullable=False, comment="Veterinarian name at issue time"
    )

    owner_name: Mapped[str] = mapped_column(
        String(200), nullable=False, comment="Owner name at issue time"
    )

    pet_name: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True, comment="Pet name at issue time"
    )

    __table_args__ = (
        CheckConstraint("total_cost >= 0", name="ck_invoices_total_cost"),
    )

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, consultation_id={self.consultation_id})>"
