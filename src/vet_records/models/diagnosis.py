"""
Diagnosis model for the vet-records package.

A diagnosis belongs to exactly one consultation. A treatment, a surgery and
any number of complementary studies may reference it.
"""

import uuid
from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Diagnosis(BaseModel):
    """Diagnosis reached during a consultation."""

    __tablename__ = "diagnoses"

    consultation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("consultations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="UUID of the consultation where the diagnosis was made",
    )

    name: Mapped[str] = mapped_column(
        String(200), nullable=False, comment="Name of the diagnosed condition"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Description of the diagnosis"
    )

    diagnosis_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="Date the diagnosis was established"
    )

    observations: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Additional clinical observations"
    )

    def __repr__(self) -> str:
        return f"<Diagnosis(id={self.id}, consultation_id={self.consultation_id})>"
