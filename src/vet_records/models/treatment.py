"""
Treatment and Surgery models for the vet-records package.

Both are one-per-diagnosis follow-ups: the ``diagnosis_id`` column is unique
on each table, so a diagnosis has at most one treatment and one surgery.
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Treatment(BaseModel):
    """Treatment prescribed for a diagnosis."""

    __tablename__ = "treatments"

    diagnosis_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("diagnoses.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
        comment="UUID of the treated diagnosis",
    )

    name: Mapped[str] = mapped_column(
        String(200), nullable=False, comment="Name of the treatment"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Treatment instructions"
    )

    start_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="First day of treatment"
    )

    end_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="Last day of treatment"
    )

    duration: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, comment="Human-readable duration (e.g. '10 days')"
    )

    cost: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True, comment="Cost of the treatment"
    )

    __table_args__ = (
        CheckConstraint("cost IS NULL OR cost >= 0", name="ck_treatments_cost"),
        CheckConstraint(
            "end_date IS NULL OR start_date IS NULL OR end_date >= start_date",
            name="ck_treatments_date_order",
        ),
    )

    def __repr__(self) -> str:
        return f"<Treatment(id={self.id}, diagnosis_id={self.diagnosis_id})>"


class Surgery(BaseModel):
    """Surgical procedure performed for a diagnosis."""

    __tablename__ = "surgeries"

    diagnosis_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("diagnoses.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
        comment="UUID of the diagnosis that required the surgery",
    )

    name: Mapped[str] = mapped_column(
        String(200), nullable=False, comment="Name of the procedure"
    )

    surgery_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="Date of the procedure"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Procedure notes"
    )

    cost: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True, comment="Cost of the procedure"
    )

    __table_args__ = (
        CheckConstraint("cost IS NULL OR cost >= 0", name="ck_surgeries_cost"),
    )

    def __repr__(self) -> str:
        return f"<Surgery(id={self.id}, diagnosis_id={self.diagnosis_id})>"
