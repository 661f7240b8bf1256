"""
Hospitalization model for the vet-records package.

A hospitalization is an in-patient stay of a pet. Complementary studies
ordered during the stay reference it through ``hospitalization_id``.
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Hospitalization(BaseModel):
    """In-patient stay of a pet."""

    __tablename__ = "hospitalizations"

    pet_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("pets.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="UUID of the hospitalized pet",
    )

    admission_date: Mapped[date] = mapped_column(
        Date, nullable=False, comment="Date the pet was admitted"
    )

    discharge_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="Date the pet was discharged"
    )

    reason: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Reason for admission"
    )

    observations: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Notes recorded during the stay"
    )

    cost: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True, comment="Cost of the stay"
    )

    __table_args__ = (
        CheckConstraint(
            "discharge_date IS NULL OR discharge_date >= admission_date",
            name="ck_hospitalizations_discharge_after_admission",
        ),
        CheckConstraint("cost IS NULL OR cost >= 0", name="ck_hospitalizations_cost"),
    )

    def __repr__(self) -> str:
        return f"<Hospitalization(id={self.id}, pet_id={self.pet_id})>"

    @property
    def is_discharged(self) -> bool:
        """Whether the pet has left the hospital."""
        return self.discharge_date is not None
