"""
Consultation model for the vet-records package.

A consultation is a single visit of a pet to a veterinarian. It always
references one Pet and one Veterinarian. Diagnoses, complementary studies
and the (optional) invoice point back at the consultation through their
own foreign keys.
"""

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import CheckConstraint, Date, Enum, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class ConsultationState(enum.Enum):
    """Enumeration of consultation states."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Consultation(BaseModel):
    """Clinical consultation record."""

    __tablename__ = "consultations"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize Consultation with default values."""
        if "state" not in kwargs:
            kwargs["state"] = ConsultationState.SCHEDULED

        super().__init__(**kwargs)

    pet_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("pets.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="UUID of the examined pet",
    )

    veterinarian_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("veterinarians.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="UUID of the attending veterinarian",
    )

    name: Mapped[str] = mapped_column(
        String(200), nullable=False, comment="Short title of the consultation"
    )

    consultation_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True, comment="Date of the consultation"
    )

    anamnesis: Mapped[str] = mapped_column(
        Text, nullable=False, comment="Clinical history reported at the visit"
    )

    observations: Mapped[str] = mapped_column(
        Text, nullable=False, comment="Veterinarian's observations"
    )

    state: Mapped[ConsultationState] = mapped_column(
        Enum(ConsultationState),
        nullable=False,
        default=ConsultationState.SCHEDULED,
        index=True,
        comment="Current state of the consultation",
    )

    cost: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True, comment="Cost of the consultation"
    )

    __table_args__ = (
        CheckConstraint("cost IS NULL OR cost >= 0", name="ck_consultations_cost"),
        Index("idx_consultations_pet_date", "pet_id", "consultation_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Consultation(id={self.id}, pet_id={self.pet_id}, "
            f"veterinarian_id={self.veterinarian_id}, state='{self.state.value}')>"
        )

    @property
    def is_closed(self) -> bool:
        """Whether the consultation reached a terminal state."""
        return self.state in (ConsultationState.COMPLETED, ConsultationState.CANCELLED)
