"""
Complementary study model for the vet-records package.

A complementary study (lab work, imaging, ...) may be ordered from a
consultation, a diagnosis or a hospitalization, or stand on its own. It has
at most one parent. The parent is stored in three nullable foreign key
columns guarded by a check constraint, and exposed to callers as a single
tagged ``StudyParent`` value.
"""

import enum
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import CheckConstraint, Date, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class StudyState(enum.Enum):
    """Enumeration of complementary study states."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class StudyParentKind(enum.Enum):
    """Kinds of record a complementary study can be attached to."""

    CONSULTATION = "consultation"
    DIAGNOSIS = "diagnosis"
    HOSPITALIZATION = "hospitalization"


# Foreign key column holding the parent id for each parent kind
PARENT_COLUMNS: Dict[StudyParentKind, str] = {
    StudyParentKind.CONSULTATION: "consultation_id",
    StudyParentKind.DIAGNOSIS: "diagnosis_id",
    StudyParentKind.HOSPITALIZATION: "hospitalization_id",
}


@dataclass(frozen=True)
class StudyParent:
    """Tagged reference to the single record a study is attached to."""

    kind: StudyParentKind
    id: uuid.UUID

    @property
    def column(self) -> str:
        """Name of the foreign key column that stores this parent."""
        return PARENT_COLUMNS[self.kind]


class ComplementaryStudy(BaseModel):
    """Complementary study with its result and optional attached file."""

    __tablename__ = "complementary_studies"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize ComplementaryStudy with default values."""
        if "state" not in kwargs:
            kwargs["state"] = StudyState.PENDING
        parent = kwargs.pop("parent", None)

        super().__init__(**kwargs)

        if parent is not None:
            self.attach_to(parent)

    study_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Type of study (e.g. 'blood panel', 'x-ray')",
    )

    examination_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="Date the study was performed"
    )

    cost: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True, comment="Cost of the study"
    )

    state: Mapped[StudyState] = mapped_column(
        Enum(StudyState),
        nullable=False,
        default=StudyState.PENDING,
        index=True,
        comment="Current state of the study",
    )

    result: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Result or report text"
    )

    study_file: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Location of the attached file returned by file storage",
    )

    consultation_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("consultations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="UUID of the parent consultation, if attached to one",
    )

    diagnosis_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("diagnoses.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="UUID of the parent diagnosis, if attached to one",
    )

    hospitalization_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("hospitalizations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="UUID of the parent hospitalization, if attached to one",
    )

    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN consultation_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN diagnosis_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN hospitalization_id IS NULL THEN 0 ELSE 1 END) <= 1",
            name="ck_complementary_studies_single_parent",
        ),
        CheckConstraint(
            "cost IS NULL OR cost >= 0", name="ck_complementary_studies_cost"
        ),
    )

    def __repr__(self) -> str:
        return f"<ComplementaryStudy(id={self.id}, study_type='{self.study_type}')>"

    @property
    def parent(self) -> Optional[StudyParent]:
        """The record this study is attached to, or None."""
        for kind, column in PARENT_COLUMNS.items():
            value = getattr(self, column)
            if value is not None:
                return StudyParent(kind=kind, id=value)
        return None

    def attach_to(self, parent: Optional[StudyParent]) -> None:
        """
        Replace the study's parent.

        Clears every parent column, then sets the one matching ``parent``.
        Passing None leaves the study unattached.
        """
        for column in PARENT_COLUMNS.values():
            setattr(self, column, None)
        if parent is not None:
            setattr(self, parent.column, parent.id)

    def detach(self) -> None:
        """Remove any parent link."""
        self.attach_to(None)
