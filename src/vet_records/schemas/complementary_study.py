"""
Complementary study Pydantic schemas for input validation and serialization.

A study names its parent through three optional id fields. At most one of
them may be set; the ``parent`` property turns that choice into a single
tagged ``StudyParent``.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from ..models.complementary_study import StudyParent, StudyParentKind, StudyState


class FileUpload(BaseModel):
    """Raw file content supplied alongside a study."""

    content: bytes = Field(b"", description="File bytes")
    filename: str = Field(..., description="Original file name", min_length=1)
    content_type: Optional[str] = Field(None, description="MIME type, if known")

    @property
    def is_empty(self) -> bool:
        """An upload with no bytes counts as no file."""
        return len(self.content) == 0


class ComplementaryStudyBase(BaseModel):
    """Base ComplementaryStudy schema with the scalar fields."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    study_type: str = Field(
        ..., description="Type of study", min_length=1, max_length=100
    )
    examination_date: Optional[date] = Field(
        None, description="Date the study was performed"
    )
    cost: Optional[Decimal] = Field(
        None, description="Cost of the study", ge=0, max_digits=10, decimal_places=2
    )
    state: StudyState = Field(StudyState.PENDING, description="Current state")
    result: Optional[str] = Field(None, description="Result or report text")


class _StudyParentFields(BaseModel):
    consultation_id: Optional[UUID] = Field(
        None, description="UUID of the parent consultation"
    )
    diagnosis_id: Optional[UUID] = Field(None, description="UUID of the parent diagnosis")
    hospitalization_id: Optional[UUID] = Field(
        None, description="UUID of the parent hospitalization"
    )

    @model_validator(mode="after")
    def validate_single_parent(self):
        """Validate that at most one parent id is supplied."""
        supplied = [
            value
            for value in (self.consultation_id, self.diagnosis_id, self.hospitalization_id)
            if value is not None
        ]
        if len(supplied) > 1:
            raise ValueError(
                "A study can be attached to at most one of consultation, "
                "diagnosis or hospitalization"
            )
        return self

    @property
    def parent(self) -> Optional[StudyParent]:
        """The requested parent, or None for a standalone study."""
        if self.consultation_id is not None:
            return StudyParent(StudyParentKind.CONSULTATION, self.consultation_id)
        if self.diagnosis_id is not None:
            return StudyParent(StudyParentKind.DIAGNOSIS, self.diagnosis_id)
        if self.hospitalization_id is not None:
            return StudyParent(StudyParentKind.HOSPITALIZATION, self.hospitalization_id)
        return None


class ComplementaryStudyCreate(ComplementaryStudyBase, _StudyParentFields):
    """Schema for ordering a complementary study."""


class ComplementaryStudyUpdate(ComplementaryStudyBase, _StudyParentFields):
    """
    Schema for replacing a study's fields.

    The parent is optional: supplying no parent id detaches the study.
    """


class ComplementaryStudyResponse(ComplementaryStudyBase):
    """Schema for complementary study response data."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: UUID = Field(..., description="Study's unique identifier")
    study_file: Optional[str] = Field(None, description="Location of the attached file")
    consultation_id: Optional[UUID] = None
    diagnosis_id: Optional[UUID] = None
    hospitalization_id: Optional[UUID] = None
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @computed_field
    @property
    def parent_kind(self) -> Optional[str]:
        """Kind of the record this study is attached to, if any."""
        if self.consultation_id is not None:
            return StudyParentKind.CONSULTATION.value
        if self.diagnosis_id is not None:
            return StudyParentKind.DIAGNOSIS.value
        if self.hospitalization_id is not None:
            return StudyParentKind.HOSPITALIZATION.value
        return None
