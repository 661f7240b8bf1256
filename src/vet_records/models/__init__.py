"""
Database models for the vet-records package.

This module contains SQLAlchemy models for every clinical record kept by the
practice.
"""

# Base model will be imported by all other models
from .base import Base, BaseModel
from .complementary_study import (
    PARENT_COLUMNS,
    ComplementaryStudy,
    StudyParent,
    StudyParentKind,
    StudyState,
)
from .consultation import Consultation, ConsultationState
from .diagnosis import Diagnosis
from .hospitalization import Hospitalization
from .invoice import Invoice
from .owner import Owner
from .pet import Pet, PetSex, PetSpecies
from .treatment import Surgery, Treatment
from .veterinarian import Veterinarian

__all__ = [
    "Base",
    "BaseModel",
    "Owner",
    "Pet",
    "PetSpecies",
    "PetSex",
    "Veterinarian",
    "Consultation",
    "ConsultationState",
    "Diagnosis",
    "Treatment",
    "Surgery",
    "ComplementaryStudy",
    "StudyState",
    "StudyParent",
    "StudyParentKind",
    "PARENT_COLUMNS",
    "Hospitalization",
    "Invoice",
]
