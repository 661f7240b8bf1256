"""
Pydantic schemas for data validation and serialization.

This module contains the create, update and response schemas for every
clinical record, plus the generic ``Page`` container returned by listings.
"""

from .complementary_study import (
    ComplementaryStudyCreate,
    ComplementaryStudyResponse,
    ComplementaryStudyUpdate,
    FileUpload,
)
from .consultation import (
    ConsultationCreate,
    ConsultationResponse,
    ConsultationUpdate,
)
from .diagnosis import DiagnosisCreate, DiagnosisResponse, DiagnosisUpdate
from .hospitalization import (
    HospitalizationCreate,
    HospitalizationResponse,
    HospitalizationUpdate,
)
from .invoice import InvoiceCreate, InvoiceResponse, InvoiceUpdate
from .owner import OwnerCreate, OwnerResponse, OwnerUpdate
from .page import Page
from .pet import PetCreate, PetResponse, PetUpdate
from .treatment import (
    SurgeryCreate,
    SurgeryResponse,
    SurgeryUpdate,
    TreatmentCreate,
    TreatmentResponse,
    TreatmentUpdate,
)
from .veterinarian import (
    VeterinarianCreate,
    VeterinarianResponse,
    VeterinarianUpdate,
)

__all__ = [
    "Page",
    # Owner schemas
    "OwnerCreate",
    "OwnerUpdate",
    "OwnerResponse",
    # Pet schemas
    "PetCreate",
    "PetUpdate",
    "PetResponse",
    # Veterinarian schemas
    "VeterinarianCreate",
    "VeterinarianUpdate",
    "VeterinarianResponse",
    # Consultation schemas
    "ConsultationCreate",
    "ConsultationUpdate",
    "ConsultationResponse",
    # Diagnosis schemas
    "DiagnosisCreate",
    "DiagnosisUpdate",
    "DiagnosisResponse",
    # Treatment and surgery schemas
    "TreatmentCreate",
    "TreatmentUpdate",
    "TreatmentResponse",
    "SurgeryCreate",
    "SurgeryUpdate",
    "SurgeryResponse",
    # Complementary study schemas
    "ComplementaryStudyCreate",
    "ComplementaryStudyUpdate",
    "ComplementaryStudyResponse",
    "FileUpload",
    # Hospitalization schemas
    "HospitalizationCreate",
    "HospitalizationUpdate",
    "HospitalizationResponse",
    # Invoice schemas
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceResponse",
]
