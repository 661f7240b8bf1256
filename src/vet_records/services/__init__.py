"""
Record services.

Each service resolves the references named in its input, applies the change
inside one unit of work and returns response schemas. Reads return single
responses or ``Page`` objects.
"""

from .base import RecordService, contains_ignore_case
from .consultation_service import ConsultationService
from .diagnosis_service import DiagnosisService
from .hospitalization_service import HospitalizationService
from .invoice_service import InvoiceService
from .owner_service import OwnerService
from .pet_service import PetService
from .resolver import ReferenceResolver
from .study_service import ComplementaryStudyService
from .treatment_service import SurgeryService, TreatmentService
from .veterinarian_service import VeterinarianService

__all__ = [
    "RecordService",
    "ReferenceResolver",
    "contains_ignore_case",
    "OwnerService",
    "PetService",
    "VeterinarianService",
    "ConsultationService",
    "DiagnosisService",
    "TreatmentService",
    "SurgeryService",
    "ComplementaryStudyService",
    "HospitalizationService",
    "InvoiceService",
]
