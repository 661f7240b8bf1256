"""
Treatment and surgery services.

Both records hang off a single diagnosis, at most one of each per diagnosis.
Neither has dependents, so deleting them needs no guard.
"""

import logging
import uuid

from ..models import Diagnosis, Surgery, Treatment
from ..schemas.page import Page
from ..schemas.treatment import (
    SurgeryCreate,
    SurgeryResponse,
    SurgeryUpdate,
    TreatmentCreate,
    TreatmentResponse,
    TreatmentUpdate,
)
from ..utils.pagination import DEFAULT_PAGE_SIZE
from .base import RecordService

logger = logging.getLogger(__name__)


class TreatmentService(RecordService[Treatment, TreatmentResponse]):
    """Create, update, query and delete treatments."""

    model = Treatment
    response_schema = TreatmentResponse

    async def add(self, data: TreatmentCreate) -> TreatmentResponse:
        """
        Prescribe a treatment for an existing diagnosis.

        Raises:
            ReferenceNotFoundException: If the diagnosis does not exist
            DataConflictException: If the diagnosis already has a treatment
        """
        async with self.session_manager.unit_of_work() as session:
            diagnosis = await self._resolver(session).resolve(
                Diagnosis, data.diagnosis_id, "diagnosis_id"
            )
            treatment = Treatment(
                **data.model_dump(exclude={"diagnosis_id"}), diagnosis_id=diagnosis.id
            )
            await self.repository(session).save(treatment)
            response = self.to_response(treatment)

        logger.info(f"Created Treatment {response.id} for Diagnosis {diagnosis.id}")
        return response

    async def update(
        self, treatment_id: uuid.UUID, data: TreatmentUpdate
    ) -> TreatmentResponse:
        """
        Apply the fields present in ``data`` to a treatment.

        Unlike other records, treatments are patched: omitted fields keep
        their stored values.
        """
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            treatment = await repository.get_by_id(treatment_id)
            diagnosis = await self._resolver(session).resolve_optional(
                Diagnosis, data.diagnosis_id, "diagnosis_id"
            )

            changes = data.model_dump(exclude_unset=True, exclude={"diagnosis_id"})
            treatment.update_fields(**changes)
            if diagnosis is not None:
                treatment.diagnosis_id = diagnosis.id

            await repository.save(treatment)
            response = self.to_response(treatment)

        logger.info(f"Updated Treatment {treatment_id} ({', '.join(changes) or 'no fields'})")
        return response

    async def get_by_diagnosis_id(
        self, diagnosis_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[TreatmentResponse]:
        return await self._find_by_foreign_key("diagnosis_id", diagnosis_id, page, size)


class SurgeryService(RecordService[Surgery, SurgeryResponse]):
    """Create, update, query and delete surgeries."""

    model = Surgery
    response_schema = SurgeryResponse

    async def add(self, data: SurgeryCreate) -> SurgeryResponse:
        """
        Record a surgery for an existing diagnosis.

        Raises:
            ReferenceNotFoundException: If the diagnosis does not exist
            DataConflictException: If the diagnosis already has a surgery
        """
        async with self.session_manager.unit_of_work() as session:
            diagnosis = await self._resolver(session).resolve(
                Diagnosis, data.diagnosis_id, "diagnosis_id"
            )
            surgery = Surgery(
                **data.model_dump(exclude={"diagnosis_id"}), diagnosis_id=diagnosis.id
            )
            await self.repository(session).save(surgery)
            response = self.to_response(surgery)

        logger.info(f"Created Surgery {response.id} for Diagnosis {diagnosis.id}")
        return response

    async def update(self, surgery_id: uuid.UUID, data: SurgeryUpdate) -> SurgeryResponse:
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            surgery = await repository.get_by_id(surgery_id)
            diagnosis = await self._resolver(session).resolve_optional(
                Diagnosis, data.diagnosis_id, "diagnosis_id"
            )

            surgery.update_fields(**data.model_dump(exclude={"diagnosis_id"}))
            if diagnosis is not None:
                surgery.diagnosis_id = diagnosis.id

            await repository.save(surgery)
            response = self.to_response(surgery)

        logger.info(f"Updated Surgery {surgery_id}")
        return response

    async def get_by_diagnosis_id(
        self, diagnosis_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[SurgeryResponse]:
        return await self._find_by_foreign_key("diagnosis_id", diagnosis_id, page, size)
