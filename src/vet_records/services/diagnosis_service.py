"""
Diagnosis service.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import (
    ComplementaryStudy,
    Consultation,
    Diagnosis,
    StudyParentKind,
    Surgery,
    Treatment,
)
from ..schemas.diagnosis import DiagnosisCreate, DiagnosisResponse, DiagnosisUpdate
from ..schemas.page import Page
from ..utils.pagination import DEFAULT_PAGE_SIZE
from .base import RecordService

logger = logging.getLogger(__name__)


class DiagnosisService(RecordService[Diagnosis, DiagnosisResponse]):
    """Create, update, query and delete diagnoses."""

    model = Diagnosis
    response_schema = DiagnosisResponse

    async def add(self, data: DiagnosisCreate) -> DiagnosisResponse:
        """
        Record a diagnosis within an existing consultation.

        Raises:
            ReferenceNotFoundException: If the consultation does not exist
        """
        async with self.session_manager.unit_of_work() as session:
            consultation = await self._resolver(session).resolve(
                Consultation, data.consultation_id, "consultation_id"
            )
            diagnosis = Diagnosis(
                **data.model_dump(exclude={"consultation_id"}),
                consultation_id=consultation.id,
            )
            await self.repository(session).save(diagnosis)
            response = self.to_response(diagnosis)

        logger.info(
            f"Created Diagnosis {response.id} for Consultation {consultation.id}"
        )
        return response

    async def update(
        self, diagnosis_id: uuid.UUID, data: DiagnosisUpdate
    ) -> DiagnosisResponse:
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            diagnosis = await repository.get_by_id(diagnosis_id)
            consultation = await self._resolver(session).resolve_optional(
                Consultation, data.consultation_id, "consultation_id"
            )

            diagnosis.update_fields(**data.model_dump(exclude={"consultation_id"}))
            if consultation is not None:
                diagnosis.consultation_id = consultation.id

            await repository.save(diagnosis)
            response = self.to_response(diagnosis)

        logger.info(f"Updated Diagnosis {diagnosis_id}")
        return response

    async def get_by_consultation_id(
        self, consultation_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[DiagnosisResponse]:
        return await self._find_by_foreign_key(
            "consultation_id", consultation_id, page, size
        )

    async def _get_linked(self, model, source_id: uuid.UUID) -> DiagnosisResponse:
        """Follow ``model.diagnosis_id`` from the record ``source_id``."""
        async with self.session_manager.get_session() as session:
            source = await self.repository(session, model).get_by_id(source_id)
            if source.diagnosis_id is None:
                raise self._not_linked(model.get_entity_kind(), source_id)
            diagnosis = await self.repository(session).get_by_id(source.diagnosis_id)
            return self.to_response(diagnosis)

    async def get_by_surgery_id(self, surgery_id: uuid.UUID) -> DiagnosisResponse:
        return await self._get_linked(Surgery, surgery_id)

    async def get_by_treatment_id(self, treatment_id: uuid.UUID) -> DiagnosisResponse:
        return await self._get_linked(Treatment, treatment_id)

    async def get_by_study_id(self, study_id: uuid.UUID) -> DiagnosisResponse:
        """
        The diagnosis a study is attached to.

        Raises:
            NotFoundException: If the study does not exist or is attached to
                something other than a diagnosis
        """
        return await self._get_linked(ComplementaryStudy, study_id)

    async def _before_delete(self, session: AsyncSession, entity: Diagnosis) -> None:
        await self._ensure_no_dependents(session, Treatment, "diagnosis_id", entity)
        await self._ensure_no_dependents(session, Surgery, "diagnosis_id", entity)
        await self._detach_studies(session, StudyParentKind.DIAGNOSIS, entity.id)
