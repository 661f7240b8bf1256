"""
Consultation service.

Consultations tie a pet to the veterinarian who saw it. Diagnoses, studies
and the invoice hang off a consultation, so deleting one runs the fullest
deletion guard in the package.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import (
    ComplementaryStudy,
    Consultation,
    Diagnosis,
    Invoice,
    Owner,
    Pet,
    StudyParentKind,
    Veterinarian,
)
from ..schemas.consultation import (
    ConsultationCreate,
    ConsultationResponse,
    ConsultationUpdate,
)
from ..schemas.page import Page
from ..utils.pagination import DEFAULT_PAGE_SIZE
from .base import RecordService, contains_ignore_case

logger = logging.getLogger(__name__)

REFERENCE_FIELDS = {"pet_id", "veterinarian_id"}


class ConsultationService(RecordService[Consultation, ConsultationResponse]):
    """Create, update, query and delete consultations."""

    model = Consultation
    response_schema = ConsultationResponse

    async def add(self, data: ConsultationCreate) -> ConsultationResponse:
        """
        Open a consultation for an existing pet and veterinarian.

        Both references are resolved before anything is written; if either
        is missing the store is left unchanged.

        Raises:
            ReferenceNotFoundException: If the pet or veterinarian is missing
        """
        async with self.session_manager.unit_of_work() as session:
            resolver = self._resolver(session)
            pet = await resolver.resolve(Pet, data.pet_id, "pet_id")
            veterinarian = await resolver.resolve(
                Veterinarian, data.veterinarian_id, "veterinarian_id"
            )

            consultation = Consultation(
                **data.model_dump(exclude=REFERENCE_FIELDS),
                pet_id=pet.id,
                veterinarian_id=veterinarian.id,
            )
            await self.repository(session).save(consultation)
            response = self.to_response(consultation)

        logger.info(
            f"Created Consultation {response.id} for Pet {pet.id} "
            f"with Veterinarian {veterinarian.id}"
        )
        return response

    async def update(
        self, consultation_id: uuid.UUID, data: ConsultationUpdate
    ) -> ConsultationResponse:
        """
        Overwrite a consultation's fields.

        The pet and veterinarian are reassigned only when new ids are
        supplied; a consultation never loses either link.

        Raises:
            NotFoundException: If the consultation does not exist
            ReferenceNotFoundException: If a supplied id does not resolve
        """
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            consultation = await repository.get_by_id(consultation_id)
            resolver = self._resolver(session)

            pet = await resolver.resolve_optional(Pet, data.pet_id, "pet_id")
            veterinarian = await resolver.resolve_optional(
                Veterinarian, data.veterinarian_id, "veterinarian_id"
            )

            consultation.update_fields(**data.model_dump(exclude=REFERENCE_FIELDS))
            if pet is not None:
                consultation.pet_id = pet.id
            if veterinarian is not None:
                consultation.veterinarian_id = veterinarian.id

            await repository.save(consultation)
            response = self.to_response(consultation)

        logger.info(f"Updated Consultation {consultation_id}")
        return response

    async def get_by_pet_id(
        self, pet_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ConsultationResponse]:
        return await self._find_by_foreign_key("pet_id", pet_id, page, size)

    async def get_by_veterinarian_id(
        self, veterinarian_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ConsultationResponse]:
        return await self._find_by_foreign_key(
            "veterinarian_id", veterinarian_id, page, size
        )

    async def search_by_pet_name(
        self, query: str = "", page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ConsultationResponse]:
        """Consultations whose pet's name contains ``query``."""
        statement = select(Consultation).join(Pet, Pet.id == Consultation.pet_id)
        condition = contains_ignore_case([Pet.name], query)
        if condition is not None:
            statement = statement.where(condition)
        statement = statement.order_by(Pet.name, Consultation.id)
        return await self._find_page_by_statement(statement, page, size)

    async def search_by_owner_name(
        self, query: str = "", page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ConsultationResponse]:
        """Consultations whose pet's owner has ``query`` in name or lastname."""
        statement = (
            select(Consultation)
            .join(Pet, Pet.id == Consultation.pet_id)
            .join(Owner, Owner.id == Pet.owner_id)
        )
        condition = contains_ignore_case([Owner.name, Owner.lastname], query)
        if condition is not None:
            statement = statement.where(condition)
        statement = statement.order_by(Owner.lastname, Owner.name, Consultation.id)
        return await self._find_page_by_statement(statement, page, size)

    async def get_by_diagnosis_id(
        self, diagnosis_id: uuid.UUID
    ) -> ConsultationResponse:
        """
        The consultation a diagnosis belongs to.

        Raises:
            NotFoundException: If the diagnosis does not exist
        """
        async with self.session_manager.get_session() as session:
            diagnosis = await self.repository(session, Diagnosis).get_by_id(
                diagnosis_id
            )
            consultation = await self.repository(session).get_by_id(
                diagnosis.consultation_id
            )
            return self.to_response(consultation)

    async def get_by_study_id(self, study_id: uuid.UUID) -> ConsultationResponse:
        """
        The consultation a study is attached to.

        Raises:
            NotFoundException: If the study does not exist or is not
                attached to a consultation
        """
        async with self.session_manager.get_session() as session:
            study = await self.repository(session, ComplementaryStudy).get_by_id(
                study_id
            )
            if study.consultation_id is None:
                raise self._not_linked(ComplementaryStudy.get_entity_kind(), study_id)
            consultation = await self.repository(session).get_by_id(
                study.consultation_id
            )
            return self.to_response(consultation)

    async def _before_delete(
        self, session: AsyncSession, entity: Consultation
    ) -> None:
        await self._ensure_no_dependents(session, Diagnosis, "consultation_id", entity)

        invoice_repository = self.repository(session, Invoice)
        invoice = await invoice_repository.find_one_by("consultation_id", entity.id)
        if invoice is not None:
            invoice.consultation_id = None
            await invoice_repository.save(invoice)
            logger.debug(f"Unlinked Invoice {invoice.id} from Consultation {entity.id}")

        await self._detach_studies(session, StudyParentKind.CONSULTATION, entity.id)
