"""
Hospitalization service.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Hospitalization, Pet, StudyParentKind
from ..schemas.hospitalization import (
    HospitalizationCreate,
    HospitalizationResponse,
    HospitalizationUpdate,
)
from ..schemas.page import Page
from ..utils.pagination import DEFAULT_PAGE_SIZE
from .base import RecordService

logger = logging.getLogger(__name__)


class HospitalizationService(RecordService[Hospitalization, HospitalizationResponse]):
    """Create, update, query and delete hospitalizations."""

    model = Hospitalization
    response_schema = HospitalizationResponse
    search_field = "reason"

    async def add(self, data: HospitalizationCreate) -> HospitalizationResponse:
        """
        Admit an existing pet.

        Raises:
            ReferenceNotFoundException: If the pet does not exist
        """
        async with self.session_manager.unit_of_work() as session:
            pet = await self._resolver(session).resolve(Pet, data.pet_id, "pet_id")
            hospitalization = Hospitalization(
                **data.model_dump(exclude={"pet_id"}), pet_id=pet.id
            )
            await self.repository(session).save(hospitalization)
            response = self.to_response(hospitalization)

        logger.info(f"Created Hospitalization {response.id} for Pet {pet.id}")
        return response

    async def update(
        self, hospitalization_id: uuid.UUID, data: HospitalizationUpdate
    ) -> HospitalizationResponse:
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            hospitalization = await repository.get_by_id(hospitalization_id)
            pet = await self._resolver(session).resolve_optional(
                Pet, data.pet_id, "pet_id"
            )

            hospitalization.update_fields(**data.model_dump(exclude={"pet_id"}))
            if pet is not None:
                hospitalization.pet_id = pet.id

            await repository.save(hospitalization)
            response = self.to_response(hospitalization)

        logger.info(f"Updated Hospitalization {hospitalization_id}")
        return response

    async def get_by_pet_id(
        self, pet_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[HospitalizationResponse]:
        return await self._find_by_foreign_key("pet_id", pet_id, page, size)

    async def _before_delete(
        self, session: AsyncSession, entity: Hospitalization
    ) -> None:
        await self._detach_studies(session, StudyParentKind.HOSPITALIZATION, entity.id)
