"""
Veterinarian service.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Consultation, Veterinarian
from ..schemas.veterinarian import (
    VeterinarianCreate,
    VeterinarianResponse,
    VeterinarianUpdate,
)
from .base import RecordService

logger = logging.getLogger(__name__)


class VeterinarianService(RecordService[Veterinarian, VeterinarianResponse]):
    """Create, update, query and delete veterinarians."""

    model = Veterinarian
    response_schema = VeterinarianResponse

    async def add(self, data: VeterinarianCreate) -> VeterinarianResponse:
        """
        Register a veterinarian.

        Raises:
            DataConflictException: If the license number or email is taken
        """
        async with self.session_manager.unit_of_work() as session:
            veterinarian = Veterinarian(**data.model_dump())
            await self.repository(session).save(veterinarian)
            response = self.to_response(veterinarian)

        logger.info(f"Created Veterinarian {response.id}")
        return response

    async def update(
        self, veterinarian_id: uuid.UUID, data: VeterinarianUpdate
    ) -> VeterinarianResponse:
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            veterinarian = await repository.get_by_id(veterinarian_id)
            veterinarian.update_fields(**data.model_dump())
            await repository.save(veterinarian)
            response = self.to_response(veterinarian)

        logger.info(f"Updated Veterinarian {veterinarian_id}")
        return response

    async def _before_delete(
        self, session: AsyncSession, entity: Veterinarian
    ) -> None:
        await self._ensure_no_dependents(
            session, Consultation, "veterinarian_id", entity
        )
