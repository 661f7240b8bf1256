"""
Owner service.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Owner, Pet
from ..schemas.owner import OwnerCreate, OwnerResponse, OwnerUpdate
from ..schemas.page import Page
from ..utils.pagination import DEFAULT_PAGE_SIZE
from .base import RecordService

logger = logging.getLogger(__name__)


class OwnerService(RecordService[Owner, OwnerResponse]):
    """Create, update, query and delete owners."""

    model = Owner
    response_schema = OwnerResponse

    async def add(self, data: OwnerCreate) -> OwnerResponse:
        """
        Register a new owner.

        Raises:
            DataConflictException: If the dni or email is already registered
        """
        async with self.session_manager.unit_of_work() as session:
            owner = Owner(**data.model_dump())
            await self.repository(session).save(owner)
            response = self.to_response(owner)

        logger.info(f"Created Owner {response.id}")
        return response

    async def update(self, owner_id: uuid.UUID, data: OwnerUpdate) -> OwnerResponse:
        """Overwrite every field of an existing owner."""
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            owner = await repository.get_by_id(owner_id)
            owner.update_fields(**data.model_dump())
            await repository.save(owner)
            response = self.to_response(owner)

        logger.info(f"Updated Owner {owner_id}")
        return response

    async def search_by_lastname(
        self, query: str = "", page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[OwnerResponse]:
        return await self._search_field("lastname", query, page, size)

    async def _before_delete(self, session: AsyncSession, entity: Owner) -> None:
        await self._ensure_no_dependents(session, Pet, "owner_id", entity)
