"""
Pet service.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Consultation, Hospitalization, Owner, Pet
from ..schemas.page import Page
from ..schemas.pet import PetCreate, PetResponse, PetUpdate
from ..utils.pagination import DEFAULT_PAGE_SIZE
from .base import RecordService, contains_ignore_case

logger = logging.getLogger(__name__)


class PetService(RecordService[Pet, PetResponse]):
    """Create, update, query and delete pets."""

    model = Pet
    response_schema = PetResponse

    async def add(self, data: PetCreate) -> PetResponse:
        """
        Register a pet for an existing owner.

        Raises:
            ReferenceNotFoundException: If the owner does not exist
        """
        async with self.session_manager.unit_of_work() as session:
            owner = await self._resolver(session).resolve(
                Owner, data.owner_id, "owner_id"
            )
            pet = Pet(**data.model_dump(exclude={"owner_id"}), owner_id=owner.id)
            await self.repository(session).save(pet)
            response = self.to_response(pet)

        logger.info(f"Created Pet {response.id} for Owner {owner.id}")
        return response

    async def update(self, pet_id: uuid.UUID, data: PetUpdate) -> PetResponse:
        """
        Overwrite a pet's fields.

        The owner is reassigned only when ``owner_id`` is supplied.
        """
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            pet = await repository.get_by_id(pet_id)
            if data.owner_id is not None:
                owner = await self._resolver(session).resolve(
                    Owner, data.owner_id, "owner_id"
                )
                pet.owner_id = owner.id
            pet.update_fields(**data.model_dump(exclude={"owner_id"}))
            await repository.save(pet)
            response = self.to_response(pet)

        logger.info(f"Updated Pet {pet_id}")
        return response

    async def get_by_owner_id(
        self, owner_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[PetResponse]:
        return await self._find_by_foreign_key("owner_id", owner_id, page, size)

    async def search_by_owner_name(
        self, query: str = "", page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[PetResponse]:
        """Pets whose owner's name or lastname contains ``query``."""
        statement = select(Pet).join(Owner, Owner.id == Pet.owner_id)
        condition = contains_ignore_case([Owner.name, Owner.lastname], query)
        if condition is not None:
            statement = statement.where(condition)
        statement = statement.order_by(Owner.lastname, Owner.name, Pet.id)
        return await self._find_page_by_statement(statement, page, size)

    async def _before_delete(self, session: AsyncSession, entity: Pet) -> None:
        await self._ensure_no_dependents(session, Consultation, "pet_id", entity)
        await self._ensure_no_dependents(session, Hospitalization, "pet_id", entity)
