"""
Reference resolution for create and update paths.
"""

import logging
import uuid
from typing import Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ReferenceNotFoundException
from ..repositories import ModelT, Repository

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """
    Looks up records named by foreign ids supplied in service input.

    Resolution has no side effects. It runs on the caller's session so the
    lookups share the surrounding unit of work.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def resolve(
        self,
        model: Type[ModelT],
        entity_id: uuid.UUID,
        field: Optional[str] = None,
    ) -> ModelT:
        """
        Load the referenced record.

        Args:
            model: Record class the id points to
            entity_id: Supplied foreign id
            field: Input field that carried the id, reported on failure

        Raises:
            ReferenceNotFoundException: If no such record exists
        """
        entity = await Repository(self.session, model).find_by_id(entity_id)
        if entity is None:
            logger.warning(
                f"Reference {field or model.get_entity_kind()}={entity_id} does not resolve"
            )
            raise ReferenceNotFoundException(model.get_entity_kind(), entity_id, field)
        logger.debug(f"Resolved {model.get_entity_kind()} {entity_id}")
        return entity

    async def resolve_optional(
        self,
        model: Type[ModelT],
        entity_id: Optional[uuid.UUID],
        field: Optional[str] = None,
    ) -> Optional[ModelT]:
        """Like ``resolve`` but returns None when no id was supplied."""
        if entity_id is None:
            return None
        return await self.resolve(model, entity_id, field)
