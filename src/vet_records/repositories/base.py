"""
Generic repository over an async SQLAlchemy session.

A repository is bound to one record class and one session. It never commits:
the caller's unit of work decides whether the changes it flushes are kept.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from ..exceptions import (
    DataConflictException,
    InvalidArgumentException,
    NotFoundException,
    StorageFailureException,
)
from ..models.base import BaseModel
from ..schemas.page import Page
from ..utils.pagination import PageRequest

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def escape_like(value: str, escape_char: str = "\\") -> str:
    """Escape LIKE wildcards so ``value`` is matched literally."""
    return (
        value.replace(escape_char, escape_char * 2)
        .replace("%", f"{escape_char}%")
        .replace("_", f"{escape_char}_")
    )


class Repository(Generic[ModelT]):
    """Entity Store operations for a single record class."""

    def __init__(self, session: AsyncSession, model: Type[ModelT]) -> None:
        self.session = session
        self.model = model

    @property
    def entity_kind(self) -> str:
        return self.model.get_entity_kind()

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """Map driver and ORM failures onto package exceptions."""
        try:
            yield
        except IntegrityError as e:
            logger.warning(f"{self.entity_kind} {operation} rejected by constraint: {e.orig}")
            raise DataConflictException(
                f"{self.entity_kind} {operation} violates a data constraint",
                entity_kind=self.entity_kind,
                original_error=e,
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"{self.entity_kind} {operation} failed: {e}")
            raise StorageFailureException(
                f"Failed to {operation} {self.entity_kind}",
                operation=operation,
                original_error=e,
            ) from e

    def _column(self, name: str) -> InstrumentedAttribute:
        column = getattr(self.model, name, None)
        if not isinstance(column, InstrumentedAttribute):
            raise InvalidArgumentException(
                f"{self.entity_kind} has no field '{name}'", field=name
            )
        return column

    async def save(self, entity: ModelT) -> ModelT:
        """
        Stage ``entity`` for insert or update and flush it.

        Raises:
            DataConflictException: If a uniqueness or integrity rule rejects it
            StorageFailureException: For any other store failure
        """
        with self._translate_errors("save"):
            self.session.add(entity)
            await self.session.flush()
        logger.debug(f"Flushed {self.entity_kind} {entity.id}")
        return entity

    async def find_by_id(self, entity_id: uuid.UUID) -> Optional[ModelT]:
        with self._translate_errors("load"):
            return await self.session.get(self.model, entity_id)

    async def get_by_id(self, entity_id: uuid.UUID) -> ModelT:
        """
        Load a record by id.

        Raises:
            NotFoundException: If no record has that id
        """
        entity = await self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundException(self.entity_kind, entity_id)
        return entity

    async def exists(self, entity_id: uuid.UUID) -> bool:
        return await self.find_by_id(entity_id) is not None

    async def delete(self, entity: ModelT) -> None:
        with self._translate_errors("delete"):
            await self.session.delete(entity)
            await self.session.flush()
        logger.debug(f"Deleted {self.entity_kind} {entity.id}")

    async def delete_by_id(self, entity_id: uuid.UUID) -> None:
        """
        Delete a record by id.

        Raises:
            NotFoundException: If no record has that id
            DataConflictException: If other records still reference it
        """
        entity = await self.get_by_id(entity_id)
        await self.delete(entity)

    async def paginate(
        self, statement: Select, page_request: PageRequest
    ) -> Page[ModelT]:
        """
        Run an ordered select as one page and count the full result set.

        ``statement`` must select the record class and carry its own
        ``order_by``.
        """
        count_statement = select(func.count()).select_from(
            statement.order_by(None).subquery()
        )
        with self._translate_errors("query"):
            total = (await self.session.execute(count_statement)).scalar_one()
            result = await self.session.execute(
                statement.offset(page_request.offset).limit(page_request.limit)
            )
            items = list(result.scalars().all())
        return Page.of(items, page_request.page, page_request.size, total)

    async def find_page(
        self, page_request: PageRequest, *criteria: Any
    ) -> Page[ModelT]:
        """List records matching ``criteria`` sorted by id ascending."""
        statement = select(self.model).where(*criteria).order_by(self.model.id)
        return await self.paginate(statement, page_request)

    async def find_by_substring(
        self, field: str, query: str, page_request: PageRequest
    ) -> Page[ModelT]:
        """
        Case-insensitive substring search on one text column.

        An empty query matches every record. Results are sorted by the searched
        column, then by id.
        """
        column = self._column(field)
        statement = select(self.model)
        if query:
            statement = statement.where(
                column.ilike(f"%{escape_like(query)}%", escape="\\")
            )
        statement = statement.order_by(column, self.model.id)
        return await self.paginate(statement, page_request)

    async def find_by_foreign_key(
        self, fk_field: str, parent_id: uuid.UUID, page_request: PageRequest
    ) -> Page[ModelT]:
        """Page through records whose ``fk_field`` equals ``parent_id``."""
        return await self.find_page(page_request, self._column(fk_field) == parent_id)

    async def find_all_by(self, field: str, value: Any) -> List[ModelT]:
        """Load every record whose ``field`` equals ``value``."""
        statement = (
            select(self.model)
            .where(self._column(field) == value)
            .order_by(self.model.id)
        )
        with self._translate_errors("query"):
            result = await self.session.execute(statement)
            return list(result.scalars().all())

    async def find_one_by(self, field: str, value: Any) -> Optional[ModelT]:
        """Load the single record whose ``field`` equals ``value``, if any."""
        statement = select(self.model).where(self._column(field) == value).limit(1)
        with self._translate_errors("query"):
            result = await self.session.execute(statement)
            return result.scalars().first()

    async def exists_by(self, field: str, value: Any) -> bool:
        statement = select(
            select(self.model.id).where(self._column(field) == value).exists()
        )
        with self._translate_errors("query"):
            return bool((await self.session.execute(statement)).scalar())

    async def save_all(self, entities: Sequence[ModelT]) -> None:
        """Stage several records and flush them together."""
        if not entities:
            return
        with self._translate_errors("save"):
            self.session.add_all(entities)
            await self.session.flush()
