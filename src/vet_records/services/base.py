"""
Shared service machinery for every record kind.

A ``RecordService`` owns the read operations common to all records (by id,
paged listing, name search, lookup by parent) and the delete flow with its
guard hook. Each operation opens its own session or unit of work from the
``SessionManager``; mutations commit or roll back as one transaction.
"""

import logging
import uuid
from typing import Any, Generic, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel as Schema
from sqlalchemy import Select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.session import SessionManager
from ..exceptions import DataConflictException, NotFoundException
from ..models import PARENT_COLUMNS, ComplementaryStudy, StudyParentKind
from ..repositories import ModelT, Repository, escape_like
from ..schemas.page import Page
from ..utils.pagination import DEFAULT_PAGE_SIZE, PageRequest
from .resolver import ReferenceResolver

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=Schema)


def contains_ignore_case(columns: Iterable[Any], query: str) -> Optional[Any]:
    """
    Build a case-insensitive substring filter over one or more columns.

    Returns None for an empty query, which matches everything.
    """
    if not query:
        return None
    pattern = f"%{escape_like(query)}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


class RecordService(Generic[ModelT, ResponseT]):
    """Base class for the per-record services."""

    model: Type[ModelT]
    response_schema: Type[ResponseT]
    search_field: str = "name"

    def __init__(self, session_manager: SessionManager) -> None:
        self.session_manager = session_manager

    @property
    def entity_kind(self) -> str:
        return self.model.get_entity_kind()

    def repository(
        self, session: AsyncSession, model: Optional[Type[Any]] = None
    ) -> Repository:
        return Repository(session, model or self.model)

    def to_response(self, entity: ModelT) -> ResponseT:
        return self.response_schema.model_validate(entity)

    def to_page(self, page: Page) -> Page[ResponseT]:
        return page.map(self.to_response)

    async def get_by_id(self, entity_id: uuid.UUID) -> ResponseT:
        """
        Fetch one record.

        Raises:
            NotFoundException: If the record does not exist
        """
        async with self.session_manager.get_session() as session:
            entity = await self.repository(session).get_by_id(entity_id)
            return self.to_response(entity)

    async def get_page(
        self, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ResponseT]:
        """List records by id ascending."""
        page_request = PageRequest.of(page, size)
        async with self.session_manager.get_session() as session:
            result = await self.repository(session).find_page(page_request)
            return self.to_page(result)

    async def search(
        self, query: str = "", page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ResponseT]:
        """Case-insensitive substring search on the record's name field."""
        return await self._search_field(self.search_field, query, page, size)

    async def _search_field(
        self, field: str, query: str, page: int, size: int
    ) -> Page[ResponseT]:
        page_request = PageRequest.of(page, size)
        async with self.session_manager.get_session() as session:
            result = await self.repository(session).find_by_substring(
                field, query or "", page_request
            )
            return self.to_page(result)

    async def _find_by_foreign_key(
        self, fk_field: str, parent_id: uuid.UUID, page: int, size: int
    ) -> Page[ResponseT]:
        # No parent existence check: an unknown parent yields an empty page.
        page_request = PageRequest.of(page, size)
        async with self.session_manager.get_session() as session:
            result = await self.repository(session).find_by_foreign_key(
                fk_field, parent_id, page_request
            )
            return self.to_page(result)

    async def _find_page_by_statement(
        self, statement: Select, page: int, size: int
    ) -> Page[ResponseT]:
        page_request = PageRequest.of(page, size)
        async with self.session_manager.get_session() as session:
            result = await self.repository(session).paginate(statement, page_request)
            return self.to_page(result)

    async def delete(self, entity_id: uuid.UUID) -> None:
        """
        Delete a record after running its deletion guard.

        Raises:
            NotFoundException: If the record does not exist
            DataConflictException: If dependents still require the record
        """
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            entity = await repository.get_by_id(entity_id)
            await self._before_delete(session, entity)
            await repository.delete(entity)

        logger.info(f"Deleted {self.entity_kind} {entity_id}")

    async def _before_delete(self, session: AsyncSession, entity: ModelT) -> None:
        """Deletion guard hook; records with no dependents need nothing."""

    async def _ensure_no_dependents(
        self,
        session: AsyncSession,
        dependent_model: Type[Any],
        fk_field: str,
        entity: ModelT,
    ) -> None:
        """Refuse the delete while ``dependent_model`` rows still point at ``entity``."""
        if await self.repository(session, dependent_model).exists_by(fk_field, entity.id):
            dependent_kind = dependent_model.get_entity_kind()
            logger.warning(
                f"Refusing to delete {self.entity_kind} {entity.id}: "
                f"{dependent_kind} records still reference it"
            )
            raise DataConflictException(
                f"Cannot delete {self.entity_kind} {entity.id} while "
                f"{dependent_kind} records reference it",
                entity_kind=self.entity_kind,
                constraint=f"{dependent_model.get_table_name()}.{fk_field}",
            )

    async def _detach_studies(
        self, session: AsyncSession, kind: StudyParentKind, parent_id: uuid.UUID
    ) -> int:
        """Clear the parent link of every study attached to the given record."""
        repository = self.repository(session, ComplementaryStudy)
        studies = await repository.find_all_by(PARENT_COLUMNS[kind], parent_id)
        for study in studies:
            study.detach()
        await repository.save_all(studies)
        if studies:
            logger.debug(
                f"Detached {len(studies)} studies from {kind.value} {parent_id}"
            )
        return len(studies)

    @staticmethod
    def _resolver(session: AsyncSession) -> ReferenceResolver:
        return ReferenceResolver(session)

    def _not_linked(self, source_kind: str, source_id: uuid.UUID) -> NotFoundException:
        return NotFoundException(
            self.entity_kind,
            source_id,
            message=f"No {self.entity_kind} linked to {source_kind} {source_id}",
        )
