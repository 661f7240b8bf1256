"""
Complementary study service.

A study may be attached to one consultation, diagnosis or hospitalization,
or to nothing. An attached document is handed to the ``FileStorage`` and
only its location is kept on the record. Create and update both follow
replace-or-clear semantics for the file: a non-empty upload replaces the
stored location, and a missing or empty one clears it.
"""

import logging
import uuid
from typing import Dict, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.session import SessionManager
from ..exceptions import InvalidArgumentException
from ..models import (
    ComplementaryStudy,
    Consultation,
    Diagnosis,
    Hospitalization,
    StudyParent,
    StudyParentKind,
    StudyState,
)
from ..models.base import BaseModel
from ..schemas.complementary_study import (
    ComplementaryStudyCreate,
    ComplementaryStudyResponse,
    ComplementaryStudyUpdate,
    FileUpload,
)
from ..schemas.page import Page
from ..storage import FileStorage
from ..utils.pagination import DEFAULT_PAGE_SIZE, PageRequest
from .base import RecordService

logger = logging.getLogger(__name__)

PARENT_MODELS: Dict[StudyParentKind, Type[BaseModel]] = {
    StudyParentKind.CONSULTATION: Consultation,
    StudyParentKind.DIAGNOSIS: Diagnosis,
    StudyParentKind.HOSPITALIZATION: Hospitalization,
}

PARENT_FIELDS = {"consultation_id", "diagnosis_id", "hospitalization_id"}


class ComplementaryStudyService(
    RecordService[ComplementaryStudy, ComplementaryStudyResponse]
):
    """Create, update, query and delete complementary studies."""

    model = ComplementaryStudy
    response_schema = ComplementaryStudyResponse
    search_field = "study_type"

    def __init__(self, session_manager: SessionManager, file_storage: FileStorage) -> None:
        super().__init__(session_manager)
        self.file_storage = file_storage

    async def _resolve_parent(
        self, session: AsyncSession, parent: Optional[StudyParent]
    ) -> Optional[StudyParent]:
        if parent is None:
            return None
        await self._resolver(session).resolve(
            PARENT_MODELS[parent.kind], parent.id, parent.column
        )
        return parent

    async def _store_file(self, upload: Optional[FileUpload]) -> Optional[str]:
        if upload is None or upload.is_empty:
            return None
        return await self.file_storage.save(upload.content, upload.filename)

    async def add(
        self, data: ComplementaryStudyCreate, file: Optional[FileUpload] = None
    ) -> ComplementaryStudyResponse:
        """
        Order a study, optionally attached to a parent and carrying a file.

        The parent is resolved before the file is stored, and the file is
        stored before the record is saved.

        Raises:
            ReferenceNotFoundException: If the parent id does not resolve
            StorageFailureException: If the file cannot be stored
        """
        async with self.session_manager.unit_of_work() as session:
            parent = await self._resolve_parent(session, data.parent)
            location = await self._store_file(file)

            study = ComplementaryStudy(
                **data.model_dump(exclude=PARENT_FIELDS),
                study_file=location,
                parent=parent,
            )
            await self.repository(session).save(study)
            response = self.to_response(study)

        if parent is None:
            logger.info(f"Created standalone ComplementaryStudy {response.id}")
        else:
            logger.info(
                f"Created ComplementaryStudy {response.id} for {parent.kind.value} {parent.id}"
            )
        return response

    async def update(
        self,
        study_id: uuid.UUID,
        data: ComplementaryStudyUpdate,
        file: Optional[FileUpload] = None,
    ) -> ComplementaryStudyResponse:
        """
        Replace a study's fields, parent and file.

        Omitting the parent detaches the study. Omitting the file, or
        sending an empty one, clears the stored location.

        Raises:
            NotFoundException: If the study does not exist
            ReferenceNotFoundException: If the parent id does not resolve
        """
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            study = await repository.get_by_id(study_id)
            parent = await self._resolve_parent(session, data.parent)
            location = await self._store_file(file)

            previous_file = study.study_file
            study.update_fields(**data.model_dump(exclude=PARENT_FIELDS))
            study.attach_to(parent)
            study.study_file = location

            await repository.save(study)
            response = self.to_response(study)

        if previous_file and previous_file != location:
            logger.debug(f"ComplementaryStudy {study_id} no longer references {previous_file}")
        logger.info(f"Updated ComplementaryStudy {study_id}")
        return response

    async def get_by_consultation_id(
        self, consultation_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ComplementaryStudyResponse]:
        return await self._find_by_foreign_key(
            "consultation_id", consultation_id, page, size
        )

    async def get_by_diagnosis_id(
        self, diagnosis_id: uuid.UUID, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ComplementaryStudyResponse]:
        return await self._find_by_foreign_key("diagnosis_id", diagnosis_id, page, size)

    async def get_by_hospitalization_id(
        self,
        hospitalization_id: uuid.UUID,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[ComplementaryStudyResponse]:
        return await self._find_by_foreign_key(
            "hospitalization_id", hospitalization_id, page, size
        )

    async def get_by_state(
        self, state: StudyState, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ComplementaryStudyResponse]:
        """Studies in ``state``, sorted by id."""
        try:
            state = StudyState(state)
        except ValueError as e:
            raise InvalidArgumentException(
                "Unknown study state", field="state", value=state
            ) from e
        page_request = PageRequest.of(page, size)
        async with self.session_manager.get_session() as session:
            result = await self.repository(session).find_page(
                page_request, ComplementaryStudy.state == state
            )
            return self.to_page(result)
