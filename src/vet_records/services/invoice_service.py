"""
Invoice service.

Invoices keep copies of the names they were issued to, so they stay
meaningful once the billed consultation is gone. When an invoice is linked
to a consultation, missing snapshots and a missing total are taken from it.
"""

import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import InvalidArgumentException
from ..models import Consultation, Invoice, Owner, Pet, Veterinarian
from ..schemas.invoice import InvoiceCreate, InvoiceResponse, InvoiceUpdate
from ..schemas.page import Page
from ..utils.pagination import DEFAULT_PAGE_SIZE
from .base import RecordService, contains_ignore_case

logger = logging.getLogger(__name__)

SNAPSHOT_FIELDS = ("veterinarian_name", "owner_name", "pet_name")


class InvoiceService(RecordService[Invoice, InvoiceResponse]):
    """Create, update, query and delete invoices."""

    model = Invoice
    response_schema = InvoiceResponse
    search_field = "pet_name"

    async def _snapshot_from(
        self, session: AsyncSession, consultation: Consultation
    ) -> Dict[str, Any]:
        """Current names and cost of everything a consultation bills for."""
        pet = await self.repository(session, Pet).get_by_id(consultation.pet_id)
        owner = await self.repository(session, Owner).get_by_id(pet.owner_id)
        veterinarian = await self.repository(session, Veterinarian).get_by_id(
            consultation.veterinarian_id
        )
        return {
            "veterinarian_name": veterinarian.full_name,
            "owner_name": owner.full_name,
            "pet_name": pet.name,
            "total_cost": consultation.cost,
        }

    async def _build_fields(
        self,
        session: AsyncSession,
        data: InvoiceCreate,
        consultation: Optional[Consultation],
    ) -> Dict[str, Any]:
        fields = data.model_dump(exclude={"consultation_id"})
        if consultation is not None:
            snapshot = await self._snapshot_from(session, consultation)
            for key, value in snapshot.items():
                if fields.get(key) is None:
                    fields[key] = value

        if fields.get("total_cost") is None:
            fields["total_cost"] = Decimal("0.00")
        missing = [name for name in SNAPSHOT_FIELDS if not fields.get(name)]
        if missing:
            raise InvalidArgumentException(
                "Invoice names must be supplied when no consultation is linked",
                field=missing[0],
            )
        return fields

    async def add(self, data: InvoiceCreate) -> InvoiceResponse:
        """
        Issue an invoice.

        Raises:
            ReferenceNotFoundException: If the consultation does not exist
            DataConflictException: If the consultation is already invoiced
            InvalidArgumentException: If names are missing and cannot be
                taken from a consultation
        """
        async with self.session_manager.unit_of_work() as session:
            consultation = await self._resolver(session).resolve_optional(
                Consultation, data.consultation_id, "consultation_id"
            )
            fields = await self._build_fields(session, data, consultation)
            invoice = Invoice(
                **fields,
                consultation_id=consultation.id if consultation is not None else None,
            )
            await self.repository(session).save(invoice)
            response = self.to_response(invoice)

        logger.info(f"Created Invoice {response.id}")
        return response

    async def update(self, invoice_id: uuid.UUID, data: InvoiceUpdate) -> InvoiceResponse:
        """
        Replace an invoice's fields.

        A missing ``consultation_id`` unlinks the invoice; the snapshots it
        already carries are kept unless new values are supplied.
        """
        async with self.session_manager.unit_of_work() as session:
            repository = self.repository(session)
            invoice = await repository.get_by_id(invoice_id)
            consultation = await self._resolver(session).resolve_optional(
                Consultation, data.consultation_id, "consultation_id"
            )

            fields = data.model_dump(exclude={"consultation_id"})
            for key in (*SNAPSHOT_FIELDS, "total_cost"):
                if fields[key] is None:
                    fields[key] = getattr(invoice, key)
            invoice.update_fields(**fields)
            invoice.consultation_id = consultation.id if consultation is not None else None

            await repository.save(invoice)
            response = self.to_response(invoice)

        logger.info(f"Updated Invoice {invoice_id}")
        return response

    async def get_by_consultation_id(self, consultation_id: uuid.UUID) -> InvoiceResponse:
        """
        The invoice issued for a consultation.

        Raises:
            NotFoundException: If the consultation has no invoice
        """
        async with self.session_manager.get_session() as session:
            invoice = await self.repository(session).find_one_by(
                "consultation_id", consultation_id
            )
            if invoice is None:
                raise self._not_linked(Consultation.get_entity_kind(), consultation_id)
            return self.to_response(invoice)

    async def search_by_pet_name(
        self, query: str = "", page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[InvoiceResponse]:
        return await self.search(query, page, size)

    async def search_by_owner_name(
        self, query: str = "", page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Page[InvoiceResponse]:
        statement = select(Invoice)
        condition = contains_ignore_case([Invoice.owner_name], query)
        if condition is not None:
            statement = statement.where(condition)
        statement = statement.order_by(Invoice.owner_name, Invoice.id)
        return await self._find_page_by_statement(statement, page, size)
