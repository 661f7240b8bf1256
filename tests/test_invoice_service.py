"""
Tests for InvoiceService name snapshots and consultation links.
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest

from vet_records.exceptions import (
    DataConflictException,
    InvalidArgumentException,
    NotFoundException,
    ReferenceNotFoundException,
)
from vet_records.schemas import InvoiceCreate, InvoiceUpdate
from vet_records.services import InvoiceService

from .conftest import (
    ConsultationFactory,
    InvoiceFactory,
    OwnerFactory,
    PetFactory,
    VeterinarianFactory,
)


@pytest.fixture
def service(session_manager):
    return InvoiceService(session_manager)


class TestAddInvoice:
    """Test cases for issuing invoices."""

    @pytest.mark.asyncio
    async def test_snapshots_filled_from_consultation(self, service, async_session):
        owner = await OwnerFactory.create(async_session, name="Rosa", lastname="Bravo")
        pet = await PetFactory.create(async_session, owner=owner, name="Kira")
        veterinarian = await VeterinarianFactory.create(
            async_session, name="Marta", lastname="Soler"
        )
        consultation = await ConsultationFactory.create(
            async_session, pet=pet, veterinarian=veterinarian, cost=Decimal("60.00")
        )

        response = await service.add(
            InvoiceCreate(invoice_date=date(2024, 5, 11), consultation_id=consultation.id)
        )

        assert response.consultation_id == consultation.id
        assert response.owner_name == "Rosa Bravo"
        assert response.pet_name == "Kira"
        assert response.veterinarian_name == "Marta Soler"
        assert response.total_cost == Decimal("60.00")

    @pytest.mark.asyncio
    async def test_supplied_values_win_over_snapshot(self, service, async_session):
        consultation = await ConsultationFactory.create(async_session)

        response = await service.add(
            InvoiceCreate(
                invoice_date=date(2024, 5, 11),
                consultation_id=consultation.id,
                total_cost=Decimal("99.90"),
                pet_name="Luna II",
            )
        )

        assert response.total_cost == Decimal("99.90")
        assert response.pet_name == "Luna II"
        assert response.owner_name == "Ana Diaz"

    @pytest.mark.asyncio
    async def test_consultation_without_cost_defaults_total(self, service, async_session):
        consultation = await ConsultationFactory.create(async_session, cost=None)

        response = await service.add(
            InvoiceCreate(invoice_date=date(2024, 5, 11), consultation_id=consultation.id)
        )

        assert response.total_cost == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_unlinked_invoice_requires_names(self, service):
        with pytest.raises(InvalidArgumentException) as exc_info:
            await service.add(InvoiceCreate(invoice_date=date(2024, 5, 11), pet_name="Kira"))

        assert exc_info.value.details["field"] == "veterinarian_name"
        assert (await service.get_page()).total_elements == 0

    @pytest.mark.asyncio
    async def test_unlinked_invoice_with_names(self, service):
        response = await service.add(
            InvoiceCreate(
                invoice_date=date(2024, 5, 11),
                veterinarian_name="Marta Soler",
                owner_name="Rosa Bravo",
                pet_name="Kira",
            )
        )

        assert response.consultation_id is None
        assert response.total_cost == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_missing_consultation(self, service):
        with pytest.raises(ReferenceNotFoundException) as exc_info:
            await service.add(
                InvoiceCreate(invoice_date=date(2024, 5, 11), consultation_id=uuid.uuid4())
            )

        assert exc_info.value.field == "consultation_id"

    @pytest.mark.asyncio
    async def test_consultation_invoiced_once(self, service, async_session):
        consultation = await ConsultationFactory.create(async_session)
        await InvoiceFactory.create(async_session, consultation=consultation)

        with pytest.raises(DataConflictException):
            await service.add(
                InvoiceCreate(invoice_date=date(2024, 5, 12), consultation_id=consultation.id)
            )


class TestUpdateInvoice:
    """Test cases for replacing invoices."""

    @pytest.mark.asyncio
    async def test_update_without_consultation_unlinks_and_keeps_snapshots(
        self, service, async_session
    ):
        consultation = await ConsultationFactory.create(async_session)
        invoice = await InvoiceFactory.create(async_session, consultation=consultation)

        response = await service.update(
            invoice.id, InvoiceUpdate(invoice_date=date(2024, 6, 1))
        )

        assert response.consultation_id is None
        assert response.invoice_date == date(2024, 6, 1)
        assert response.pet_name == invoice.pet_name
        assert response.total_cost == invoice.total_cost

    @pytest.mark.asyncio
    async def test_update_relinks(self, service, async_session):
        invoice = await InvoiceFactory.create(async_session)
        consultation = await ConsultationFactory.create(async_session)

        response = await service.update(
            invoice.id,
            InvoiceUpdate(
                invoice_date=invoice.invoice_date,
                consultation_id=consultation.id,
                owner_name="New Owner",
            ),
        )

        assert response.consultation_id == consultation.id
        assert response.owner_name == "New Owner"

    @pytest.mark.asyncio
    async def test_update_missing(self, service):
        with pytest.raises(NotFoundException):
            await service.update(uuid.uuid4(), InvoiceUpdate(invoice_date=date(2024, 6, 1)))


class TestInvoiceQueries:
    """Test cases for invoice lookups and searches."""

    @pytest.mark.asyncio
    async def test_get_by_consultation_id(self, service, async_session):
        consultation = await ConsultationFactory.create(async_session)
        invoice = await InvoiceFactory.create(async_session, consultation=consultation)

        response = await service.get_by_consultation_id(consultation.id)

        assert response.id == invoice.id

    @pytest.mark.asyncio
    async def test_get_by_consultation_id_without_invoice(self, service, async_session):
        consultation = await ConsultationFactory.create(async_session)

        with pytest.raises(NotFoundException, match="No Invoice linked"):
            await service.get_by_consultation_id(consultation.id)

    @pytest.mark.asyncio
    async def test_search_by_pet_and_owner_name(self, service, async_session):
        await InvoiceFactory.create(async_session, pet_name="Kira", owner_name="Rosa Bravo")
        await InvoiceFactory.create(async_session, pet_name="Nala", owner_name="Juan Lopez")

        by_pet = await service.search_by_pet_name("kir")
        by_owner = await service.search_by_owner_name("lopez")

        assert [item.pet_name for item in by_pet.items] == ["Kira"]
        assert [item.owner_name for item in by_owner.items] == ["Juan Lopez"]
