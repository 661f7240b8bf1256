"""
Pytest configuration and fixtures for vet-records tests.

Every test that touches the store gets its own in-memory SQLite database,
created from the model metadata and thrown away afterwards. Factory helpers
build records directly through a session so service tests can arrange data
without going through the code under test.
"""

import uuid
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from vet_records.database.connection import close_engine, create_engine
from vet_records.database.session import SessionManager
from vet_records.models import (
    ComplementaryStudy,
    Consultation,
    ConsultationState,
    Diagnosis,
    Hospitalization,
    Invoice,
    Owner,
    Pet,
    PetSex,
    PetSpecies,
    Veterinarian,
)
from vet_records.models.base import Base
from vet_records.storage import LocalFileStorage

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a private in-memory database engine for one test."""
    engine = create_engine(TEST_DATABASE_URL)
    yield engine
    await close_engine(engine)


@pytest_asyncio.fixture
async def session_manager(
    test_engine: AsyncEngine,
) -> AsyncGenerator[SessionManager, None]:
    """Create a session manager with the schema in place."""
    manager = SessionManager(test_engine)
    await manager.initialize_database(Base.metadata)
    yield manager
    await manager.cleanup_database(Base.metadata, drop_all=True)


@pytest_asyncio.fixture
async def async_session(
    session_manager: SessionManager,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a session for arranging data directly.

    Changes are committed when the test finishes with the session so that
    services, which open their own sessions, can see them.
    """
    async with session_manager.get_session() as session:
        yield session


@pytest.fixture
def file_storage(tmp_path: Path) -> LocalFileStorage:
    return LocalFileStorage(tmp_path / "uploads")


# Factory classes for creating test records
class OwnerFactory:
    """Factory for creating test Owner instances."""

    @staticmethod
    def build(**kwargs) -> Owner:
        """Build an Owner instance without saving to database."""
        suffix = uuid.uuid4().hex[:8]
        defaults = {
            "name": "Ana",
            "lastname": "Diaz",
            "dni": suffix,
            "email": f"owner_{suffix}@example.com",
            "phone": "+34 600 000 000",
            "address": "Calle Mayor 1",
        }
        defaults.update(kwargs)
        return Owner(**defaults)

    @staticmethod
    async def create(session: AsyncSession, **kwargs) -> Owner:
        """Create, save and commit an Owner."""
        owner = OwnerFactory.build(**kwargs)
        session.add(owner)
        await session.commit()
        return owner


class VeterinarianFactory:
    """Factory for creating test Veterinarian instances."""

    @staticmethod
    def build(**kwargs) -> Veterinarian:
        suffix = uuid.uuid4().hex[:8]
        defaults = {
            "name": "Luis",
            "lastname": "Perez",
            "license_number": f"VET-{suffix.upper()}",
            "email": f"vet_{suffix}@example.com",
            "specialty": "General practice",
        }
        defaults.update(kwargs)
        return Veterinarian(**defaults)

    @staticmethod
    async def create(session: AsyncSession, **kwargs) -> Veterinarian:
        veterinarian = VeterinarianFactory.build(**kwargs)
        session.add(veterinarian)
        await session.commit()
        return veterinarian


class PetFactory:
    """Factory for creating test Pet instances."""

    @staticmethod
    def build(owner_id: uuid.UUID, **kwargs) -> Pet:
        defaults = {
            "owner_id": owner_id,
            "name": "Luna",
            "breed": "Mixed",
            "species": PetSpecies.DOG,
            "sex": PetSex.FEMALE,
            "birth_date": date(2020, 1, 1),
        }
        defaults.update(kwargs)
        return Pet(**defaults)

    @staticmethod
    async def create(session: AsyncSession, owner: Owner = None, **kwargs) -> Pet:
        """Create a Pet, creating an owner for it if none is given."""
        if owner is None:
            owner = await OwnerFactory.create(session)
        pet = PetFactory.build(owner_id=owner.id, **kwargs)
        session.add(pet)
        await session.commit()
        return pet


class ConsultationFactory:
    """Factory for creating test Consultation instances."""

    @staticmethod
    async def create(
        session: AsyncSession,
        pet: Pet = None,
        veterinarian: Veterinarian = None,
        **kwargs,
    ) -> Consultation:
        if pet is None:
            pet = await PetFactory.create(session)
        if veterinarian is None:
            veterinarian = await VeterinarianFactory.create(session)
        defaults = {
            "pet_id": pet.id,
            "veterinarian_id": veterinarian.id,
            "name": "Annual checkup",
            "consultation_date": date(2024, 5, 10),
            "anamnesis": "No complaints",
            "observations": "Healthy",
            "state": ConsultationState.COMPLETED,
            "cost": Decimal("45.00"),
        }
        defaults.update(kwargs)
        consultation = Consultation(**defaults)
        session.add(consultation)
        await session.commit()
        return consultation


class DiagnosisFactory:
    """Factory for creating test Diagnosis instances."""

    @staticmethod
    async def create(
        session: AsyncSession, consultation: Consultation = None, **kwargs
    ) -> Diagnosis:
        if consultation is None:
            consultation = await ConsultationFactory.create(session)
        defaults = {
            "consultation_id": consultation.id,
            "name": "Otitis",
            "description": "Inflamed left ear canal",
            "diagnosis_date": date(2024, 5, 10),
        }
        defaults.update(kwargs)
        diagnosis = Diagnosis(**defaults)
        session.add(diagnosis)
        await session.commit()
        return diagnosis


class HospitalizationFactory:
    """Factory for creating test Hospitalization instances."""

    @staticmethod
    async def create(session: AsyncSession, pet: Pet = None, **kwargs) -> Hospitalization:
        if pet is None:
            pet = await PetFactory.create(session)
        defaults = {
            "pet_id": pet.id,
            "admission_date": date(2024, 6, 1),
            "reason": "Post-operative observation",
        }
        defaults.update(kwargs)
        hospitalization = Hospitalization(**defaults)
        session.add(hospitalization)
        await session.commit()
        return hospitalization


class StudyFactory:
    """Factory for creating test ComplementaryStudy instances."""

    @staticmethod
    async def create(session: AsyncSession, **kwargs) -> ComplementaryStudy:
        defaults = {"study_type": "Blood panel"}
        defaults.update(kwargs)
        study = ComplementaryStudy(**defaults)
        session.add(study)
        await session.commit()
        return study


class InvoiceFactory:
    """Factory for creating test Invoice instances."""

    @staticmethod
    async def create(
        session: AsyncSession, consultation: Consultation = None, **kwargs
    ) -> Invoice:
        defaults = {
            "consultation_id": consultation.id if consultation else None,
            "invoice_date": date(2024, 5, 10),
            "total_cost": Decimal("45.00"),
            "veterinarian_name": "Luis Perez",
            "owner_name": "Ana Diaz",
            "pet_name": "Luna",
        }
        defaults.update(kwargs)
        invoice = Invoice(**defaults)
        session.add(invoice)
        await session.commit()
        return invoice
