"""
Vet Records Package

Clinical records for a veterinary practice: owners, pets, veterinarians,
consultations, diagnoses, treatments, surgeries, complementary studies,
hospitalizations and invoices.

The package keeps the relationships between those records consistent. Every
create or update resolves the ids it is given, every delete first unlinks or
refuses on dependents, and each operation runs as one transaction.

It includes:

- SQLAlchemy models for every clinical record
- Pydantic schemas for service input and responses
- Async engine and session management with a unit-of-work boundary
- A generic repository and per-record services
- Local file storage for study attachments
- An exception hierarchy with error codes and status mapping

Quick Start:
    >>> from vet_records.database import SessionManager, create_engine
    >>> from vet_records.models import Base
    >>> from vet_records.services import OwnerService, PetService
    >>> from vet_records.schemas import OwnerCreate, PetCreate

    >>> engine = create_engine("sqlite+aiosqlite://")
    >>> manager = SessionManager(engine)
    >>> await manager.initialize_database(Base.metadata)

    >>> owner = await OwnerService(manager).add(
    ...     OwnerCreate(name="Ana", lastname="Diaz", email="ana@example.com")
    ... )
    >>> pet = await PetService(manager).add(
    ...     PetCreate(name="Luna", sex="female", owner_id=owner.id)
    ... )

Requirements:
    - Python 3.11+
    - PostgreSQL 13+ (or SQLite for development)
    - SQLAlchemy 2.0+
    - Pydantic 2.5+
"""

__version__ = "0.1.0"
__license__ = "MIT"

from . import database, exceptions, models, repositories, schemas, services, storage, utils

# Convenience imports for common usage patterns
from .database import SessionManager, create_engine, create_engine_from_settings
from .exceptions import (
    DataConflictException,
    InvalidArgumentException,
    NotFoundException,
    ReferenceNotFoundException,
    StorageFailureException,
    VetRecordsException,
)
from .utils import Settings

__all__ = [
    "__version__",
    "__license__",
    # Core modules
    "database",
    "exceptions",
    "models",
    "repositories",
    "schemas",
    "services",
    "storage",
    "utils",
    # Convenience imports
    "SessionManager",
    "Settings",
    "create_engine",
    "create_engine_from_settings",
    "VetRecordsException",
    "NotFoundException",
    "ReferenceNotFoundException",
    "DataConflictException",
    "InvalidArgumentException",
    "StorageFailureException",
]
