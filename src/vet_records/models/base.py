"""
Base model class for all SQLAlchemy models in the vet-records package.

This module provides the foundational base model class that all clinical
records inherit from, including the UUID primary key, audit timestamps and
common utility methods.

The BaseModel class follows modern SQLAlchemy 2.0 patterns with:
- UUID primary keys generated client-side, so a record's id is known before flush
- Automatic timestamp management for audit trails
- Common utility methods for data conversion and field updates

Relationships between records are stored as foreign key columns on the
child only. Parent-to-child views are obtained by querying the child table,
never through ORM collections.

Example:
    >>> from vet_records.models.base import BaseModel
    >>> from sqlalchemy.orm import Mapped, mapped_column
    >>> from sqlalchemy import String

    >>> class MyRecord(BaseModel):
    ...     __tablename__ = "my_records"
    ...     name: Mapped[str] = mapped_column(String(100))

    >>> record = MyRecord(name="Test")
    >>> record.to_dict()["name"]
    'Test'
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, TypeVar

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

# Type variable for model classes
T = TypeVar("T", bound="BaseModel")


def utc_now() -> datetime:
    """Return the current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base declarative class for all SQLAlchemy models.

    Configures the SQLAlchemy declarative base with portable
    type mappings: UUID fields use the native type on PostgreSQL and CHAR(32) elsewhere.

    Attributes:
        type_annotation_map: Maps Python types to SQLAlchemy column types
    """

    type_annotation_map = {
        uuid.UUID: Uuid(as_uuid=True),
    }


class BaseModel(Base):
    """
    Abstract base model class providing common functionality for all records.

    - **UUID Primary Keys**: UUID4 assigned when the instance is constructed
    - **Audit Fields**: Creation and modification timestamps (UTC)
    - **Utility Methods**: Dictionary conversion and bulk field updates

    Attributes:
        id (UUID): Primary key, automatically generated UUID4
        created_at (datetime): Timestamp when record was created (UTC)
        updated_at (datetime): Timestamp when record was last updated (UTC)

    Note:
        This is an abstract base class and cannot be instantiated directly.
        All concrete models must define a __tablename__ attribute.
    """

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
    )

    def __init__(self, **kwargs: Any) -> None:
        # Column defaults only fire at flush; assign the id eagerly so
        # callers can link records before anything is written.
        kwargs.setdefault("id", uuid.uuid4())
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        """
        Return string representation of the model instance.

        Returns:
            String in format: <ModelName(id=uuid)>
        """
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model instance to dictionary representation.

        Converts all column values to JSON-serializable types:
        - datetime and date objects to ISO format strings
        - UUID objects to string representation
        - Decimal objects to strings
        - Enum members to their value
        - Other types remain unchanged

        Returns:
            Dictionary with column names as keys and serialized values.
        """
        result: Dict[str, Any] = {}
        for column in self.__table__.columns:
            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                result[column.key] = value.isoformat()
            elif isinstance(value, uuid.UUID):
                result[column.key] = str(value)
            elif isinstance(value, Decimal):
                result[column.key] = str(value)
            elif isinstance(value, Enum):
                result[column.key] = value.value
            else:
                result[column.key] = value
        return result

    @classmethod
    def get_table_name(cls) -> str:
        """Get the database table name for this model."""
        return cls.__tablename__

    @classmethod
    def get_entity_kind(cls) -> str:
        """Get the human-readable record kind used in error reports."""
        return cls.__name__

    def update_fields(self, **kwargs: Any) -> None:
        """
        Update multiple fields on the model instance in a single operation.

        Args:
            **kwargs: Field names as keys and new values as values.
                     Only existing model attributes can be updated.

        Raises:
            AttributeError: If any field name doesn't exist on the model.

        Example:
            >>> owner.update_fields(name="New", phone="555-0100")

        Note:
            This method only modifies the instance. The change is written
            when the surrounding unit of work flushes.
        """
        for field, value in kwargs.items():
            if hasattr(self, field):
                setattr(self, field, value)
            else:
                raise AttributeError(
                    f"'{self.__class__.__name__}' has no attribute '{field}'"
                )
