"""
Owner model for the vet-records package.

An owner is the person responsible for one or more pets. Pets reference
their owner through ``pets.owner_id``; the owner row holds no collection.
"""

from typing import Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Owner(BaseModel):
    """Pet owner with contact information."""

    __tablename__ = "owners"

    name: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Owner's first name"
    )

    lastname: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Owner's last name"
    )

    dni: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        unique=True,
        comment="National identity document number",
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, unique=True, comment="Contact email address"
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(30), nullable=True, comment="Contact phone number"
    )

    address: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="Postal address"
    )

    __table_args__ = (Index("idx_owners_name_lastname", "name", "lastname"),)

    def __repr__(self) -> str:
        return f"<Owner(id={self.id}, name='{self.full_name}')>"

    @property
    def full_name(self) -> str:
        """Owner's name and last name joined for display and snapshots."""
        return f"{self.name} {self.lastname}".strip()
