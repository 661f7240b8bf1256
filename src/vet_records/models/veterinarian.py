"""
Veterinarian model for the vet-records package.

Veterinarians are referenced by consultations; the veterinarian row holds
identity and contact fields only.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Veterinarian(BaseModel):
    """Veterinarian identity record."""

    __tablename__ = "veterinarians"

    name: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Veterinarian's first name"
    )

    lastname: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Veterinarian's last name"
    )

    license_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Professional license number",
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, unique=True, comment="Contact email address"
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(30), nullable=True, comment="Contact phone number"
    )

    specialty: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, comment="Primary specialty"
    )

    def __repr__(self) -> str:
        return f"<Veterinarian(id={self.id}, license_number='{self.license_number}')>"

    @property
    def full_name(self) -> str:
        """Veterinarian's name and last name joined for display and snapshots."""
        return f"{self.name} {self.lastname}".strip()
