"""
db/models/supplier.py

Uploaded supplier directory rows.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Float, String
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, OwnedRecordMixin


class Supplier(OwnedRecordMixin, Base):
    __tablename__ = "suppliers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True, comment="0 to 5")
    status: Mapped[str] = mapped_column(String(16), nullable=False, comment="active, inactive, pending")
    risk_level: Mapped[str] = mapped_column(String(16), nullable=False, comment="low, medium, high")
    certifications: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    lead_time: Mapped[float] = mapped_column(Float, nullable=False, comment="Days")
    payment_terms: Mapped[str] = mapped_column(String(120), nullable=False)
    minimum_order: Mapped[float] = mapped_column(Float, nullable=False)
    maximum_order: Mapped[float] = mapped_column(Float, nullable=False)
    specialties: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
