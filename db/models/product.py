"""
db/models/product.py

Uploaded product catalogue rows.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Float, String
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, OwnedRecordMixin


class Product(OwnedRecordMixin, Base):
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    supplier: Mapped[str] = mapped_column(String(100), nullable=False)
    origin: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    unit_cost: Mapped[float] = mapped_column(Float, nullable=False)
    lead_time: Mapped[float] = mapped_column(Float, nullable=False, comment="Days")
    min_order_quantity: Mapped[float] = mapped_column(Float, nullable=False)
    max_order_quantity: Mapped[float] = mapped_column(Float, nullable=False)
    risk_level: Mapped[str] = mapped_column(String(16), nullable=False, comment="low, medium, high")
    certifications: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
