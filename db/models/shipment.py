"""
db/models/shipment.py

Uploaded shipment tracking rows.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, Float, Index, String
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, OwnedRecordMixin


class Shipment(OwnedRecordMixin, Base):
    __tablename__ = "shipments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    shipment_id: Mapped[str] = mapped_column(String(50), nullable=False)
    origin: Mapped[str] = mapped_column(String(100), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="On-Time, Delayed, Stuck, Delivered",
    )
    expected_delivery: Mapped[date] = mapped_column(Date, nullable=False)
    actual_delivery: Mapped[date | None] = mapped_column(Date, nullable=True)
    tracking_number: Mapped[str] = mapped_column(String(50), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    total_value: Mapped[float] = mapped_column(Float, nullable=False)
    shipping_cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    shipping_method: Mapped[str] = mapped_column(String(16), nullable=False, comment="Air, Sea, Land, Express")
    carrier: Mapped[str] = mapped_column(String(100), nullable=False)
    current_location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    risk_factors: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)

    __table_args__ = (
        Index("ix_shipments_user_id_status", "user_id", "status"),
    )
