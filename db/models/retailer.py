"""
db/models/retailer.py

Uploaded retailer rows.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Float, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, OwnedRecordMixin


class Retailer(OwnedRecordMixin, Base):
    __tablename__ = "retailers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    retailer_id: Mapped[str] = mapped_column(String(50), nullable=False, comment="Source-side retailer code")
    retailer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    market_segment: Mapped[str] = mapped_column(String(100), nullable=False)
    sales_volume: Mapped[float] = mapped_column(Float, nullable=False)
