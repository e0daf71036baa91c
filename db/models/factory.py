"""
db/models/factory.py

Uploaded factory rows.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Float, String
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, OwnedRecordMixin


class Factory(OwnedRecordMixin, Base):
    __tablename__ = "factories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    factory_id: Mapped[str] = mapped_column(String(50), nullable=False, comment="Source-side factory code")
    factory_name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    capacity: Mapped[float] = mapped_column(Float, nullable=False)
    utilization: Mapped[float] = mapped_column(Float, nullable=False, comment="Percent, 0 to 100")
    lead_time: Mapped[float] = mapped_column(Float, nullable=False, comment="Days")
    quality_rating: Mapped[float] = mapped_column(Float, nullable=False, comment="0 to 5")
    certifications: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
