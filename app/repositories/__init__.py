"""
app/repositories package marker.
"""

from app.repositories.supply_record_repository import (
    MODEL_BY_SCHEMA,
    RecordStore,
    RecordStoreError,
    SQLAlchemyRecordStore,
    SupplyRecordRepository,
)
from app.repositories.upload_log_repository import UploadLogRepository

__all__ = [
    "MODEL_BY_SCHEMA",
    "RecordStore",
    "RecordStoreError",
    "SQLAlchemyRecordStore",
    "SupplyRecordRepository",
    "UploadLogRepository",
]
