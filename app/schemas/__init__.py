"""
app/schemas package marker.
"""

from app.schemas.data_upload import (
    BatchOutcomeResponse,
    FileOutcomeResponse,
    HealthResponse,
    RecordRejectionResponse,
    UploadLogResponse,
)

__all__ = [
    "BatchOutcomeResponse",
    "FileOutcomeResponse",
    "HealthResponse",
    "RecordRejectionResponse",
    "UploadLogResponse",
]
