"""
app/schemas/data_upload.py

Response schemas for spreadsheet upload endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.domain.supply_records import BatchOutcome, FileOutcome


class RecordRejectionResponse(BaseModel):
    """
    API response model for one rejected record.
    """

    row_number: int = Field(..., ge=1)
    reasons: list[str] = Field(default_factory=list)


class FileOutcomeResponse(BaseModel):
    """
    API response model for one uploaded file.
    """

    file_name: str
    schema_type: str
    rows_seen: int = Field(..., ge=0)
    records_accepted: int = Field(..., ge=0)
    records_rejected: int = Field(..., ge=0)
    records_persisted: int = Field(..., ge=0)
    status: str
    mapping_source: str | None = None
    rejections: list[RecordRejectionResponse] = Field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_outcome(cls, outcome: FileOutcome) -> "FileOutcomeResponse":
        return cls.model_validate(outcome.to_dict())


class BatchOutcomeResponse(BaseModel):
    """
    API response model for a whole upload submission.
    """

    status: str
    files: list[FileOutcomeResponse] = Field(default_factory=list)
    completed_at: datetime | None = None

    @classmethod
    def from_outcome(cls, outcome: BatchOutcome) -> "BatchOutcomeResponse":
        return cls(
            status=outcome.status.value,
            files=[FileOutcomeResponse.from_outcome(item) for item in outcome.files],
            completed_at=outcome.completed_at,
        )


class UploadLogResponse(BaseModel):
    """
    API response model for one stored upload log row.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    file_name: str
    schema_type: str
    status: str
    mapping_source: str | None = None
    rows_seen: int
    records_accepted: int
    records_rejected: int
    records_persisted: int
    error_message: str | None = None
    created_at: datetime


class HealthResponse(BaseModel):
    status: str = "ok"
