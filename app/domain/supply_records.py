"""
app/domain/supply_records.py

Domain models used by the spreadsheet ingestion flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class SchemaType(str, Enum):
    """
    Target record types an uploaded file can be mapped onto.
    """

    PRODUCTS = "products"
    SUPPLIERS = "suppliers"
    FACTORIES = "factories"
    WAREHOUSES = "warehouses"
    RETAILERS = "retailers"
    SHIPMENTS = "shipments"

    @classmethod
    def from_label(cls, label: str) -> "SchemaType":
        """
        Resolve an upload label such as ``"Products"`` into a schema type.

        Raises ValueError for labels outside the six known types.
        """

        normalized = (label or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown data type '{label}'. Allowed values: {allowed}.")


class MappingSource(str, Enum):
    AI = "ai"
    FALLBACK = "fallback"
    MIXED = "mixed"


class FileStatus(str, Enum):
    SUCCEEDED = "Succeeded"
    PARTIALLY_SUCCEEDED = "PartiallySucceeded"
    FAILED = "Failed"


class BatchStatus(str, Enum):
    ALL_SUCCEEDED = "AllSucceeded"
    MIXED = "Mixed"
    ALL_FAILED = "AllFailed"


@dataclass
class MappedRecord:
    """
    One spreadsheet row projected onto canonical field names.

    Provisional until validated: required fields may be missing and values
    may still carry the wrong type.
    """

    schema_type: SchemaType
    row_number: int
    values: dict[str, Any]
    source: MappingSource
    owner_id: str | None = None
    malformed: bool = False

    def with_owner(self, owner_id: str) -> "MappedRecord":
        return MappedRecord(
            schema_type=self.schema_type,
            row_number=self.row_number,
            values=dict(self.values),
            source=self.source,
            owner_id=owner_id,
            malformed=self.malformed,
        )


@dataclass(frozen=True)
class RecordVerdict:
    """
    Accept/reject classification for one mapped record.
    """

    accepted: bool
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecordRejection:
    """
    One dropped record and every reason it was rejected.
    """

    row_number: int
    reasons: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"row_number": self.row_number, "reasons": list(self.reasons)}


@dataclass(frozen=True)
class UploadedFile:
    """
    One file of an upload submission, labelled with its target schema.
    """

    schema_label: str
    file_name: str
    content: bytes


@dataclass(frozen=True)
class UploadSubmission:
    """
    A set of files uploaded together by one already-authenticated user.
    """

    owner_id: str
    files: tuple[UploadedFile, ...]


@dataclass(frozen=True)
class FileOutcome:
    """
    End-of-run report for one uploaded file.
    """

    file_name: str
    schema_type: str
    rows_seen: int
    records_accepted: int
    records_rejected: int
    status: FileStatus
    records_persisted: int = 0
    rejections: list[RecordRejection] = field(default_factory=list)
    mapping_source: MappingSource | None = None
    error: str | None = None

    @staticmethod
    def status_for(*, accepted: int, rejected: int) -> FileStatus:
        if accepted == 0:
            return FileStatus.FAILED
        if rejected == 0:
            return FileStatus.SUCCEEDED
        return FileStatus.PARTIALLY_SUCCEEDED

    @classmethod
    def failed(
        cls,
        *,
        file_name: str,
        schema_type: str,
        error: str,
        rows_seen: int = 0,
    ) -> "FileOutcome":
        return cls(
            file_name=file_name,
            schema_type=schema_type,
            rows_seen=rows_seen,
            records_accepted=0,
            records_rejected=0,
            status=FileStatus.FAILED,
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "schema_type": self.schema_type,
            "rows_seen": self.rows_seen,
            "records_accepted": self.records_accepted,
            "records_rejected": self.records_rejected,
            "records_persisted": self.records_persisted,
            "status": self.status.value,
            "mapping_source": self.mapping_source.value if self.mapping_source else None,
            "rejections": [rejection.to_dict() for rejection in self.rejections],
            "error": self.error,
        }


@dataclass(frozen=True)
class BatchOutcome:
    """
    Per-file outcomes for one upload submission plus the aggregate status.

    The aggregate is AllFailed only when every file failed, so callers must
    read the per-file entries to learn which files need a re-upload.
    """

    files: list[FileOutcome]
    completed_at: datetime | None = None

    @property
    def status(self) -> BatchStatus:
        statuses = [outcome.status for outcome in self.files]
        if all(status is FileStatus.FAILED for status in statuses):
            return BatchStatus.ALL_FAILED
        if any(status is FileStatus.FAILED for status in statuses):
            return BatchStatus.MIXED
        return BatchStatus.ALL_SUCCEEDED

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "files": [outcome.to_dict() for outcome in self.files],
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }
