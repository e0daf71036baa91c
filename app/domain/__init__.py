"""
app/domain package marker.
"""

from app.domain.schema_registry import (
    DEFAULT_REGISTRY,
    FieldSpec,
    FieldType,
    SchemaDefinition,
    SchemaRegistry,
    get_schema_registry,
)
from app.domain.supply_records import (
    BatchOutcome,
    BatchStatus,
    FileOutcome,
    FileStatus,
    MappedRecord,
    MappingSource,
    RecordRejection,
    RecordVerdict,
    SchemaType,
    UploadedFile,
    UploadSubmission,
)

__all__ = [
    "BatchOutcome",
    "BatchStatus",
    "DEFAULT_REGISTRY",
    "FieldSpec",
    "FieldType",
    "FileOutcome",
    "FileStatus",
    "MappedRecord",
    "MappingSource",
    "RecordRejection",
    "RecordVerdict",
    "SchemaDefinition",
    "SchemaRegistry",
    "SchemaType",
    "UploadSubmission",
    "UploadedFile",
    "get_schema_registry",
]
