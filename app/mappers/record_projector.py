"""
app/mappers/record_projector.py

Projection of untyped oracle output into provisional mapped records.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.domain.schema_registry import SchemaDefinition
from app.domain.supply_records import MappedRecord, MappingSource
from app.mappers.value_coercion import DecodedKind, decode_value


class RecordProjector:
    """
    Projects oracle JSON objects onto a schema through the shared decoder.

    Unknown keys are dropped. Values that fail decoding are kept raw so the
    validator rejects them instead of silently defaulting them.
    """

    def project(
        self,
        items: Sequence[Any],
        definition: SchemaDefinition,
        *,
        sequence_start: int = 0,
    ) -> list[MappedRecord]:
        records: list[MappedRecord] = []
        for offset, item in enumerate(items):
            row_number = sequence_start + offset + 1
            if not isinstance(item, dict):
                records.append(
                    MappedRecord(
                        schema_type=definition.schema_type,
                        row_number=row_number,
                        values={},
                        source=MappingSource.AI,
                        malformed=True,
                    )
                )
                continue

            records.append(
                MappedRecord(
                    schema_type=definition.schema_type,
                    row_number=row_number,
                    values=self.project_object(item, definition),
                    source=MappingSource.AI,
                )
            )
        return records

    @staticmethod
    def project_object(item: dict[str, Any], definition: SchemaDefinition) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for spec in definition.fields:
            if spec.name not in item:
                continue
            raw = item[spec.name]
            decoded = decode_value(spec, raw)
            if decoded.kind is DecodedKind.ABSENT:
                continue
            values[spec.name] = decoded.value if decoded.is_usable else raw
        return values
