"""
app/mappers/fallback_mapper.py

Deterministic column-name mapper used whenever the mapping oracle's output
cannot be used.

Every input row yields exactly one provisional record. Precision is traded for
availability: unknown headers are ignored and missing required fields receive
their documented defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import date, timedelta
from typing import Any

from app.domain.schema_registry import FieldSpec, FieldType, SchemaDefinition, SchemaRegistry, get_schema_registry
from app.domain.supply_records import MappedRecord, MappingSource, SchemaType
from app.mappers.value_coercion import DecodedKind, decode_value

logger = logging.getLogger(__name__)

_MISSING = object()


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return "".join(ch for ch in str(header).strip().lower() if ch.isalnum())


def slugify(value: str) -> str:
    return ".".join(value.strip().lower().split())


class _TemplateContext(dict):
    def __missing__(self, key: str) -> str:
        return ""


class FallbackHeuristicMapper:
    """
    Maps raw rows onto a target schema using ordered header synonyms.
    """

    def __init__(
        self,
        *,
        registry: SchemaRegistry | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._registry = registry
        self._today = today or date.today

    def map_rows(
        self,
        rows: Sequence[Mapping[str, Any]],
        schema_type: SchemaType,
        *,
        sequence_start: int = 0,
    ) -> list[MappedRecord]:
        """
        Map every row; ``sequence_start`` is the zero-based position of the
        first row within its file and drives synthetic identifiers.
        """

        definition = self._definition(schema_type)
        records: list[MappedRecord] = []
        for offset, row in enumerate(rows):
            sequence = sequence_start + offset
            records.append(
                MappedRecord(
                    schema_type=schema_type,
                    row_number=sequence + 1,
                    values=self.map_row(row, definition, sequence=sequence),
                    source=MappingSource.FALLBACK,
                )
            )
        logger.debug(
            "Fallback mapped rows schema=%s rows=%d sequence_start=%d",
            schema_type.value,
            len(records),
            sequence_start,
        )
        return records

    def map_row(
        self,
        row: Mapping[str, Any],
        definition: SchemaDefinition,
        *,
        sequence: int,
    ) -> dict[str, Any]:
        header_lookup = {normalize_header(key): key for key in row if normalize_header(key)}
        values: dict[str, Any] = {}

        for spec in definition.fields:
            raw = self._find_value(row, header_lookup, spec)
            if raw is _MISSING:
                self._apply_missing(spec, values, sequence)
                continue

            decoded = decode_value(spec, raw)
            if decoded.is_usable:
                values[spec.name] = decoded.value
            elif decoded.kind is DecodedKind.INVALID and spec.field_type is not FieldType.NUMBER:
                # Unparseable dates and enum values stay raw so validation reports them.
                values[spec.name] = raw
            else:
                self._apply_missing(spec, values, sequence)

        return values

    def _definition(self, schema_type: SchemaType) -> SchemaDefinition:
        registry = self._registry or get_schema_registry()
        return registry.get(schema_type)

    @staticmethod
    def _find_value(
        row: Mapping[str, Any],
        header_lookup: Mapping[str, str],
        spec: FieldSpec,
    ) -> Any:
        for synonym in spec.synonyms:
            if synonym in row:
                return row[synonym]
        for synonym in spec.synonyms:
            header = header_lookup.get(normalize_header(synonym))
            if header is not None:
                return row[header]
        return _MISSING

    def _apply_missing(self, spec: FieldSpec, values: dict[str, Any], sequence: int) -> None:
        if spec.omit_if_absent:
            return
        if spec.default_days_from_now is not None:
            values[spec.name] = self._today() + timedelta(days=spec.default_days_from_now)
        elif spec.default_template is not None:
            values[spec.name] = self._render_template(spec.default_template, values, sequence)
        elif spec.default is not None:
            default = spec.default
            values[spec.name] = list(default) if isinstance(default, (list, tuple)) else default

    @staticmethod
    def _render_template(template: str, values: Mapping[str, Any], sequence: int) -> str:
        context = _TemplateContext(n=sequence + 1)
        for name, value in values.items():
            if isinstance(value, str):
                context[name] = value
                context[f"{name}_slug"] = slugify(value)
        return template.format_map(context)
