"""
app/validators/record_validator.py

Schema-specific validation of provisional mapped records.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

from app.domain.schema_registry import FieldSpec, FieldType, SchemaDefinition, SchemaRegistry, get_schema_registry
from app.domain.supply_records import MappedRecord, RecordVerdict

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_MISSING = object()


class RecordValidator:
    """
    Classifies mapped records as accepted or rejected.

    Validation never mutates the record and collects every violation, so a
    rejected record carries one reason per broken rule.
    """

    def __init__(self, *, registry: SchemaRegistry | None = None) -> None:
        self._registry = registry

    def validate(self, record: MappedRecord) -> RecordVerdict:
        definition = (self._registry or get_schema_registry()).get(record.schema_type)
        reasons = self.collect_reasons(record, definition)
        return RecordVerdict(accepted=not reasons, reasons=tuple(reasons))

    def collect_reasons(self, record: MappedRecord, definition: SchemaDefinition) -> list[str]:
        if record.malformed:
            return ["record: expected an object"]

        reasons: list[str] = []
        for spec in definition.fields:
            value = record.values.get(spec.name, _MISSING)
            if value is _MISSING or value is None:
                if spec.required:
                    reasons.append(f"{spec.name}: required, missing")
                continue
            reasons.extend(self._check_value(spec, value))
        return reasons

    def _check_value(self, spec: FieldSpec, value: Any) -> list[str]:
        if spec.field_type is FieldType.STRING:
            return self._check_string(spec, value)
        if spec.field_type is FieldType.NUMBER:
            return self._check_number(spec, value)
        if spec.field_type is FieldType.ENUM:
            return self._check_enum(spec, value)
        if spec.field_type is FieldType.DATE:
            return self._check_date(spec, value)
        return self._check_string_array(spec, value)

    @staticmethod
    def _check_string(spec: FieldSpec, value: Any) -> list[str]:
        if not isinstance(value, str):
            return [f"{spec.name}: must be a string"]
        stripped = value.strip()
        if not stripped:
            return [f"{spec.name}: required, empty"] if spec.required else []

        reasons: list[str] = []
        if spec.max_length is not None and len(stripped) > spec.max_length:
            reasons.append(f"{spec.name}: exceeds {spec.max_length} characters")
        if spec.email and not EMAIL_PATTERN.match(stripped):
            reasons.append(f"{spec.name}: invalid email address")
        return reasons

    @staticmethod
    def _check_number(spec: FieldSpec, value: Any) -> list[str]:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            return [f"{spec.name}: must be a number"]

        reasons: list[str] = []
        if spec.minimum is not None and value < spec.minimum:
            reasons.append(f"{spec.name}: must be >= {spec.minimum:g}")
        if spec.maximum is not None and value > spec.maximum:
            reasons.append(f"{spec.name}: must be <= {spec.maximum:g}")
        return reasons

    @staticmethod
    def _check_enum(spec: FieldSpec, value: Any) -> list[str]:
        if value in spec.enum_values:
            return []
        return [f"{spec.name}: must be one of {', '.join(spec.enum_values)}"]

    @staticmethod
    def _check_date(spec: FieldSpec, value: Any) -> list[str]:
        if isinstance(value, date) and not isinstance(value, datetime):
            return []
        return [f"{spec.name}: invalid date"]

    @staticmethod
    def _check_string_array(spec: FieldSpec, value: Any) -> list[str]:
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            return []
        return [f"{spec.name}: must be a list of strings"]
