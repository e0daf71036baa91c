"""
app/mappers/value_coercion.py

Typed decoding of raw spreadsheet/oracle values by declared field type.

Both mapping paths (oracle projection and fallback heuristics) decode through
`decode_value`; they differ only in how they repair `absent` and `invalid`
results.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from app.domain.schema_registry import FieldSpec, FieldType

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d-%m-%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%d %B %Y",
    "%d %b %Y",
)

_OUT_OF_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*out\s+of\s+\d+(?:\.\d+)?", re.IGNORECASE)
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.]")
_ARRAY_SEPARATORS = re.compile(r"[;,|]")


class DecodedKind(str, Enum):
    ABSENT = "absent"
    NUMBER = "number"
    DATE = "date"
    STRING_ARRAY = "string_array"
    STRING = "string"
    INVALID = "invalid"


@dataclass(frozen=True)
class DecodedValue:
    """
    Result of decoding one raw value against a field's semantic type.
    """

    kind: DecodedKind
    value: Any = None
    raw: Any = None

    @property
    def is_usable(self) -> bool:
        return self.kind not in (DecodedKind.ABSENT, DecodedKind.INVALID)


ABSENT = DecodedValue(kind=DecodedKind.ABSENT)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and value != value:
        return True
    return isinstance(value, str) and value.strip() == ""


def decode_value(spec: FieldSpec, raw: Any) -> DecodedValue:
    """
    Decode ``raw`` according to ``spec.field_type``.

    Blank input is ``absent`` for every type except plain strings, where the
    empty string is kept so validation can name the empty field.
    """

    if spec.field_type is FieldType.STRING and isinstance(raw, str):
        return DecodedValue(kind=DecodedKind.STRING, value=raw.strip(), raw=raw)
    if is_blank(raw):
        return ABSENT

    if spec.field_type is FieldType.NUMBER:
        return _decode_number(raw)
    if spec.field_type is FieldType.DATE:
        return _decode_date(raw)
    if spec.field_type is FieldType.STRING_ARRAY:
        return _decode_string_array(raw)
    if spec.field_type is FieldType.ENUM:
        return _decode_enum(spec, raw)
    return _decode_string(raw)


def parse_number(raw: Any) -> float | None:
    """
    Extract a float from spreadsheet text such as ``"$1,250.00"`` or
    ``"4 out of 5"``. Returns None when no number can be recovered.
    """

    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    out_of = _OUT_OF_PATTERN.search(text)
    if out_of:
        return float(out_of.group(1))
    cleaned = _NON_NUMERIC_CHARS.sub("", text)
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_date(raw: Any) -> date | None:
    """
    Parse a calendar date from a date/datetime object or common text formats.
    """

    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    if not text:
        return None

    normalized = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(normalized).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _decode_number(raw: Any) -> DecodedValue:
    parsed = parse_number(raw)
    if parsed is None:
        return DecodedValue(kind=DecodedKind.INVALID, raw=raw)
    return DecodedValue(kind=DecodedKind.NUMBER, value=parsed, raw=raw)


def _decode_date(raw: Any) -> DecodedValue:
    parsed = parse_date(raw)
    if parsed is None:
        return DecodedValue(kind=DecodedKind.INVALID, raw=raw)
    return DecodedValue(kind=DecodedKind.DATE, value=parsed, raw=raw)


def _decode_string_array(raw: Any) -> DecodedValue:
    if isinstance(raw, (list, tuple)):
        items = [str(item).strip() for item in raw if not is_blank(item)]
        return DecodedValue(kind=DecodedKind.STRING_ARRAY, value=items, raw=raw)
    if isinstance(raw, str):
        items = [part.strip() for part in _ARRAY_SEPARATORS.split(raw) if part.strip()]
        return DecodedValue(kind=DecodedKind.STRING_ARRAY, value=items, raw=raw)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        # A lone numeric cell such as a certificate number is a one-item list.
        text = str(int(raw)) if isinstance(raw, float) and raw.is_integer() else str(raw)
        return DecodedValue(kind=DecodedKind.STRING_ARRAY, value=[text], raw=raw)
    return DecodedValue(kind=DecodedKind.INVALID, raw=raw)


def _decode_enum(spec: FieldSpec, raw: Any) -> DecodedValue:
    if not isinstance(raw, str):
        return DecodedValue(kind=DecodedKind.INVALID, raw=raw)
    candidate = raw.strip()
    lookup = {_enum_key(value): value for value in spec.enum_values}
    canonical = lookup.get(_enum_key(candidate))
    if canonical is None:
        return DecodedValue(kind=DecodedKind.INVALID, raw=raw)
    return DecodedValue(kind=DecodedKind.STRING, value=canonical, raw=raw)


def _decode_string(raw: Any) -> DecodedValue:
    if isinstance(raw, (dict, list, tuple)):
        return DecodedValue(kind=DecodedKind.INVALID, raw=raw)
    if isinstance(raw, float) and raw.is_integer():
        return DecodedValue(kind=DecodedKind.STRING, value=str(int(raw)), raw=raw)
    return DecodedValue(kind=DecodedKind.STRING, value=str(raw).strip(), raw=raw)


def _enum_key(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())
