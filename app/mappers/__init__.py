"""
app/mappers package marker.
"""

from app.mappers.fallback_mapper import FallbackHeuristicMapper, normalize_header, slugify
from app.mappers.record_projector import RecordProjector
from app.mappers.value_coercion import DecodedKind, DecodedValue, decode_value, parse_date, parse_number

__all__ = [
    "DecodedKind",
    "DecodedValue",
    "FallbackHeuristicMapper",
    "RecordProjector",
    "decode_value",
    "normalize_header",
    "parse_date",
    "parse_number",
    "slugify",
]
