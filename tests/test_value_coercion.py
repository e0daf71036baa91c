"""
tests/test_value_coercion.py

Pytest unit tests for typed decoding of raw spreadsheet values.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from app.domain.schema_registry import DEFAULT_REGISTRY
from app.domain.supply_records import SchemaType
from app.mappers.value_coercion import DecodedKind, decode_value, is_blank, parse_date, parse_number

SHIPMENTS = DEFAULT_REGISTRY.get(SchemaType.SHIPMENTS)
PRODUCTS = DEFAULT_REGISTRY.get(SchemaType.PRODUCTS)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$12.50", 12.5),
        ("1,250.00", 1250.0),
        ("4 out of 5", 4.0),
        ("30 days", 30.0),
        (7, 7.0),
        (2.5, 2.5),
    ],
)
def test_parse_number_extracts_numeric_text(raw: object, expected: float) -> None:
    assert parse_number(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["abc", "", "..", True])
def test_parse_number_returns_none_when_unrecoverable(raw: object) -> None:
    assert parse_number(raw) is None


def test_invalid_number_decodes_as_invalid() -> None:
    decoded = decode_value(PRODUCTS.field("unitCost"), "n/a")

    assert decoded.kind is DecodedKind.INVALID
    assert decoded.raw == "n/a"
    assert not decoded.is_usable


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-03-05", date(2024, 3, 5)),
        ("2024-03-05T10:00:00Z", date(2024, 3, 5)),
        ("03/05/2024", date(2024, 3, 5)),
        ("5 March 2024", date(2024, 3, 5)),
        (datetime(2024, 3, 5, 8, 30), date(2024, 3, 5)),
        (date(2024, 3, 5), date(2024, 3, 5)),
    ],
)
def test_parse_date_accepts_common_formats(raw: object, expected: date) -> None:
    assert parse_date(raw) == expected


def test_impossible_date_is_invalid() -> None:
    decoded = decode_value(SHIPMENTS.field("expectedDelivery"), "2024-13-45")

    assert decoded.kind is DecodedKind.INVALID


# ---------------------------------------------------------------------------
# Arrays, enums, strings
# ---------------------------------------------------------------------------


def test_string_array_splits_on_common_separators() -> None:
    decoded = decode_value(PRODUCTS.field("certifications"), "ISO9001; CE | FDA,RoHS")

    assert decoded.kind is DecodedKind.STRING_ARRAY
    assert decoded.value == ["ISO9001", "CE", "FDA", "RoHS"]


def test_string_array_accepts_lists() -> None:
    decoded = decode_value(PRODUCTS.field("certifications"), ["ISO9001", " ", None, "CE"])

    assert decoded.value == ["ISO9001", "CE"]


@pytest.mark.parametrize("raw, expected", [(9001, ["9001"]), (9001.0, ["9001"]), (2.5, ["2.5"])])
def test_string_array_wraps_a_numeric_cell(raw: float, expected: list[str]) -> None:
    decoded = decode_value(PRODUCTS.field("certifications"), raw)

    assert decoded.kind is DecodedKind.STRING_ARRAY
    assert decoded.value == expected


def test_string_array_rejects_booleans_and_objects() -> None:
    for raw in (True, {"name": "ISO9001"}):
        assert decode_value(PRODUCTS.field("certifications"), raw).kind is DecodedKind.INVALID


@pytest.mark.parametrize("raw", ["on time", "ON-TIME", "On Time"])
def test_enum_matches_canonical_spelling(raw: str) -> None:
    decoded = decode_value(SHIPMENTS.field("status"), raw)

    assert decoded.kind is DecodedKind.STRING
    assert decoded.value == "On-Time"


def test_unknown_enum_value_is_invalid() -> None:
    decoded = decode_value(SHIPMENTS.field("status"), "Lost")

    assert decoded.kind is DecodedKind.INVALID


def test_empty_string_is_kept_for_string_fields() -> None:
    decoded = decode_value(PRODUCTS.field("name"), "   ")

    assert decoded.kind is DecodedKind.STRING
    assert decoded.value == ""


def test_blank_is_absent_for_non_string_fields() -> None:
    assert decode_value(PRODUCTS.field("unitCost"), "  ").kind is DecodedKind.ABSENT
    assert decode_value(PRODUCTS.field("unitCost"), None).kind is DecodedKind.ABSENT


def test_integral_float_becomes_plain_string() -> None:
    decoded = decode_value(PRODUCTS.field("name"), 1042.0)

    assert decoded.value == "1042"


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank(float("nan"))
    assert is_blank(" \t")
    assert not is_blank(0)
    assert not is_blank("x")
