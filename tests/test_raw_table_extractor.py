"""
tests/test_raw_table_extractor.py

Pytest unit tests for RawTableExtractor using in-memory CSV and Excel bytes.
"""

from __future__ import annotations

import io
from datetime import datetime

import pandas as pd
import pytest

from app.extractors.raw_table_extractor import (
    INVALID_FILE_TYPE_MESSAGE,
    NO_DATA_MESSAGE,
    ExtractionError,
    RawTableExtractor,
)


@pytest.fixture()
def extractor() -> RawTableExtractor:
    return RawTableExtractor()


def test_csv_rows_keep_headers_and_text(extractor: RawTableExtractor) -> None:
    content = b"Product,Price\nWidget,$12.50\n,9\n"

    rows = extractor.extract("products.csv", content)

    assert rows == [
        {"Product": "Widget", "Price": "$12.50"},
        {"Product": "", "Price": "9"},
    ]


def test_csv_blank_rows_are_dropped(extractor: RawTableExtractor) -> None:
    content = b"Product,Price\nWidget,1\n,\n\nGadget,2\n"

    rows = extractor.extract("PRODUCTS.CSV", content)

    assert [row["Product"] for row in rows] == ["Widget", "Gadget"]


def test_excel_first_sheet_is_read(extractor: RawTableExtractor) -> None:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame({"Product": ["Widget", "Gadget"], "Price": [12.5, 3]}).to_excel(
            writer, sheet_name="First", index=False
        )
        pd.DataFrame({"Ignored": ["x"]}).to_excel(writer, sheet_name="Second", index=False)

    rows = extractor.extract("catalogue.xlsx", buffer.getvalue())

    assert rows == [
        {"Product": "Widget", "Price": "12.5"},
        {"Product": "Gadget", "Price": "3"},
    ]


def test_excel_blank_cells_match_csv(extractor: RawTableExtractor) -> None:
    buffer = io.BytesIO()
    frame = pd.DataFrame({"Product": ["Widget", None], "Price": ["$12.50", 9]})
    frame.to_excel(buffer, index=False, engine="openpyxl")

    excel_rows = extractor.extract("products.xlsx", buffer.getvalue())
    csv_rows = extractor.extract("products.csv", b"Product,Price\nWidget,$12.50\n,9\n")

    assert excel_rows == csv_rows == [
        {"Product": "Widget", "Price": "$12.50"},
        {"Product": "", "Price": "9"},
    ]


def test_excel_dates_and_whole_numbers_are_flattened(extractor: RawTableExtractor) -> None:
    buffer = io.BytesIO()
    frame = pd.DataFrame(
        {
            "ETA": [datetime(2026, 3, 1), datetime(2026, 3, 2, 14, 30)],
            "Certifications": [9001, 14001],
        }
    )
    frame.to_excel(buffer, index=False, engine="openpyxl")

    rows = extractor.extract("shipments.xlsx", buffer.getvalue())

    assert rows == [
        {"ETA": "2026-03-01", "Certifications": "9001"},
        {"ETA": "2026-03-02 14:30:00", "Certifications": "14001"},
    ]


@pytest.mark.parametrize("file_name", ["products.pdf", "products", "products.csv.txt"])
def test_unsupported_extension(extractor: RawTableExtractor, file_name: str) -> None:
    with pytest.raises(ExtractionError, match=INVALID_FILE_TYPE_MESSAGE.replace(".", r"\.")):
        extractor.extract(file_name, b"a,b\n1,2\n")


@pytest.mark.parametrize("content", [b"", b"Product,Price\n", b"Product,Price\n,\n"])
def test_empty_sheet(extractor: RawTableExtractor, content: bytes) -> None:
    with pytest.raises(ExtractionError, match=NO_DATA_MESSAGE):
        extractor.extract("products.csv", content)


def test_corrupt_workbook(extractor: RawTableExtractor) -> None:
    with pytest.raises(ExtractionError, match="Could not read file 'broken.xlsx'"):
        extractor.extract("broken.xlsx", b"definitely not a zip archive")
