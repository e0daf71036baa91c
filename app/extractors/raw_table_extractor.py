"""
app/extractors/raw_table_extractor.py

Reads the first sheet of an uploaded spreadsheet into raw rows.
"""

from __future__ import annotations

import io
from datetime import date, datetime, time
import logging
from pathlib import PurePath
from typing import Any

import pandas as pd

from app.mappers.value_coercion import is_blank

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = frozenset({".xlsx", ".xls"})
CSV_EXTENSIONS = frozenset({".csv"})
SUPPORTED_EXTENSIONS = EXCEL_EXTENSIONS | CSV_EXTENSIONS

INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Only Excel and CSV files are supported."
NO_DATA_MESSAGE = "No valid data found in file"


class ExtractionError(ValueError):
    """
    Raised when an uploaded file cannot be turned into raw rows.
    """


class RawTableExtractor:
    """
    Turns spreadsheet bytes into a list of header-keyed row dictionaries.

    Only the first sheet is read. The header row supplies the keys, blank
    rows are dropped. Every cell is flattened to text the way a spreadsheet
    displays it, with empty cells as ``""``, so a workbook and the same data
    saved as CSV yield identical rows.
    """

    def extract(self, file_name: str, content: bytes) -> list[dict[str, Any]]:
        extension = PurePath(file_name or "").suffix.lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise ExtractionError(INVALID_FILE_TYPE_MESSAGE)
        if not content:
            raise ExtractionError(NO_DATA_MESSAGE)

        frame = self._read_frame(file_name, extension, content)
        rows = self._frame_to_rows(frame)
        if not rows:
            raise ExtractionError(NO_DATA_MESSAGE)

        logger.debug("Extracted rows file=%s rows=%d columns=%d", file_name, len(rows), len(frame.columns))
        return rows

    @staticmethod
    def _read_frame(file_name: str, extension: str, content: bytes) -> pd.DataFrame:
        buffer = io.BytesIO(content)
        try:
            if extension in EXCEL_EXTENSIONS:
                return pd.read_excel(buffer, sheet_name=0, dtype=object)
            return pd.read_csv(buffer, dtype=str, keep_default_na=False, skip_blank_lines=True)
        except pd.errors.EmptyDataError as exc:
            raise ExtractionError(NO_DATA_MESSAGE) from exc
        except Exception as exc:
            logger.warning("Unreadable spreadsheet file=%s error=%s", file_name, exc)
            raise ExtractionError(f"Could not read file '{file_name}': {exc}") from exc

    @staticmethod
    def _frame_to_rows(frame: pd.DataFrame) -> list[dict[str, Any]]:
        headers = [str(column).strip() for column in frame.columns]
        rows: list[dict[str, Any]] = []
        for values in frame.itertuples(index=False, name=None):
            row = {
                header: _flatten_cell(value)
                for header, value in zip(headers, values)
                if header
            }
            if all(is_blank(value) for value in row.values()):
                continue
            rows.append(row)
        return rows


def _flatten_cell(value: Any) -> str:
    if value is None or value is pd.NaT or (isinstance(value, float) and value != value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)
