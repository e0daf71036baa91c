"""
app/extractors package marker.
"""

from app.extractors.raw_table_extractor import ExtractionError, RawTableExtractor

__all__ = [
    "ExtractionError",
    "RawTableExtractor",
]
