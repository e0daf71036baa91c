"""
app/validators package marker.
"""

from app.validators.record_validator import EMAIL_PATTERN, RecordValidator

__all__ = [
    "EMAIL_PATTERN",
    "RecordValidator",
]
