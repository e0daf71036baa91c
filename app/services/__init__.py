"""
app/services package marker.
"""

from app.services.data_upload_service import DataUploadService, get_data_upload_service

__all__ = [
    "DataUploadService",
    "get_data_upload_service",
]
