"""
app/api/routers package marker.
"""

from app.api.routers.data_upload import router as data_upload_router

__all__ = [
    "data_upload_router",
]
