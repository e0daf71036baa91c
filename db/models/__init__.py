"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.factory import Factory
from db.models.product import Product
from db.models.retailer import Retailer
from db.models.shipment import Shipment
from db.models.supplier import Supplier
from db.models.upload_log import UploadLog
from db.models.warehouse import Warehouse

__all__ = [
    "Factory",
    "Product",
    "Retailer",
    "Shipment",
    "Supplier",
    "UploadLog",
    "Warehouse",
]
