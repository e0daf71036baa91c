"""
app/repositories/supply_record_repository.py

Persistence layer for accepted supply-chain records.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.schema_registry import FieldType, SchemaDefinition, SchemaRegistry, get_schema_registry
from app.domain.supply_records import MappedRecord, SchemaType
from db.base import Base
from db.models import Factory, Product, Retailer, Shipment, Supplier, Warehouse

logger = logging.getLogger(__name__)

_DEFAULT_BATCH_SIZE = 1000

MODEL_BY_SCHEMA: dict[SchemaType, type[Base]] = {
    SchemaType.PRODUCTS: Product,
    SchemaType.SUPPLIERS: Supplier,
    SchemaType.FACTORIES: Factory,
    SchemaType.WAREHOUSES: Warehouse,
    SchemaType.RETAILERS: Retailer,
    SchemaType.SHIPMENTS: Shipment,
}


class RecordStoreError(RuntimeError):
    """
    Raised when accepted records cannot be persisted.
    """


class RecordStore(Protocol):
    def insert_many(self, schema_type: SchemaType, records: Sequence[MappedRecord]) -> int:
        """
        Persist all records in one transaction and return the stored count.

        Every record carries its owner id; a call never mixes owners.
        """


def build_payload(record: MappedRecord, definition: SchemaDefinition) -> dict[str, Any]:
    """
    Translate a validated record into column values for its table.
    """

    payload: dict[str, Any] = {"user_id": record.owner_id}
    for spec in definition.fields:
        value = record.values.get(spec.name)
        if spec.field_type is FieldType.STRING_ARRAY:
            value = list(value) if value else []
        elif isinstance(value, str):
            value = value.strip()
        payload[spec.column] = value
    return payload


class SupplyRecordRepository:
    """
    Repository for batch persistence of one user's records of one type.
    """

    def __init__(self, session: Session, *, registry: SchemaRegistry | None = None) -> None:
        self._session = session
        self._registry = registry or get_schema_registry()

    def delete_for_owner(self, schema_type: SchemaType, owner_id: str) -> int:
        model = MODEL_BY_SCHEMA[schema_type]
        result = self._session.execute(delete(model).where(model.user_id == owner_id))
        return result.rowcount or 0

    def bulk_insert(
        self,
        schema_type: SchemaType,
        records: Sequence[MappedRecord],
        *,
        batch_size: int = _DEFAULT_BATCH_SIZE,
    ) -> int:
        """
        Insert records with PostgreSQL bulk INSERT ... RETURNING id.
        """

        if not records:
            return 0

        model = MODEL_BY_SCHEMA[schema_type]
        definition = self._registry.get(schema_type)
        payloads = [build_payload(record, definition) for record in records]

        size = max(1, batch_size)
        inserted = 0
        for start in range(0, len(payloads), size):
            chunk = payloads[start : start + size]
            stmt = insert(model).values(chunk).returning(model.id)
            inserted += len(self._session.scalars(stmt).all())
        return inserted


class SQLAlchemyRecordStore:
    """
    Record store that opens one session per file and commits atomically.

    With ``replace_existing`` the owner's previous records of the same type
    are deleted in the same transaction as the insert.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        replace_existing: bool = True,
        registry: SchemaRegistry | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._replace_existing = replace_existing
        self._registry = registry

    def insert_many(self, schema_type: SchemaType, records: Sequence[MappedRecord]) -> int:
        if not records:
            return 0

        owner_id = records[0].owner_id
        if not owner_id or any(record.owner_id != owner_id for record in records):
            raise RecordStoreError("Every record in one insert must share a single owner id.")

        session = self._session_factory()
        try:
            repository = SupplyRecordRepository(session, registry=self._registry)
            with session.begin():
                if self._replace_existing:
                    deleted = repository.delete_for_owner(schema_type, owner_id)
                    logger.info(
                        "Replacing records schema=%s user_id=%s deleted=%d",
                        schema_type.value,
                        owner_id,
                        deleted,
                    )
                inserted = repository.bulk_insert(schema_type, records)
        except SQLAlchemyError as exc:
            logger.exception("Record insert failed schema=%s user_id=%s", schema_type.value, owner_id)
            raise RecordStoreError(f"Failed to persist {schema_type.value} records: {exc}") from exc
        finally:
            session.close()
        return inserted
