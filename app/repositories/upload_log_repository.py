"""
app/repositories/upload_log_repository.py

Persistence layer for per-file upload audit rows.
"""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.supply_records import FileOutcome
from db.models.upload_log import UploadLog

_DEFAULT_LIST_LIMIT = 50


class UploadLogRepository:
    """
    Writes and reads upload log rows, one session per call.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def record(self, owner_id: str, outcome: FileOutcome) -> None:
        row = UploadLog(
            user_id=owner_id,
            file_name=outcome.file_name,
            schema_type=outcome.schema_type,
            status=outcome.status.value,
            mapping_source=outcome.mapping_source.value if outcome.mapping_source else None,
            rows_seen=outcome.rows_seen,
            records_accepted=outcome.records_accepted,
            records_rejected=outcome.records_rejected,
            records_persisted=outcome.records_persisted,
            error_message=outcome.error,
            rejections_json=[rejection.to_dict() for rejection in outcome.rejections] or None,
        )
        session = self._session_factory()
        try:
            with session.begin():
                session.add(row)
        finally:
            session.close()

    def list_for_user(self, owner_id: str, *, limit: int = _DEFAULT_LIST_LIMIT) -> list[UploadLog]:
        session = self._session_factory()
        try:
            stmt = (
                select(UploadLog)
                .where(UploadLog.user_id == owner_id)
                .order_by(UploadLog.created_at.desc())
                .limit(max(1, limit))
            )
            return list(session.scalars(stmt).all())
        finally:
            session.close()
