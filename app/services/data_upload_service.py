"""
app/services/data_upload_service.py

Service layer for multi-file spreadsheet ingestion.

Each uploaded file runs through its own pipeline:

    1. RawTableExtractor      - first sheet into header-keyed rows
    2. MappingOracleClient    - LLM column mapping, one window of rows at a time
       FallbackHeuristicMapper - used for any window the oracle cannot map
    3. RecordValidator        - per-record accept/reject with reasons
    4. RecordStore            - one atomic insert of the accepted records

Files are processed concurrently and independently: an oracle timeout or a
store failure in one file never affects the others, and the caller always
receives a complete BatchOutcome.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from app.config import get_data_ingestion_settings, get_llm_settings
from app.domain.schema_registry import SchemaDefinition, SchemaRegistry, get_schema_registry
from app.domain.supply_records import (
    BatchOutcome,
    FileOutcome,
    FileStatus,
    MappedRecord,
    MappingSource,
    RecordRejection,
    SchemaType,
    UploadedFile,
    UploadSubmission,
)
from app.extractors.raw_table_extractor import ExtractionError, RawTableExtractor
from app.mappers.fallback_mapper import FallbackHeuristicMapper
from app.mappers.record_projector import RecordProjector
from app.repositories.supply_record_repository import RecordStore, RecordStoreError, SQLAlchemyRecordStore
from app.repositories.upload_log_repository import UploadLogRepository
from app.validators.record_validator import RecordValidator
from db.session import SessionLocal
from llm_mapping.adapter import build_adapter
from llm_mapping.client import MappingOracleClient, OracleTimeoutError, OracleTransportError
from llm_mapping.parser import parse_mapping_response

logger = logging.getLogger(__name__)


class DataUploadService:
    """
    Coordinates extraction, mapping, validation, and persistence per file.
    """

    def __init__(
        self,
        *,
        record_store: RecordStore,
        oracle: MappingOracleClient | None = None,
        upload_log: UploadLogRepository | None = None,
        registry: SchemaRegistry | None = None,
        extractor: RawTableExtractor | None = None,
        fallback_mapper: FallbackHeuristicMapper | None = None,
        projector: RecordProjector | None = None,
        validator: RecordValidator | None = None,
        max_workers: int = 4,
        oracle_chunk_size: int = 20,
        max_rejections: int = 500,
        log_rejections: bool = True,
    ) -> None:
        self._record_store = record_store
        self._oracle = oracle
        self._upload_log = upload_log
        self._registry = registry or get_schema_registry()
        self._extractor = extractor or RawTableExtractor()
        self._fallback_mapper = fallback_mapper or FallbackHeuristicMapper(registry=self._registry)
        self._projector = projector or RecordProjector()
        self._validator = validator or RecordValidator(registry=self._registry)
        self._max_workers = max(1, max_workers)
        self._oracle_chunk_size = max(1, oracle_chunk_size)
        self._max_rejections = max(1, max_rejections)
        self._log_rejections = log_rejections

    def ingest_batch(self, submission: UploadSubmission) -> BatchOutcome:
        """
        Process every file of the submission and return one outcome per file,
        in submission order.

        The worker pool is always drained before returning, so no file is
        abandoned between validation and its insert.
        """

        files = list(submission.files)
        if not files:
            return BatchOutcome(files=[], completed_at=datetime.now(timezone.utc))

        executor = ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(files)),
            thread_name_prefix="data-upload",
        )
        try:
            futures = [
                executor.submit(self._ingest_file_safely, submission.owner_id, uploaded)
                for uploaded in files
            ]
            outcomes = [future.result() for future in futures]
        finally:
            executor.shutdown(wait=True)

        batch = BatchOutcome(files=outcomes, completed_at=datetime.now(timezone.utc))
        logger.info(
            "Upload batch finished user_id=%s files=%d status=%s",
            submission.owner_id,
            len(outcomes),
            batch.status.value,
        )
        return batch

    def ingest_file(self, owner_id: str, uploaded: UploadedFile) -> FileOutcome:
        """
        Run the extract -> map -> validate -> persist pipeline for one file.

        Extraction and persistence failures are reported as a Failed outcome;
        oracle failures are recovered by the fallback mapper.
        """

        try:
            schema_type = SchemaType.from_label(uploaded.schema_label)
        except ValueError as exc:
            return FileOutcome.failed(
                file_name=uploaded.file_name,
                schema_type=uploaded.schema_label,
                error=str(exc),
            )

        try:
            rows = self._extractor.extract(uploaded.file_name, uploaded.content)
        except ExtractionError as exc:
            logger.warning("Extraction failed file=%s error=%s", uploaded.file_name, exc)
            return FileOutcome.failed(
                file_name=uploaded.file_name,
                schema_type=schema_type.value,
                error=str(exc),
            )

        definition = self._registry.get(schema_type)
        records, mapping_source = self.map_rows(rows, definition, file_name=uploaded.file_name)
        owned = [record.with_owner(owner_id) for record in records]

        accepted: list[MappedRecord] = []
        rejections: list[RecordRejection] = []
        rejected_count = 0
        for record in owned:
            verdict = self._validator.validate(record)
            if verdict.accepted:
                accepted.append(record)
                continue
            rejected_count += 1
            self._record_rejection(
                rejections,
                RecordRejection(row_number=record.row_number, reasons=verdict.reasons),
                file_name=uploaded.file_name,
            )

        status = FileOutcome.status_for(accepted=len(accepted), rejected=rejected_count)
        if not accepted:
            return FileOutcome(
                file_name=uploaded.file_name,
                schema_type=schema_type.value,
                rows_seen=len(rows),
                records_accepted=0,
                records_rejected=rejected_count,
                status=status,
                rejections=rejections,
                mapping_source=mapping_source,
                error="No valid records found in file",
            )

        try:
            persisted = self._record_store.insert_many(schema_type, accepted)
        except RecordStoreError as exc:
            return FileOutcome(
                file_name=uploaded.file_name,
                schema_type=schema_type.value,
                rows_seen=len(rows),
                records_accepted=len(accepted),
                records_rejected=rejected_count,
                status=FileStatus.FAILED,
                rejections=rejections,
                mapping_source=mapping_source,
                error=str(exc),
            )

        logger.info(
            "File ingested file=%s schema=%s rows=%d accepted=%d rejected=%d persisted=%d source=%s",
            uploaded.file_name,
            schema_type.value,
            len(rows),
            len(accepted),
            rejected_count,
            persisted,
            mapping_source.value,
        )
        return FileOutcome(
            file_name=uploaded.file_name,
            schema_type=schema_type.value,
            rows_seen=len(rows),
            records_accepted=len(accepted),
            records_rejected=rejected_count,
            status=status,
            records_persisted=persisted,
            rejections=rejections,
            mapping_source=mapping_source,
        )

    def map_rows(
        self,
        rows: Sequence[Mapping[str, Any]],
        definition: SchemaDefinition,
        *,
        file_name: str = "",
    ) -> tuple[list[MappedRecord], MappingSource]:
        """
        Map rows window by window, preferring the oracle and falling back
        per window. Once the oracle times out or fails to respond, the remaining
        windows of the file go straight to the fallback mapper. Returns the
        records and which path(s) produced them.
        """

        records: list[MappedRecord] = []
        used_oracle = False
        used_fallback = False
        oracle_available = self._oracle is not None

        for start in range(0, len(rows), self._oracle_chunk_size):
            window = rows[start : start + self._oracle_chunk_size]
            items = None
            if oracle_available:
                try:
                    items = self._consult_oracle(window, definition, file_name=file_name, start=start)
                except (OracleTimeoutError, OracleTransportError) as exc:
                    # An unreachable oracle is not retried for the rest of this file.
                    oracle_available = False
                    logger.warning(
                        "Mapping oracle unavailable, using fallback for remaining rows file=%s rows=%d-%d error=%s",
                        file_name,
                        start + 1,
                        len(rows),
                        exc,
                    )
            if items is None:
                used_fallback = True
                records.extend(
                    self._fallback_mapper.map_rows(window, definition.schema_type, sequence_start=start)
                )
            else:
                used_oracle = True
                records.extend(self._projector.project(items, definition, sequence_start=start))

        if used_oracle and used_fallback:
            return records, MappingSource.MIXED
        if used_oracle:
            return records, MappingSource.AI
        return records, MappingSource.FALLBACK

    def list_upload_logs(self, owner_id: str, *, limit: int = 50) -> list[Any]:
        if self._upload_log is None:
            return []
        return self._upload_log.list_for_user(owner_id, limit=limit)

    def _consult_oracle(
        self,
        window: Sequence[Mapping[str, Any]],
        definition: SchemaDefinition,
        *,
        file_name: str,
        start: int,
    ) -> list[Any] | None:
        raw_response = self._oracle.request_mapping(window, definition)
        result = parse_mapping_response(raw_response)
        if not result.ok:
            logger.warning(
                "Mapping response unusable, using fallback file=%s rows=%d-%d error=%s",
                file_name,
                start + 1,
                start + len(window),
                result.error,
            )
            return None

        if len(result.records) != len(window):
            logger.warning(
                "Mapping response size mismatch, using fallback file=%s rows=%d-%d expected=%d got=%d",
                file_name,
                start + 1,
                start + len(window),
                len(window),
                len(result.records),
            )
            return None
        return result.records

    def _ingest_file_safely(self, owner_id: str, uploaded: UploadedFile) -> FileOutcome:
        try:
            outcome = self.ingest_file(owner_id, uploaded)
        except Exception as exc:
            logger.exception("Unexpected ingestion failure file=%s", uploaded.file_name)
            outcome = FileOutcome.failed(
                file_name=uploaded.file_name,
                schema_type=uploaded.schema_label,
                error=f"Unexpected ingestion failure: {exc}",
            )
        self._write_upload_log(owner_id, outcome)
        return outcome

    def _write_upload_log(self, owner_id: str, outcome: FileOutcome) -> None:
        if self._upload_log is None:
            return
        try:
            self._upload_log.record(owner_id, outcome)
        except Exception:
            logger.exception("Failed to write upload log file=%s", outcome.file_name)

    def _record_rejection(
        self,
        rejections: list[RecordRejection],
        rejection: RecordRejection,
        *,
        file_name: str,
    ) -> None:
        if len(rejections) < self._max_rejections:
            rejections.append(rejection)
        if self._log_rejections:
            logger.warning(
                "Record rejected file=%s row=%d reasons=%s",
                file_name,
                rejection.row_number,
                "; ".join(rejection.reasons),
            )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_data_upload_service() -> DataUploadService:
    """
    Build and cache the upload service with env-driven settings.
    """
    settings = get_data_ingestion_settings()
    llm_settings = get_llm_settings()
    registry = get_schema_registry()
    oracle = MappingOracleClient(
        build_adapter(llm_settings),
        timeout_seconds=llm_settings.timeout_seconds,
    )
    return DataUploadService(
        record_store=SQLAlchemyRecordStore(
            SessionLocal,
            replace_existing=settings.replace_existing,
            registry=registry,
        ),
        oracle=oracle,
        upload_log=UploadLogRepository(SessionLocal),
        registry=registry,
        max_workers=settings.max_workers,
        oracle_chunk_size=settings.oracle_chunk_size,
        max_rejections=settings.max_rejections,
        log_rejections=settings.log_rejections,
    )
