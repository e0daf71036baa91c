"""
app/api/routers/data_upload.py

Spreadsheet upload HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_upload_owner, get_uploaded_files
from app.domain.supply_records import BatchStatus, UploadedFile, UploadSubmission
from app.schemas.data_upload import BatchOutcomeResponse, UploadLogResponse
from app.services.data_upload_service import DataUploadService, get_data_upload_service

router = APIRouter(prefix="/api", tags=["data-upload"])


@router.post("/data-upload", response_model=BatchOutcomeResponse)
def upload_data(
    files: list[UploadedFile] = Depends(get_uploaded_files),
    owner_id: str = Depends(get_upload_owner),
    upload_service: DataUploadService = Depends(get_data_upload_service),
) -> BatchOutcomeResponse:
    """
    Ingest one spreadsheet per schema type and report per-file outcomes.

    Responds 400 only when every file failed; a Mixed batch is a 200 and
    the per-file entries say which files need a re-upload.
    """

    outcome = upload_service.ingest_batch(UploadSubmission(owner_id=owner_id, files=tuple(files)))
    response = BatchOutcomeResponse.from_outcome(outcome)
    if outcome.status is BatchStatus.ALL_FAILED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=response.model_dump(mode="json"),
        )
    return response


@router.get("/upload-logs", response_model=list[UploadLogResponse])
def list_upload_logs(
    limit: int = Query(default=50, ge=1, le=500),
    owner_id: str = Depends(get_upload_owner),
    upload_service: DataUploadService = Depends(get_data_upload_service),
) -> list[UploadLogResponse]:
    """
    List the caller's upload logs, newest first.
    """

    return [
        UploadLogResponse.model_validate(row)
        for row in upload_service.list_upload_logs(owner_id, limit=limit)
    ]
