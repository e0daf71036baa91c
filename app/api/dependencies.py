"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import File, Header, HTTPException, UploadFile, status

from app.domain.supply_records import UploadedFile


def get_upload_owner(x_user_id: str | None = Header(default=None)) -> str:
    """
    Resolve the already-authenticated owner from the X-User-Id header.
    """

    owner_id = (x_user_id or "").strip()
    if not owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header.",
        )
    return owner_id


def get_uploaded_files(
    products: UploadFile | None = File(default=None),
    suppliers: UploadFile | None = File(default=None),
    factories: UploadFile | None = File(default=None),
    warehouses: UploadFile | None = File(default=None),
    retailers: UploadFile | None = File(default=None),
    shipments: UploadFile | None = File(default=None),
) -> list[UploadedFile]:
    """
    Collect one optional file per schema label, keeping form order.
    """

    labelled = {
        "products": products,
        "suppliers": suppliers,
        "factories": factories,
        "warehouses": warehouses,
        "retailers": retailers,
        "shipments": shipments,
    }
    uploaded: list[UploadedFile] = []
    for label, upload in labelled.items():
        if upload is None:
            continue
        try:
            content = upload.file.read()
        finally:
            upload.file.close()
        uploaded.append(
            UploadedFile(
                schema_label=label,
                file_name=upload.filename or f"{label}.csv",
                content=content,
            )
        )

    if not uploaded:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No files uploaded.",
        )
    return uploaded
