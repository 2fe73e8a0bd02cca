"""Receipt upload API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import FileResponse

from refund_api.api.dependencies import (
    any_role,
    employee_only,
    get_refund_service,
    get_upload_storage,
)
from refund_api.schemas.auth import UploadResponse
from refund_api.services.policy import AuthUser
from refund_api.services.refund_service import RefundService
from refund_api.services.uploads import UploadStorage

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_receipt(
    file: Annotated[UploadFile, File(description="Receipt image (JPEG or PNG)")],
    current_user: Annotated[AuthUser, Depends(employee_only)],
    storage: Annotated[UploadStorage, Depends(get_upload_storage)],
):
    """Store a receipt and return the name to reference from a refund.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    data = await file.read()
    filename = storage.save(file.filename, file.content_type, data)
    return UploadResponse(filename=filename)


@router.get("/{filename}")
def download_receipt(
    filename: str,
    current_user: Annotated[AuthUser, Depends(any_role)],
    service: Annotated[RefundService, Depends(get_refund_service)],
):
    """Download a stored receipt referenced by one of the caller's refunds."""
    return FileResponse(service.receipt_path(current_user, filename))
