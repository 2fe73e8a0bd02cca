"""Refund API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from refund_api.api.dependencies import any_role, employee_only, get_page_params, get_refund_service
from refund_api.schemas.auth import MessageResponse
from refund_api.schemas.pagination import Page, PageParams, build_page_info
from refund_api.schemas.refund import RefundCreate, RefundResponse, RefundUpdate
from refund_api.services.policy import AuthUser
from refund_api.services.refund_service import RefundService
from refund_api.services.updates import UpdateSkipped

router = APIRouter(prefix="/refunds", tags=["refunds"])


@router.post("", response_model=RefundResponse, status_code=status.HTTP_201_CREATED)
def create_refund(
    refund_data: RefundCreate,
    current_user: Annotated[AuthUser, Depends(employee_only)],
    service: Annotated[RefundService, Depends(get_refund_service)],
):
    """File a refund request as the current employee."""
    return service.create(current_user, refund_data)


@router.get("", response_model=Page[RefundResponse])
def list_refunds(
    current_user: Annotated[AuthUser, Depends(any_role)],
    service: Annotated[RefundService, Depends(get_refund_service)],
    params: Annotated[PageParams, Depends(get_page_params)],
    name: str | None = None,
):
    """List refunds, filtered by refund or employee name.

    Managers see every refund; employees only their own.
    """
    refunds, total = service.list_refunds(current_user, params, name)
    return Page[RefundResponse](
        items=[RefundResponse.model_validate(r) for r in refunds],
        pagination=build_page_info(params, total),
    )


@router.get("/{refund_id}", response_model=RefundResponse)
def get_refund(
    refund_id: UUID,
    current_user: Annotated[AuthUser, Depends(any_role)],
    service: Annotated[RefundService, Depends(get_refund_service)],
):
    """Get a specific refund."""
    return service.get(current_user, refund_id)


@router.patch("/{refund_id}", response_model=RefundResponse | MessageResponse)
def update_refund(
    refund_id: UUID,
    refund_data: RefundUpdate,
    current_user: Annotated[AuthUser, Depends(employee_only)],
    service: Annotated[RefundService, Depends(get_refund_service)],
):
    """Update only the fields that changed."""
    result = service.update(current_user, refund_id, refund_data)
    if isinstance(result, UpdateSkipped):
        return MessageResponse(message=result.message)
    return RefundResponse.model_validate(result)


@router.delete("/{refund_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_refund(
    refund_id: UUID,
    current_user: Annotated[AuthUser, Depends(employee_only)],
    service: Annotated[RefundService, Depends(get_refund_service)],
):
    """Delete a refund and its stored receipt."""
    service.delete(current_user, refund_id)
