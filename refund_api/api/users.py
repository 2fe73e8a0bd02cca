"""User API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from refund_api.api.dependencies import any_role, get_page_params, get_user_service
from refund_api.schemas.auth import MessageResponse
from refund_api.schemas.pagination import Page, PageParams, build_page_info
from refund_api.schemas.user import UserCreate, UserResponse, UserUpdate
from refund_api.services.policy import AuthUser
from refund_api.services.updates import UpdateSkipped
from refund_api.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    return service.create(user_data)


@router.get("", response_model=Page[UserResponse])
def list_users(
    current_user: Annotated[AuthUser, Depends(any_role)],
    service: Annotated[UserService, Depends(get_user_service)],
    params: Annotated[PageParams, Depends(get_page_params)],
    name: str | None = None,
):
    """List users. Employees only see their own account."""
    users, total = service.list_users(current_user, params, name)
    return Page[UserResponse](
        items=[UserResponse.model_validate(u) for u in users],
        pagination=build_page_info(params, total),
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: UUID,
    current_user: Annotated[AuthUser, Depends(any_role)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get a specific user."""
    return service.get(current_user, user_id)


@router.patch("/{user_id}", response_model=UserResponse | MessageResponse)
def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    current_user: Annotated[AuthUser, Depends(any_role)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Update only the fields that changed. Role changes require a manager."""
    result = service.update(current_user, user_id, user_data)
    if isinstance(result, UpdateSkipped):
        return MessageResponse(message=result.message)
    return UserResponse.model_validate(result)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    current_user: Annotated[AuthUser, Depends(any_role)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Delete a user that owns no refunds."""
    service.delete(current_user, user_id)
