"""FastAPI dependencies for authentication, role gating and services."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from refund_api.config import get_settings
from refund_api.database import get_db
from refund_api.exceptions import UnauthenticatedError
from refund_api.models.enums import UserRole
from refund_api.models.user import User
from refund_api.schemas.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, PageParams
from refund_api.services.auth import user_id_from_token
from refund_api.services.policy import AuthUser, require_authenticated, require_role
from refund_api.services.refund_service import RefundService
from refund_api.services.uploads import UploadStorage
from refund_api.services.user_service import UserService

# auto_error=False: a missing header reaches require_authenticated and becomes a 401
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthUser:
    """Get the acting identity for the bearer token.

    The user is loaded on every request, so the role is the stored one and a
    deleted account's tokens stop working.
    """
    if credentials is None:
        return require_authenticated(None)

    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        raise UnauthenticatedError("Invalid authentication credentials")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UnauthenticatedError("User not found")

    return AuthUser(id=user.id, role=user.role)


def require_roles(*roles: UserRole) -> Callable[..., AuthUser]:
    """Build a route-level gate admitting only the given roles.

    Usage:
        current_user: Annotated[AuthUser, Depends(require_roles(UserRole.EMPLOYEE))]
    """

    def dependency(current_user: Annotated[AuthUser, Depends(get_current_user)]) -> AuthUser:
        require_role(current_user, roles)
        return current_user

    return dependency


any_role = require_roles(UserRole.EMPLOYEE, UserRole.MANAGER)
employee_only = require_roles(UserRole.EMPLOYEE)


def get_page_params(
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=MAX_PER_PAGE)] = DEFAULT_PER_PAGE,
) -> PageParams:
    return PageParams(page=page, per_page=per_page)


def get_upload_storage() -> UploadStorage:
    """Get receipt storage configured from settings."""
    settings = get_settings()
    return UploadStorage(settings.upload_dir, settings.max_upload_size_bytes)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)


def get_refund_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[UploadStorage, Depends(get_upload_storage)],
) -> RefundService:
    """Get refund service with dependencies."""
    return RefundService(db, storage)
