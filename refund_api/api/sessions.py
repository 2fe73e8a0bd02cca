"""Session (login) API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from refund_api.database import get_db
from refund_api.exceptions import UnauthenticatedError
from refund_api.schemas.auth import AuthResponse, SessionCreate
from refund_api.schemas.user import UserResponse
from refund_api.services.auth import authenticate_user, create_access_token

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=AuthResponse)
def create_session(
    credentials: SessionCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise UnauthenticatedError("Incorrect email or password")

    access_token = create_access_token(user.id)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )
