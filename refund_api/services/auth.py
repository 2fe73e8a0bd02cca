"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from refund_api.config import get_settings
from refund_api.models.user import User
from refund_api.schemas.user import normalize_email

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: UUID) -> str:
    """Create a JWT access token for the given user id."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {"sub": str(user_id), "exp": expire}
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def user_id_from_token(token: str) -> UUID | None:
    """Return the user id a bearer token was issued to, or None if it is not trustworthy."""
    payload = decode_access_token(token)
    if payload is None:
        return None

    try:
        return UUID(payload["sub"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Rejected token with malformed claims")
        return None


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
