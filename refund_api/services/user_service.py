"""User account service."""

import logging
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from refund_api.exceptions import (
    ConflictError,
    DependentRecordsError,
    ForbiddenError,
    NotFoundError,
)
from refund_api.models.refund import Refund
from refund_api.models.user import User
from refund_api.schemas.pagination import PageParams
from refund_api.schemas.user import UserCreate, UserUpdate, normalize_email
from refund_api.services.auth import get_password_hash, verify_password
from refund_api.services.policy import AuthUser, require_self_or_manager
from refund_api.services.updates import (
    Patch,
    UpdateSkipped,
    apply_patch,
    diff_fields,
    submitted_fields,
)

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "A user with this email already exists"


class UserService:
    """Service for user account operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def _email_taken_by_other(self, email: str, user_id: UUID) -> bool:
        return (
            self.db.query(User.id)
            .filter(User.email == normalize_email(email), User.id != user_id)
            .first()
            is not None
        )

    def _get_or_404(self, user_id: UUID) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race against another registration with the same email
            self.db.rollback()
            raise ConflictError(EMAIL_TAKEN_MESSAGE) from e

    def create(self, data: UserCreate) -> User:
        """Register a new user."""
        if self.get_by_email(data.email):
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        user = User(
            name=data.name,
            email=normalize_email(data.email),
            password_hash=get_password_hash(data.password),
            role=data.role,
        )
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info(f"Registered {user.role.value} user {user.id}")
        return user

    def list_users(
        self, actor: AuthUser, params: PageParams, name: str | None = None
    ) -> tuple[list[User], int]:
        """Managers see every user; anyone else only sees themselves."""
        query = self.db.query(User)
        if not actor.is_manager:
            query = query.filter(User.id == actor.id)
        if name:
            query = query.filter(User.name.ilike(f"%{name.strip()}%"))

        total = query.count()
        users = (
            query.order_by(User.created_at.desc(), User.id)
            .offset(params.skip)
            .limit(params.per_page)
            .all()
        )
        return users, total

    def get(self, actor: AuthUser, user_id: UUID) -> User:
        user = self._get_or_404(user_id)
        require_self_or_manager(actor, user.id)
        return user

    def resolve_update(self, actor: AuthUser, user: User, data: UserUpdate) -> Patch:
        """Reduce an update request to the columns that actually change.

        Raises ForbiddenError when a non-manager submits a role, and
        ConflictError when the new email belongs to another user.
        """
        submitted = submitted_fields(data)

        if "role" in submitted and not actor.is_manager:
            logger.warning(f"User {actor.id} attempted to change a role without manager access")
            raise ForbiddenError("Only managers can change roles")

        plain_fields = {k: v for k, v in submitted.items() if k != "password"}
        changes = diff_fields(user, plain_fields)

        if "email" in changes and self._email_taken_by_other(changes["email"], user.id):
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        password = submitted.get("password")
        if password is not None and not verify_password(password, user.password_hash):
            changes["password_hash"] = get_password_hash(password)

        return Patch(submitted=submitted, changes=changes)

    def update(self, actor: AuthUser, user_id: UUID, data: UserUpdate) -> User | UpdateSkipped:
        user = self._get_or_404(user_id)
        require_self_or_manager(actor, user.id)

        patch = self.resolve_update(actor, user, data)
        skipped = patch.skipped()
        if skipped:
            return skipped

        apply_patch(user, patch.changes)
        self._commit()
        self.db.refresh(user)
        logger.info(f"Updated user {user.id}: {sorted(patch.changes)}")
        return user

    def delete(self, actor: AuthUser, user_id: UUID) -> None:
        user = self._get_or_404(user_id)
        require_self_or_manager(actor, user.id)

        refund_count = (
            self.db.query(func.count(Refund.id)).filter(Refund.user_id == user.id).scalar()
        )
        if refund_count:
            raise DependentRecordsError(
                "User has refunds and cannot be deleted",
                details={"refund_count": refund_count},
            )

        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user {user_id}")
