"""Authorization policy.

Pure checks deciding whether an authenticated actor may act on a target.
Each check returns quietly when access is allowed and raises otherwise.

There are two layers:

* ``require_role`` is the coarse, route-level gate. It only needs the actor,
  so it runs before the handler touches the database.
* ``require_self_or_manager`` / ``require_owner_or_manager`` are the
  per-resource checks. They need the owner id of the target, so services call
  them after the record has been loaded.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from refund_api.exceptions import ForbiddenError, UnauthenticatedError
from refund_api.models.enums import UserRole

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = "Not authorized to perform this action"


@dataclass(frozen=True)
class AuthUser:
    """The acting identity, loaded per request from the token's user."""

    id: UUID
    role: UserRole

    @property
    def is_manager(self) -> bool:
        return self.role.is_manager()


def require_authenticated(actor: AuthUser | None) -> AuthUser:
    """Return the actor, or fail when the request carries no identity."""
    if actor is None:
        raise UnauthenticatedError("Authentication required")
    return actor


def require_role(actor: AuthUser, allowed_roles: Iterable[UserRole]) -> None:
    """Route-level gate: the actor's role must be in ``allowed_roles``."""
    if actor.role not in set(allowed_roles):
        logger.warning(f"Role gate denied {actor.role.value} user {actor.id}")
        raise ForbiddenError(FORBIDDEN_MESSAGE)


def require_manager(actor: AuthUser) -> None:
    if not actor.is_manager:
        logger.warning(f"Manager-only action denied for user {actor.id}")
        raise ForbiddenError(FORBIDDEN_MESSAGE)


def require_self_or_manager(actor: AuthUser, target_user_id: UUID) -> None:
    """The actor must be a manager or the target user themselves."""
    if not actor.is_manager and actor.id != target_user_id:
        logger.warning(f"User {actor.id} denied access to user {target_user_id}")
        raise ForbiddenError(FORBIDDEN_MESSAGE)


def require_owner_or_manager(actor: AuthUser, owner_id: UUID) -> None:
    """The actor must be a manager or own the resource."""
    if not actor.is_manager and actor.id != owner_id:
        logger.warning(f"User {actor.id} denied access to resource owned by {owner_id}")
        raise ForbiddenError(FORBIDDEN_MESSAGE)
