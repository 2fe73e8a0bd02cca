"""Authorization policy tests."""

import uuid
from itertools import product

import pytest

from refund_api.exceptions import ForbiddenError, UnauthenticatedError
from refund_api.models.enums import UserRole
from refund_api.services.policy import (
    AuthUser,
    require_authenticated,
    require_manager,
    require_owner_or_manager,
    require_role,
    require_self_or_manager,
)

ALICE = uuid.uuid4()
BOB = uuid.uuid4()


def test_require_authenticated_returns_actor():
    """Test that a present actor is passed through."""
    actor = AuthUser(id=ALICE, role=UserRole.EMPLOYEE)
    assert require_authenticated(actor) is actor


def test_require_authenticated_rejects_missing_actor():
    """Test that a missing actor is unauthenticated, not not-found."""
    with pytest.raises(UnauthenticatedError) as exc_info:
        require_authenticated(None)
    assert exc_info.value.status_code == 401


@pytest.mark.parametrize(
    ("role", "actor_id", "owner_id"),
    list(product(UserRole, [ALICE, BOB], [ALICE, BOB])),
)
def test_owner_or_manager_matches_rule(role, actor_id, owner_id):
    """Test owner-or-manager succeeds iff the actor is a manager or the owner."""
    actor = AuthUser(id=actor_id, role=role)
    allowed = role == UserRole.MANAGER or actor_id == owner_id

    if allowed:
        require_owner_or_manager(actor, owner_id)
    else:
        with pytest.raises(ForbiddenError):
            require_owner_or_manager(actor, owner_id)


@pytest.mark.parametrize(
    ("role", "actor_id", "target_id"),
    list(product(UserRole, [ALICE, BOB], [ALICE, BOB])),
)
def test_self_or_manager_matches_rule(role, actor_id, target_id):
    """Test self-or-manager succeeds iff the actor is a manager or the target."""
    actor = AuthUser(id=actor_id, role=role)
    allowed = role == UserRole.MANAGER or actor_id == target_id

    if allowed:
        require_self_or_manager(actor, target_id)
    else:
        with pytest.raises(ForbiddenError):
            require_self_or_manager(actor, target_id)


def test_require_manager():
    """Test that only managers pass the manager check."""
    require_manager(AuthUser(id=ALICE, role=UserRole.MANAGER))

    with pytest.raises(ForbiddenError) as exc_info:
        require_manager(AuthUser(id=ALICE, role=UserRole.EMPLOYEE))
    assert exc_info.value.status_code == 403


def test_require_role_allow_list():
    """Test the coarse role gate against an allow-list."""
    employee = AuthUser(id=ALICE, role=UserRole.EMPLOYEE)
    manager = AuthUser(id=BOB, role=UserRole.MANAGER)

    require_role(employee, [UserRole.EMPLOYEE])
    require_role(manager, [UserRole.EMPLOYEE, UserRole.MANAGER])

    with pytest.raises(ForbiddenError):
        require_role(manager, [UserRole.EMPLOYEE])


def test_role_gate_ignores_ownership():
    """Test that the role gate rejects a manager even for their own resources."""
    manager = AuthUser(id=ALICE, role=UserRole.MANAGER)
    require_owner_or_manager(manager, ALICE)
    with pytest.raises(ForbiddenError):
        require_role(manager, (UserRole.EMPLOYEE,))
