"""Partial-update resolution.

An update request only carries the fields the client sent. Before writing,
services reduce it to the fields that would actually change, so unchanged
submissions never hit the database or bump ``updated_at``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

NOTHING_SUBMITTED = "No fields submitted"
NOTHING_CHANGED = "No changes detected"


@dataclass(frozen=True)
class UpdateSkipped:
    """Informational outcome of an update that wrote nothing."""

    message: str


@dataclass
class Patch:
    """Fields the client sent, and the subset that differs from current state."""

    submitted: dict[str, Any] = field(default_factory=dict)
    changes: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.changes

    def skipped(self) -> UpdateSkipped | None:
        """Why nothing will be written, or None if there is something to write."""
        if not self.submitted:
            return UpdateSkipped(NOTHING_SUBMITTED)
        if not self.changes:
            return UpdateSkipped(NOTHING_CHANGED)
        return None


def submitted_fields(update: BaseModel) -> dict[str, Any]:
    """Fields explicitly present in the request. Null counts as absent."""
    return update.model_dump(exclude_unset=True, exclude_none=True)


def diff_fields(entity: Any, submitted: Mapping[str, Any]) -> dict[str, Any]:
    """Return the submitted fields whose value differs from the entity's."""
    return {name: value for name, value in submitted.items() if getattr(entity, name) != value}


def resolve_patch(entity: Any, update: BaseModel) -> Patch:
    submitted = submitted_fields(update)
    return Patch(submitted=submitted, changes=diff_fields(entity, submitted))


def apply_patch(entity: Any, changes: Mapping[str, Any]) -> None:
    for name, value in changes.items():
        setattr(entity, name, value)
