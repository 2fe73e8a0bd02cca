"""Refund request service."""

import logging
from pathlib import Path
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from refund_api.exceptions import ForbiddenError, NotFoundError
from refund_api.models.refund import Refund
from refund_api.models.user import User
from refund_api.schemas.pagination import PageParams
from refund_api.schemas.refund import RefundCreate, RefundUpdate
from refund_api.services.policy import (
    FORBIDDEN_MESSAGE,
    AuthUser,
    require_owner_or_manager,
)
from refund_api.services.updates import UpdateSkipped, apply_patch, resolve_patch
from refund_api.services.uploads import UploadStorage

logger = logging.getLogger(__name__)


class RefundService:
    """Service for refund operations."""

    def __init__(self, db: Session, storage: UploadStorage):
        self.db = db
        self.storage = storage

    def _get_or_404(self, refund_id: UUID) -> Refund:
        refund = self.db.query(Refund).filter(Refund.id == refund_id).first()
        if not refund:
            raise NotFoundError("Refund not found")
        return refund

    def create(self, actor: AuthUser, data: RefundCreate) -> Refund:
        """File a refund owned by the acting user."""
        refund = Refund(
            name=data.name,
            amount=data.amount,
            category=data.category,
            filename=data.filename,
            user_id=actor.id,
        )
        self.db.add(refund)
        self.db.commit()
        self.db.refresh(refund)
        logger.info(f"User {actor.id} created refund {refund.id}")
        return refund

    def list_refunds(
        self, actor: AuthUser, params: PageParams, name: str | None = None
    ) -> tuple[list[Refund], int]:
        """List refunds, newest first.

        Managers see every refund; employees only their own. ``name`` matches
        either the refund name or the owner's name, case-insensitively.
        """
        query = self.db.query(Refund).join(User, Refund.user_id == User.id)
        if not actor.is_manager:
            query = query.filter(Refund.user_id == actor.id)
        if name:
            pattern = f"%{name.strip()}%"
            query = query.filter(or_(Refund.name.ilike(pattern), User.name.ilike(pattern)))

        total = query.count()
        refunds = (
            query.order_by(Refund.created_at.desc(), Refund.id)
            .offset(params.skip)
            .limit(params.per_page)
            .all()
        )
        return refunds, total

    def get(self, actor: AuthUser, refund_id: UUID) -> Refund:
        refund = self._get_or_404(refund_id)
        require_owner_or_manager(actor, refund.user_id)
        return refund

    def update(
        self, actor: AuthUser, refund_id: UUID, data: RefundUpdate
    ) -> Refund | UpdateSkipped:
        refund = self._get_or_404(refund_id)
        require_owner_or_manager(actor, refund.user_id)

        patch = resolve_patch(refund, data)
        skipped = patch.skipped()
        if skipped:
            return skipped

        replaced_file = refund.filename if "filename" in patch.changes else None
        apply_patch(refund, patch.changes)
        self.db.commit()
        self.db.refresh(refund)
        logger.info(f"Updated refund {refund.id}: {sorted(patch.changes)}")

        if replaced_file:
            self._release_receipt(replaced_file)
        return refund

    def delete(self, actor: AuthUser, refund_id: UUID) -> None:
        refund = self._get_or_404(refund_id)
        require_owner_or_manager(actor, refund.user_id)

        filename = refund.filename
        self.db.delete(refund)
        self.db.commit()
        logger.info(f"Deleted refund {refund_id}")

        self._release_receipt(filename)

    def _release_receipt(self, filename: str) -> None:
        """Remove a stored receipt once no refund references it."""
        still_used = self.db.query(Refund.id).filter(Refund.filename == filename).first()
        if still_used is None:
            self.storage.delete(filename)

    def receipt_path(self, actor: AuthUser, filename: str) -> Path:
        """Resolve a stored receipt the actor may read.

        Managers read any receipt. Employees read receipts referenced by one of
        their own refunds.
        """
        path = self.storage.path_for(filename)
        if actor.is_manager:
            return path

        owner_ids = {
            user_id
            for (user_id,) in self.db.query(Refund.user_id).filter(Refund.filename == filename)
        }
        if not owner_ids:
            raise NotFoundError("File not found")
        if actor.id not in owner_ids:
            logger.warning(f"User {actor.id} denied access to receipt {filename}")
            raise ForbiddenError(FORBIDDEN_MESSAGE)
        return path
