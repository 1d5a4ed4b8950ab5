"""
Audit attribution resolver.

Expands acted-by references (``createdBy``, ``markedBy``, ``reviewedBy``)
into ``{"_id", "fullName"}`` for responses. The admin variant resolves to a
fixed pair without touching the database. A user whose row has since been
deleted degrades to the raw id instead of failing the response.
"""
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.types import ADMIN_SENTINEL, AdminActor, Attribution, UserActor
from app.models.user import User


ADMIN_DISPLAY_NAME = "Admin"


def admin_summary() -> Dict[str, str]:
    return {"_id": ADMIN_SENTINEL, "fullName": ADMIN_DISPLAY_NAME}


class AttributionResolver:
    """Resolve acted-by references for one response"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def enrich(self, ref: Optional[Attribution]) -> Any:
        if ref is None:
            return None
        if isinstance(ref, AdminActor):
            return admin_summary()
        if isinstance(ref, UserActor):
            user = await self.db.get(User, ref.user_id)
            if user is None:
                return ref.user_id
            return {"_id": user.id, "fullName": user.full_name}
        raise TypeError(f"Unknown attribution reference: {ref!r}")

    async def enrich_many(self, refs: Iterable[Optional[Attribution]]) -> Dict[Attribution, Any]:
        """
        Resolve every distinct reference with at most one query.

        Returns a mapping from reference to its display value; look up
        ``None`` separately since unreviewed records carry no reference.
        """
        refs = {ref for ref in refs if ref is not None}
        user_ids = {ref.user_id for ref in refs if isinstance(ref, UserActor)}

        names: Dict[str, str] = {}
        if user_ids:
            rows = await self.db.execute(
                select(User.id, User.full_name).where(User.id.in_(user_ids))
            )
            names = {row.id: row.full_name for row in rows}

        resolved: Dict[Attribution, Any] = {}
        for ref in refs:
            if isinstance(ref, AdminActor):
                resolved[ref] = admin_summary()
            elif isinstance(ref, UserActor):
                name = names.get(ref.user_id)
                resolved[ref] = {"_id": ref.user_id, "fullName": name} if name is not None else ref.user_id
            else:
                raise TypeError(f"Unknown attribution reference: {ref!r}")
        return resolved
