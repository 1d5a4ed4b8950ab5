"""
Shared lifecycle for department-scoped records that carry ``created_by``.

Exams, assignments and notifications differ only in their columns and
wire shape; reading, updating and deleting one obeys the same department
rules, so those rules are written once here.
"""
from typing import Any, Dict, Iterable, List, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ResourceNotFoundError
from app.core.types import Attribution
from app.models.user import Department
from app.modules.auth.identity import Identity
from app.modules.auth.policy import (
    Resource,
    ensure_can_modify,
    ensure_can_view,
    resolve_write_department,
)
from app.services.attribution import AttributionResolver


def iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class DepartmentScopedService:
    """Base for services whose records live in one department (or ALL)"""

    model: Type = None
    resource: Resource = None
    label: str = "Record"

    def __init__(self, db: AsyncSession):
        self.db = db
        self.attribution = AttributionResolver(db)

    # Subclasses describe their wire shape
    def to_dict(self, record, created_by: Any) -> Dict[str, Any]:
        raise NotImplementedError

    async def serialize(self, record) -> Dict[str, Any]:
        return self.to_dict(record, await self.attribution.enrich(record.created_by))

    async def serialize_many(self, records: Iterable) -> List[Dict[str, Any]]:
        records = list(records)
        resolved: Dict[Attribution, Any] = await self.attribution.enrich_many(
            r.created_by for r in records
        )
        return [self.to_dict(r, resolved.get(r.created_by)) for r in records]

    async def fetch(self, record_id: str):
        record = await self.db.get(self.model, record_id)
        if record is None:
            raise ResourceNotFoundError(self.label, record_id)
        return record

    def ensure_visible(self, identity: Identity, record) -> None:
        ensure_can_view(identity, record.department, self.resource)

    async def get(self, identity: Identity, record_id: str) -> Dict[str, Any]:
        record = await self.fetch(record_id)
        self.ensure_visible(identity, record)
        return await self.serialize(record)

    async def update_fields(
        self,
        identity: Identity,
        record_id: str,
        changes: Dict[str, Any],
        department: Optional[Department] = None,
    ) -> Dict[str, Any]:
        """Apply non-None ``changes``; moving departments re-runs the write rule"""
        record = await self.fetch(record_id)
        ensure_can_modify(identity, record.department, self.resource, "update")

        for attr, value in changes.items():
            if value is not None:
                setattr(record, attr, value)
        if department is not None:
            record.department = resolve_write_department(identity, department)

        await self.db.commit()
        return await self.serialize(record)

    async def delete(self, identity: Identity, record_id: str) -> None:
        record = await self.fetch(record_id)
        ensure_can_modify(identity, record.department, self.resource, "delete")
        await self.db.delete(record)
        await self.db.commit()
