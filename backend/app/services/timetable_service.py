from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select

from app.core.database import commit_or_conflict
from app.models.timetable import Timetable, Weekday
from app.models.user import Department, UserRole
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Resource, department_scope, resolve_write_department
from app.schemas.timetable import TimetableSlot
from app.services.scoped import DepartmentScopedService, iso


WEEK_ORDER = {day: index for index, day in enumerate(Weekday)}


class TimetableService(DepartmentScopedService):
    """Weekly timetable slots, upserted by (department, role, day, timeSlot)"""

    model = Timetable
    resource = Resource.TIMETABLE
    label = "Timetable entry"

    def to_dict(self, slot: Timetable, created_by: Any) -> Dict[str, Any]:
        return {
            "_id": slot.id,
            "day": slot.day.value,
            "subject": slot.subject,
            "timeSlot": slot.time_slot,
            "role": slot.role.value,
            "department": slot.department.value,
            "createdBy": created_by,
            "createdAt": iso(slot.created_at),
            "updatedAt": iso(slot.updated_at),
        }

    async def find(
        self, department: Department, role: UserRole, day: Weekday, time_slot: str
    ) -> Optional[Timetable]:
        return await self.db.scalar(
            select(Timetable).where(
                Timetable.department == department,
                Timetable.role == role,
                Timetable.day == day,
                Timetable.time_slot == time_slot,
            )
        )

    async def upsert(self, identity: Identity, data: TimetableSlot) -> Tuple[Dict[str, Any], bool]:
        """Returns the slot and whether it was newly created"""
        department = resolve_write_department(identity, data.department)

        slot = await self.find(department, data.role, data.day, data.time_slot)
        created = slot is None
        if created:
            slot = Timetable(
                day=data.day,
                time_slot=data.time_slot,
                role=data.role,
                department=department,
                subject=data.subject,
                created_by=identity.attribution,
            )
            self.db.add(slot)
        else:
            slot.subject = data.subject
            slot.created_by = identity.attribution

        await commit_or_conflict(self.db, "This timetable slot was recorded concurrently, please retry")
        return await self.serialize(slot), created

    async def list(
        self,
        identity: Identity,
        role: Optional[UserRole] = None,
        department: Optional[Department] = None,
        day: Optional[Weekday] = None,
    ) -> List[Dict[str, Any]]:
        """Defaults to the caller's own role; the admin sees every role unless it asks"""
        if role is None and not identity.is_admin:
            role = identity.role

        conditions = department_scope(identity, Timetable.department, department)
        if role:
            conditions.append(Timetable.role == role)
        if day:
            conditions.append(Timetable.day == day)

        result = await self.db.execute(select(Timetable).where(*conditions))
        slots = sorted(result.scalars().all(), key=lambda s: (WEEK_ORDER[s.day], s.time_slot))
        return await self.serialize_many(slots)
