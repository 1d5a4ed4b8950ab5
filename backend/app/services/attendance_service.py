"""
Attendance Service
Idempotent marking per (user, date), scoped listing and per-user statistics
"""

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import commit_or_conflict
from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.models.attendance import Attendance, AttendanceStatus
from app.models.user import Department, User, UserRole
from app.modules.auth.identity import Identity
from app.modules.auth.policy import department_scope, ensure_can_mark_attendance, owner_scope
from app.schemas.attendance import AttendanceMark
from app.services.attribution import AttributionResolver
from app.services.scoped import iso
from app.services.user_service import user_summary


def attendance_summary(present: int, absent: int) -> Dict[str, Any]:
    """present/absent/total with percentage rounded to 2 places (0 when empty)"""
    total = present + absent
    percentage = round(present / total * 100, 2) if total else 0
    return {
        "total": total,
        "present": present,
        "absent": absent,
        "percentage": percentage,
    }


class AttendanceService:
    """Service for attendance records"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.attribution = AttributionResolver(db)

    @staticmethod
    def to_dict(record: Attendance, marked_by: Any) -> Dict[str, Any]:
        return {
            "_id": record.id,
            "userId": user_summary(record.user, "email"),
            "role": record.role.value,
            "date": iso(record.date),
            "status": record.status.value,
            "markedBy": marked_by,
            "department": record.department.value,
            "createdAt": iso(record.created_at),
            "updatedAt": iso(record.updated_at),
        }

    async def find(self, user_id: str, day: date) -> Optional[Attendance]:
        return await self.db.scalar(
            select(Attendance).where(
                Attendance.user_id == user_id,
                Attendance.date == day,
            )
        )

    async def mark(self, identity: Identity, data: AttendanceMark) -> Tuple[Dict[str, Any], bool]:
        """Create or overwrite the mark for (user, date). Returns (record, created)."""
        target = await self.db.get(User, data.user_id)
        if target is None:
            raise ResourceNotFoundError("User", data.user_id)
        ensure_can_mark_attendance(identity, target)

        record = await self.find(target.id, data.date)
        created = record is None
        if created:
            record = Attendance(
                user=target,
                role=target.role,
                department=target.department,
                date=data.date,
                status=data.status,
                marked_by=identity.attribution,
            )
            self.db.add(record)
        else:
            record.status = data.status
            record.marked_by = identity.attribution

        await commit_or_conflict(
            self.db, "Attendance for this user and date was recorded concurrently, please retry"
        )
        return self.to_dict(record, await self.attribution.enrich(record.marked_by)), created

    async def list(
        self,
        identity: Identity,
        user_id: Optional[str] = None,
        role: Optional[UserRole] = None,
        department: Optional[Department] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        conditions = department_scope(identity, Attendance.department, department, include_shared=False)
        conditions += owner_scope(identity, Attendance.user_id, user_id)
        if role:
            conditions.append(Attendance.role == role)
        if start_date:
            conditions.append(Attendance.date >= start_date)
        if end_date:
            conditions.append(Attendance.date <= end_date)

        result = await self.db.execute(
            select(Attendance).where(*conditions).order_by(Attendance.date.desc())
        )
        records = result.scalars().all()
        resolved = await self.attribution.enrich_many(r.marked_by for r in records)
        return [self.to_dict(r, resolved.get(r.marked_by)) for r in records]

    async def stats(self, identity: Identity, user_id: Optional[str] = None) -> Dict[str, Any]:
        if identity.role == UserRole.STUDENT:
            user_id = identity.subject_id
        elif not user_id:
            raise ValidationError("User ID is required", field="userId")

        conditions = [Attendance.user_id == user_id]
        conditions += department_scope(identity, Attendance.department, include_shared=False)
        counts = await self.count_by_status(conditions)

        return {
            "userId": user_id,
            **attendance_summary(
                counts.get(AttendanceStatus.PRESENT, 0),
                counts.get(AttendanceStatus.ABSENT, 0),
            ),
        }

    async def count_by_status(self, conditions) -> Dict[AttendanceStatus, int]:
        result = await self.db.execute(
            select(Attendance.status, func.count(Attendance.id))
            .where(*conditions)
            .group_by(Attendance.status)
        )
        return {status: count for status, count in result.all()}
