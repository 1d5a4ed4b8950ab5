from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.models.user import Department, UserRole
from app.modules.auth.dependencies import DbSession, require_permission
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Action, Resource
from app.schemas.attendance import AttendanceMark
from app.services.attendance_service import AttendanceService


router = APIRouter()

CanMark = Annotated[Identity, Depends(require_permission(Resource.ATTENDANCE, Action.CREATE))]
CanRead = Annotated[Identity, Depends(require_permission(Resource.ATTENDANCE, Action.READ))]


@router.post("")
async def mark_attendance(data: AttendanceMark, response: Response, identity: CanMark, db: DbSession):
    """Mark (or re-mark) one user's attendance for one day"""
    record, created = await AttendanceService(db).mark(identity, data)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return {
        "success": True,
        "message": "Attendance marked successfully" if created else "Attendance updated successfully",
        "attendance": record,
    }


@router.get("")
async def list_attendance(
    identity: CanRead,
    db: DbSession,
    user_id: Optional[str] = Query(None, alias="userId"),
    role: Optional[UserRole] = None,
    department: Optional[Department] = None,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
):
    records = await AttendanceService(db).list(identity, user_id, role, department, start_date, end_date)
    return {"success": True, "count": len(records), "attendance": records}


@router.get("/stats")
async def attendance_stats(
    identity: CanRead,
    db: DbSession,
    user_id: Optional[str] = Query(None, alias="userId"),
):
    stats = await AttendanceService(db).stats(identity, user_id)
    return {"success": True, "stats": stats}
