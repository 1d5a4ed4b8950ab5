from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Response, status

from app.models.timetable import Weekday
from app.models.user import Department, UserRole
from app.modules.auth.dependencies import DbSession, require_permission
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Action, Resource
from app.schemas.timetable import TimetableSlot
from app.services.timetable_service import TimetableService


router = APIRouter()

CanWrite = Annotated[Identity, Depends(require_permission(Resource.TIMETABLE, Action.CREATE))]
CanRead = Annotated[Identity, Depends(require_permission(Resource.TIMETABLE, Action.READ))]
CanDelete = Annotated[Identity, Depends(require_permission(Resource.TIMETABLE, Action.DELETE))]


@router.post("")
async def save_timetable_slot(data: TimetableSlot, response: Response, identity: CanWrite, db: DbSession):
    slot, created = await TimetableService(db).upsert(identity, data)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return {
        "success": True,
        "message": "Timetable created successfully" if created else "Timetable updated successfully",
        "timetable": slot,
    }


@router.get("")
async def list_timetable(
    identity: CanRead,
    db: DbSession,
    role: Optional[UserRole] = None,
    department: Optional[Department] = None,
    day: Optional[Weekday] = None,
):
    slots = await TimetableService(db).list(identity, role, department, day)
    return {"success": True, "count": len(slots), "timetable": slots}


@router.delete("/{slot_id}")
async def delete_timetable_slot(slot_id: str, identity: CanDelete, db: DbSession):
    await TimetableService(db).delete(identity, slot_id)
    return {"success": True, "message": "Timetable deleted successfully"}
