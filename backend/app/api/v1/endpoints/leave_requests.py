from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status

from app.models.leave_request import LeaveStatus
from app.models.user import UserRole
from app.modules.auth.dependencies import DbSession, require_permission
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Action, Resource
from app.schemas.leave_request import LeaveRequestCreate, LeaveReview
from app.services.leave_request_service import LeaveRequestService


router = APIRouter()

CanCreate = Annotated[Identity, Depends(require_permission(Resource.LEAVE_REQUEST, Action.CREATE))]
CanRead = Annotated[Identity, Depends(require_permission(Resource.LEAVE_REQUEST, Action.READ))]
CanReview = Annotated[Identity, Depends(require_permission(Resource.LEAVE_REQUEST, Action.REVIEW))]
CanDelete = Annotated[Identity, Depends(require_permission(Resource.LEAVE_REQUEST, Action.DELETE))]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_leave_request(data: LeaveRequestCreate, identity: CanCreate, db: DbSession):
    leave = await LeaveRequestService(db).create(identity, data)
    return {"success": True, "message": "Leave request created successfully", "leaveRequest": leave}


@router.get("")
async def list_leave_requests(
    identity: CanRead,
    db: DbSession,
    status: Optional[LeaveStatus] = None,
    role: Optional[UserRole] = None,
):
    leaves = await LeaveRequestService(db).list(identity, status, role)
    return {"success": True, "count": len(leaves), "leaveRequests": leaves}


@router.get("/{leave_id}")
async def get_leave_request(leave_id: str, identity: CanRead, db: DbSession):
    leave = await LeaveRequestService(db).get(identity, leave_id)
    return {"success": True, "leaveRequest": leave}


@router.put("/{leave_id}/status")
async def review_leave_request(leave_id: str, data: LeaveReview, identity: CanReview, db: DbSession):
    leave = await LeaveRequestService(db).review(identity, leave_id, data.status)
    return {
        "success": True,
        "message": f"Leave request {data.status.value} successfully",
        "leaveRequest": leave,
    }


@router.delete("/{leave_id}")
async def delete_leave_request(leave_id: str, identity: CanDelete, db: DbSession):
    await LeaveRequestService(db).delete(identity, leave_id)
    return {"success": True, "message": "Leave request deleted successfully"}
