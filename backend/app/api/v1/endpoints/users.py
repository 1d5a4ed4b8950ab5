from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.models.user import Department, UserRole, UserStatus
from app.modules.auth.dependencies import ApprovedIdentity, CurrentIdentity, DbSession, require_permission
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Action, Resource
from app.schemas.user import ProfileUpdate, StatusUpdate
from app.services.user_service import UserService, serialize_identity


router = APIRouter()

AdminOnly = Depends(require_permission(Resource.USER, Action.MANAGE))


@router.get("/profile")
async def get_profile(identity: CurrentIdentity):
    """Own profile; readable before approval"""
    return {"success": True, "user": serialize_identity(identity)}


@router.put("/profile")
async def update_profile(data: ProfileUpdate, identity: ApprovedIdentity, db: DbSession):
    user = await UserService(db).update_profile(identity, data)
    return {"success": True, "message": "Profile updated successfully", "user": user}


@router.get("/pending")
async def list_pending_users(db: DbSession, identity: Identity = AdminOnly):
    users = await UserService(db).list_pending()
    return {"success": True, "count": len(users), "users": users}


@router.get("/by-role")
async def list_users_by_role(
    identity: ApprovedIdentity,
    db: DbSession,
    role: Optional[UserRole] = None,
    department: Optional[Department] = None,
):
    """Approved users; non-admins only ever see their own department"""
    users = await UserService(db).list_by_role(identity, role, department)
    return {"success": True, "count": len(users), "users": users}


@router.get("")
async def list_users(
    db: DbSession,
    identity: Identity = AdminOnly,
    status: Optional[UserStatus] = None,
    role: Optional[UserRole] = None,
    department: Optional[Department] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    page_data = await UserService(db).list_users(status, role, department, page, limit)
    return {"success": True, **page_data}


@router.put("/{user_id}/status")
async def update_user_status(
    user_id: str,
    data: StatusUpdate,
    db: DbSession,
    identity: Identity = AdminOnly,
):
    user = await UserService(db).set_status(identity, user_id, data.status)
    return {
        "success": True,
        "message": f"User status updated to {data.status.value}",
        "user": user,
    }
