from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.models.notification import NotificationTarget
from app.models.user import Department
from app.modules.auth.dependencies import DbSession, require_permission
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Action, Resource
from app.schemas.notification import NotificationCreate, NotificationUpdate
from app.services.notification_service import NotificationService


router = APIRouter()

CanCreate = Annotated[Identity, Depends(require_permission(Resource.NOTIFICATION, Action.CREATE))]
CanRead = Annotated[Identity, Depends(require_permission(Resource.NOTIFICATION, Action.READ))]
CanUpdate = Annotated[Identity, Depends(require_permission(Resource.NOTIFICATION, Action.UPDATE))]
CanDelete = Annotated[Identity, Depends(require_permission(Resource.NOTIFICATION, Action.DELETE))]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_notification(data: NotificationCreate, identity: CanCreate, db: DbSession):
    notification = await NotificationService(db).create(identity, data)
    return {"success": True, "message": "Notification created successfully", "notification": notification}


@router.get("")
async def list_notifications(
    identity: CanRead,
    db: DbSession,
    target_role: Optional[NotificationTarget] = Query(None, alias="targetRole"),
    department: Optional[Department] = None,
):
    notifications = await NotificationService(db).list(identity, target_role, department)
    return {"success": True, "count": len(notifications), "notifications": notifications}


@router.get("/{notification_id}")
async def get_notification(notification_id: str, identity: CanRead, db: DbSession):
    notification = await NotificationService(db).get(identity, notification_id)
    return {"success": True, "notification": notification}


@router.put("/{notification_id}")
async def update_notification(notification_id: str, data: NotificationUpdate, identity: CanUpdate, db: DbSession):
    notification = await NotificationService(db).update(identity, notification_id, data)
    return {"success": True, "message": "Notification updated successfully", "notification": notification}


@router.delete("/{notification_id}")
async def delete_notification(notification_id: str, identity: CanDelete, db: DbSession):
    await NotificationService(db).delete(identity, notification_id)
    return {"success": True, "message": "Notification deleted successfully"}
