from typing import Any, Dict, List, Optional

from sqlalchemy import select

from app.models.notification import Notification, NotificationTarget
from app.models.user import Department, UserRole
from app.modules.auth.identity import Identity
from app.modules.auth.policy import (
    Resource,
    deny,
    ensure_can_view,
    notification_scope,
    resolve_write_department,
)
from app.schemas.notification import NotificationCreate, NotificationUpdate
from app.services.scoped import DepartmentScopedService, iso


class NotificationService(DepartmentScopedService):
    """Announcements addressed by target role and department"""

    model = Notification
    resource = Resource.NOTIFICATION
    label = "Notification"

    def to_dict(self, notification: Notification, created_by: Any) -> Dict[str, Any]:
        return {
            "_id": notification.id,
            "title": notification.title,
            "description": notification.description,
            "media": notification.media,
            "targetRole": notification.target_role.value,
            "department": notification.department.value,
            "createdBy": created_by,
            "createdAt": iso(notification.created_at),
            "updatedAt": iso(notification.updated_at),
        }

    def ensure_visible(self, identity: Identity, notification: Notification) -> None:
        # HODs author notifications for other roles, so they are checked on department only
        ensure_can_view(identity, notification.department, self.resource)
        if identity.role in (UserRole.STUDENT, UserRole.TEACHER):
            audience = (NotificationTarget(identity.role.value), NotificationTarget.ALL)
            if notification.target_role not in audience:
                raise deny(identity, "read notification", "Access denied")

    async def create(self, identity: Identity, data: NotificationCreate) -> Dict[str, Any]:
        notification = Notification(
            title=data.title,
            description=data.description,
            media=data.media or None,
            target_role=data.target_role,
            department=resolve_write_department(identity, data.department),
            created_by=identity.attribution,
        )
        self.db.add(notification)
        await self.db.commit()
        return await self.serialize(notification)

    async def list(
        self,
        identity: Identity,
        target_role: Optional[NotificationTarget] = None,
        department: Optional[Department] = None,
    ) -> List[Dict[str, Any]]:
        conditions = notification_scope(
            identity,
            Notification.target_role,
            Notification.department,
            requested_target=target_role,
            requested_department=department,
        )
        result = await self.db.execute(
            select(Notification).where(*conditions).order_by(Notification.created_at.desc())
        )
        return await self.serialize_many(result.scalars().all())

    async def update(self, identity: Identity, notification_id: str, data: NotificationUpdate) -> Dict[str, Any]:
        changes = {
            "title": data.title,
            "description": data.description,
            "media": data.media,
            "target_role": data.target_role,
        }
        return await self.update_fields(identity, notification_id, changes, data.department)
