from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, ResourceNotFoundError, ValidationError
from app.core.logging_config import logger
from app.models.leave_request import LeaveRequest, LeaveStatus
from app.models.user import UserRole
from app.modules.auth.identity import Identity
from app.modules.auth.policy import (
    ensure_can_delete_leave,
    ensure_can_review_leave,
    ensure_can_view_leave,
    leave_request_scope,
)
from app.schemas.leave_request import LeaveRequestCreate
from app.services.attribution import AttributionResolver
from app.services.scoped import iso
from app.services.user_service import user_summary


class LeaveRequestService:
    """Leave requests and their single review step"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.attribution = AttributionResolver(db)

    @staticmethod
    def to_dict(leave: LeaveRequest, reviewed_by: Any) -> Dict[str, Any]:
        return {
            "_id": leave.id,
            "requestedBy": user_summary(leave.requester, "email", "department", "role"),
            "role": leave.role.value,
            "reason": leave.reason,
            "status": leave.status.value,
            "reviewedBy": reviewed_by,
            "reviewedAt": iso(leave.reviewed_at),
            "createdAt": iso(leave.created_at),
            "updatedAt": iso(leave.updated_at),
        }

    async def serialize(self, leave: LeaveRequest) -> Dict[str, Any]:
        return self.to_dict(leave, await self.attribution.enrich(leave.reviewed_by))

    async def fetch(self, leave_id: str) -> LeaveRequest:
        leave = await self.db.get(LeaveRequest, leave_id)
        if leave is None:
            raise ResourceNotFoundError("Leave request", leave_id)
        return leave

    async def create(self, identity: Identity, data: LeaveRequestCreate) -> Dict[str, Any]:
        if identity.is_admin:
            raise AuthorizationError("Admin cannot submit leave requests")

        leave = LeaveRequest(
            requester=identity.user,
            role=identity.role,
            reason=data.reason,
            status=LeaveStatus.PENDING,
        )
        self.db.add(leave)
        await self.db.commit()
        return self.to_dict(leave, None)

    async def list(
        self,
        identity: Identity,
        status: Optional[LeaveStatus] = None,
        role: Optional[UserRole] = None,
    ) -> List[Dict[str, Any]]:
        conditions = leave_request_scope(identity)
        if status:
            conditions.append(LeaveRequest.status == status)
        if role:
            conditions.append(LeaveRequest.role == role)

        result = await self.db.execute(
            select(LeaveRequest).where(*conditions).order_by(LeaveRequest.created_at.desc())
        )
        leaves = result.scalars().all()
        resolved = await self.attribution.enrich_many(leave.reviewed_by for leave in leaves)
        return [self.to_dict(leave, resolved.get(leave.reviewed_by)) for leave in leaves]

    async def get(self, identity: Identity, leave_id: str) -> Dict[str, Any]:
        leave = await self.fetch(leave_id)
        ensure_can_view_leave(identity, leave)
        return await self.serialize(leave)

    async def review(self, identity: Identity, leave_id: str, status: LeaveStatus) -> Dict[str, Any]:
        leave = await self.fetch(leave_id)
        ensure_can_review_leave(identity, leave)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError(f"Leave request has already been {leave.status.value}", field="status")

        leave.status = status
        leave.reviewed_by = identity.attribution
        leave.reviewed_at = datetime.utcnow()
        await self.db.commit()

        logger.info(
            f"Leave request {leave.id} {status.value}",
            extra={
                "event_type": "leave_reviewed",
                "leave_request_id": leave.id,
                "reviewed_by": identity.subject_id,
            }
        )
        return await self.serialize(leave)

    async def delete(self, identity: Identity, leave_id: str) -> None:
        leave = await self.fetch(leave_id)
        ensure_can_delete_leave(identity, leave)
        await self.db.delete(leave)
        await self.db.commit()
