"""
User Service Layer
Profiles, admin account management and department directories
"""

import math
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthorizationError, ResourceNotFoundError
from app.core.logging_config import logger
from app.models.user import Department, User, UserRole, UserStatus
from app.modules.auth.identity import Identity
from app.modules.auth.policy import department_scope
from app.schemas.user import ProfileUpdate


def serialize_user(user: User) -> Dict[str, Any]:
    """Public view of a user; the password hash never leaves the service"""
    return {
        "_id": user.id,
        "fullName": user.full_name,
        "email": user.email,
        "phone": user.phone,
        "department": user.department.value,
        "role": user.role.value,
        "status": user.status.value,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


def serialize_identity(identity: Identity) -> Dict[str, Any]:
    if identity.is_admin:
        return {
            "_id": identity.subject_id,
            "fullName": identity.full_name,
            "email": settings.ADMIN_EMAIL,
            "department": identity.department.value,
            "role": identity.role.value,
            "status": identity.status.value,
        }
    return serialize_user(identity.user)


_SUMMARY_FIELDS = {
    "email": lambda u: u.email,
    "department": lambda u: u.department.value,
    "role": lambda u: u.role.value,
}


def user_summary(user: Optional[User], *fields: str) -> Optional[Dict[str, Any]]:
    """Compact embedded user: id, name and the requested extra fields"""
    if user is None:
        return None
    data = {"_id": user.id, "fullName": user.full_name}
    for field in fields:
        data[field] = _SUMMARY_FIELDS[field](user)
    return data


class UserService:
    """Service for user profile and account management"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user

    # =====================================================
    # SELF SERVICE
    # =====================================================

    async def update_profile(self, identity: Identity, data: ProfileUpdate) -> Dict[str, Any]:
        if identity.is_admin:
            raise AuthorizationError("Admin profile is managed through deployment configuration")

        user = identity.user
        if data.full_name is not None:
            user.full_name = data.full_name
        if data.phone is not None:
            user.phone = data.phone
        await self.db.commit()
        return serialize_user(user)

    # =====================================================
    # ADMIN MANAGEMENT
    # =====================================================

    async def list_users(
        self,
        status: Optional[UserStatus] = None,
        role: Optional[UserRole] = None,
        department: Optional[Department] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        conditions = []
        if status:
            conditions.append(User.status == status)
        if role:
            conditions.append(User.role == role)
        if department:
            conditions.append(User.department == department)

        total = await self.db.scalar(select(func.count(User.id)).where(*conditions))
        result = await self.db.execute(
            select(User)
            .where(*conditions)
            .order_by(User.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        users = result.scalars().all()

        return {
            "count": len(users),
            "total": total,
            "page": page,
            "pages": math.ceil(total / limit) if total else 0,
            "users": [serialize_user(u) for u in users],
        }

    async def list_pending(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(User)
            .where(User.status == UserStatus.PENDING)
            .order_by(User.created_at.desc())
        )
        return [serialize_user(u) for u in result.scalars().all()]

    async def set_status(self, identity: Identity, user_id: str, status: UserStatus) -> Dict[str, Any]:
        user = await self.get_user(user_id)
        previous = user.status
        user.status = status
        await self.db.commit()

        logger.info(
            f"User {user.email} status {previous.value} -> {status.value}",
            extra={
                "event_type": "user_status_change",
                "target_user_id": user.id,
                "changed_by": identity.subject_id,
            }
        )
        return serialize_user(user)

    # =====================================================
    # DIRECTORY
    # =====================================================

    async def list_by_role(
        self,
        identity: Identity,
        role: Optional[UserRole] = None,
        department: Optional[Department] = None,
    ) -> List[Dict[str, Any]]:
        """Approved users, department-scoped for everyone but the admin"""
        conditions = [User.status == UserStatus.APPROVED]
        conditions += department_scope(identity, User.department, department, include_shared=False)
        if role:
            conditions.append(User.role == role)

        result = await self.db.execute(
            select(User).where(*conditions).order_by(User.full_name)
        )
        return [serialize_user(u) for u in result.scalars().all()]
