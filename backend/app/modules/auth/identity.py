"""
Identity resolution.

A request is made either by the environment-configured admin, which has no
database row, or by a persisted user. Both are modelled as separate classes
sharing the same read-only surface (``subject_id``, ``role``, ``department``,
``status``), so code downstream never needs to null-check a user object to
tell them apart.
"""
from typing import Any, Dict, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.security import create_access_token, decode_access_token
from app.core.types import ADMIN_SENTINEL, AdminActor, UserActor
from app.models.user import Department, User, UserRole, UserStatus


class AdminIdentity:
    """The super-admin authenticated through ADMIN_USERNAME/ADMIN_PASSWORD"""

    subject_id = ADMIN_SENTINEL
    role = UserRole.ADMIN
    department = Department.ALL
    status = UserStatus.APPROVED
    full_name = "Admin"
    is_admin = True

    @property
    def email(self) -> str:
        return settings.ADMIN_EMAIL

    @property
    def attribution(self) -> AdminActor:
        return AdminActor()

    def __eq__(self, other):
        return isinstance(other, AdminIdentity)

    def __hash__(self):
        return hash(ADMIN_SENTINEL)

    def __repr__(self):
        return "<AdminIdentity>"


class UserIdentity:
    """A persisted user; role, department and status come from the row"""

    is_admin = False

    def __init__(self, user: User):
        self.user = user

    @property
    def subject_id(self) -> str:
        return self.user.id

    @property
    def role(self) -> UserRole:
        return self.user.role

    @property
    def department(self) -> Department:
        return self.user.department

    @property
    def status(self) -> UserStatus:
        return self.user.status

    @property
    def full_name(self) -> str:
        return self.user.full_name

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def attribution(self) -> UserActor:
        return UserActor(self.user.id)

    def __repr__(self):
        return f"<UserIdentity {self.user.id} {self.role.value}/{self.department.value}>"


Identity = Union[AdminIdentity, UserIdentity]


def token_claims(identity: Identity) -> Dict[str, Any]:
    return {
        "sub": identity.subject_id,
        "role": identity.role.value,
        "department": identity.department.value,
        "status": identity.status.value,
    }


def issue_token(identity: Identity) -> str:
    """Sign an access token for the given identity"""
    return create_access_token(token_claims(identity))


def is_admin_claims(claims: Dict[str, Any]) -> bool:
    return claims.get("sub") == ADMIN_SENTINEL and claims.get("role") == UserRole.ADMIN.value


async def resolve_identity(token: Optional[str], db: AsyncSession) -> Identity:
    """
    Turn a bearer token into an identity.

    Signature and expiry are checked first. Admin claims short-circuit with
    no database access; every other subject must still exist as a user,
    which also rejects stale tokens of deleted users.
    """
    if not token:
        raise AuthenticationError()

    claims = decode_access_token(token)

    if is_admin_claims(claims):
        return AdminIdentity()

    user = await db.get(User, claims["sub"])
    if user is None:
        raise AuthenticationError("User not found. Token invalid.")

    return UserIdentity(user)
