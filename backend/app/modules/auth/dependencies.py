from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging_config import set_user_id
from app.modules.auth.identity import Identity, resolve_identity
from app.modules.auth.policy import Action, Resource, ensure_approved, ensure_permitted

# auto_error=False so a missing header reaches our own 401 envelope
security = HTTPBearer(auto_error=False)


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Identity:
    """Resolve the bearer token to an identity (no status gate)"""
    token = credentials.credentials if credentials else None
    identity = await resolve_identity(token, db)
    set_user_id(identity.subject_id)
    # Plain values for the request log; ORM state may be expired by then
    request.state.actor = {
        "user_id": identity.subject_id,
        "role": identity.role.value,
        "department": identity.department.value,
    }
    return identity


async def get_approved_identity(
    identity: Identity = Depends(get_current_identity)
) -> Identity:
    """Resolved identity that also passed the status gate"""
    ensure_approved(identity)
    return identity


def require_permission(resource: Resource, action: Action):
    """Dependency factory applying the status gate then the role gate"""

    async def dependency(identity: Identity = Depends(get_approved_identity)) -> Identity:
        ensure_permitted(identity, resource, action)
        return identity

    return dependency


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
ApprovedIdentity = Annotated[Identity, Depends(get_approved_identity)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
