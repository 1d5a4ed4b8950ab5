"""
Authentication Service
Login for both identity kinds, self-registration and password changes
"""

import secrets
from typing import Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.database import commit_or_conflict
from app.core.exceptions import (
    AccountNotApprovedError,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from app.core.logging_config import logger
from app.core.security import get_password_hash, verify_password
from app.models.user import User, UserStatus
from app.modules.auth.identity import AdminIdentity, Identity, UserIdentity, issue_token
from app.schemas.auth import AdminLogin, ChangePassword, UserLogin, UserRegister


# Same message for both login kinds so a failure never reveals which was tried
INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Service for login, registration and password management"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def admin_login(self, data: AdminLogin, client_ip: str = "unknown") -> Tuple[str, AdminIdentity]:
        username_ok = secrets.compare_digest(data.username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8"))
        password_ok = secrets.compare_digest(data.password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))
        if not (username_ok and password_ok):
            logger.log_auth_event(
                event="admin_login",
                success=False,
                reason="bad admin credentials",
                client_ip=client_ip,
            )
            raise AuthenticationError(INVALID_CREDENTIALS)

        identity = AdminIdentity()
        logger.log_auth_event(event="admin_login", success=True, user_email=identity.email, client_ip=client_ip)
        return issue_token(identity), identity

    async def register(self, data: UserRegister, client_ip: str = "unknown") -> User:
        existing = await self.db.scalar(select(User.id).where(User.email == data.email))
        if existing:
            logger.log_auth_event(
                event="register",
                success=False,
                user_email=data.email,
                reason="Email already registered",
                client_ip=client_ip,
            )
            raise ValidationError("Email already registered", field="email")

        hashed = await run_in_threadpool(get_password_hash, data.password)
        user = User(
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            department=data.department,
            role=data.role,
            hashed_password=hashed,
            status=UserStatus.PENDING,
        )
        self.db.add(user)
        await commit_or_conflict(self.db, "Email already registered")

        logger.log_auth_event(event="register", success=True, user_email=user.email, client_ip=client_ip)
        return user

    async def login(self, data: UserLogin, client_ip: str = "unknown") -> Tuple[str, User]:
        user = await self.db.scalar(select(User).where(User.email == data.email))

        valid = False
        if user is not None:
            valid = await run_in_threadpool(verify_password, data.password, user.hashed_password)

        if not valid:
            logger.log_auth_event(
                event="login",
                success=False,
                user_email=data.email,
                reason="invalid credentials",
                client_ip=client_ip,
            )
            raise AuthenticationError(INVALID_CREDENTIALS)

        if user.status != UserStatus.APPROVED:
            logger.log_auth_event(
                event="login",
                success=False,
                user_email=user.email,
                reason=f"account {user.status.value}",
                client_ip=client_ip,
            )
            raise AccountNotApprovedError(user.status.value)

        logger.log_auth_event(event="login", success=True, user_email=user.email, client_ip=client_ip)
        return issue_token(UserIdentity(user)), user

    async def change_password(self, identity: Identity, data: ChangePassword) -> None:
        if identity.is_admin:
            raise AuthorizationError("Admin password is managed through deployment configuration")

        user = identity.user
        matches = await run_in_threadpool(verify_password, data.current_password, user.hashed_password)
        if not matches:
            logger.log_auth_event(
                event="change_password",
                success=False,
                user_email=user.email,
                reason="current password mismatch",
            )
            raise AuthenticationError("Current password is incorrect")

        user.hashed_password = await run_in_threadpool(get_password_hash, data.new_password)
        await self.db.commit()
        logger.log_auth_event(event="change_password", success=True, user_email=user.email)
