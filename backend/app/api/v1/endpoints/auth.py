from fastapi import APIRouter, Request, status

from app.modules.auth.dependencies import ApprovedIdentity, CurrentIdentity, DbSession
from app.schemas.auth import AdminLogin, ChangePassword, UserLogin, UserRegister
from app.services.auth_service import AuthService
from app.services.user_service import serialize_identity, serialize_user


router = APIRouter()


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/admin/login")
async def admin_login(data: AdminLogin, request: Request, db: DbSession):
    """Log in as the environment-configured admin"""
    token, identity = await AuthService(db).admin_login(data, client_ip(request))
    return {
        "success": True,
        "message": "Admin login successful",
        "token": token,
        "user": serialize_identity(identity),
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(data: UserRegister, request: Request, db: DbSession):
    """Self-registration; the account starts pending until an admin approves it"""
    user = await AuthService(db).register(data, client_ip(request))
    return {
        "success": True,
        "message": "Registration successful. Please wait for admin approval.",
        "user": serialize_user(user),
    }


@router.post("/login")
async def login(data: UserLogin, request: Request, db: DbSession):
    token, user = await AuthService(db).login(data, client_ip(request))
    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "user": serialize_user(user),
    }


@router.get("/me")
async def me(identity: CurrentIdentity):
    """Current identity; reachable while the account is still pending"""
    return {"success": True, "user": serialize_identity(identity)}


@router.put("/change-password")
async def change_password(data: ChangePassword, identity: ApprovedIdentity, db: DbSession):
    await AuthService(db).change_password(identity, data)
    return {"success": True, "message": "Password changed successfully"}
