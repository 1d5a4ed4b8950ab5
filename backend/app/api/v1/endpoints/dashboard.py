from fastapi import APIRouter

from app.modules.auth.dependencies import ApprovedIdentity, DbSession
from app.services.dashboard_service import DashboardService


router = APIRouter()


@router.get("/stats")
async def dashboard_stats(identity: ApprovedIdentity, db: DbSession):
    """Counts shaped by the caller's role"""
    stats = await DashboardService(db).stats(identity)
    return {"success": True, "stats": stats}
