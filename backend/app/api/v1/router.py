from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth,
    users,
    attendance,
    timetable,
    exams,
    results,
    assignments,
    notifications,
    leave_requests,
    dashboard,
    health,
)

api_router = APIRouter()

# Deep health checks (/health/live, /health/ready)
api_router.include_router(health.router)

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Accounts
api_router.include_router(users.router, prefix="/users", tags=["Users"])

# Department-scoped records
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(timetable.router, prefix="/timetable", tags=["Timetable"])
api_router.include_router(exams.router, prefix="/exams", tags=["Exams"])
api_router.include_router(results.router, prefix="/results", tags=["Results"])
api_router.include_router(assignments.router, prefix="/assignments", tags=["Assignments"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(leave_requests.router, prefix="/leave-requests", tags=["Leave Requests"])

# Aggregates
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
