"""
Dashboard Service
Role-shaped aggregate counts; every count reuses the read scope of its resource
"""

from typing import Any, Dict

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.assignment import Assignment
from app.models.attendance import Attendance, AttendanceStatus
from app.models.exam import Exam
from app.models.leave_request import LeaveRequest, LeaveStatus
from app.models.notification import Notification
from app.models.user import User, UserRole, UserStatus
from app.modules.auth.identity import Identity
from app.modules.auth.policy import department_scope, leave_request_scope, notification_scope
from app.services.attendance_service import attendance_summary


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self, model, *conditions) -> int:
        return await self.db.scalar(select(func.count(model.id)).where(*conditions)) or 0

    async def stats(self, identity: Identity) -> Dict[str, Any]:
        if identity.is_admin:
            return await self.admin_stats()
        if identity.role == UserRole.HOD:
            return await self.hod_stats(identity)
        if identity.role == UserRole.TEACHER:
            return await self.teacher_stats(identity)
        return await self.student_stats(identity)

    async def admin_stats(self) -> Dict[str, Any]:
        approved = User.status == UserStatus.APPROVED
        return {
            "totalUsers": await self.count(User),
            "pendingUsers": await self.count(User, User.status == UserStatus.PENDING),
            "approvedUsers": await self.count(User, approved),
            "students": await self.count(User, approved, User.role == UserRole.STUDENT),
            "teachers": await self.count(User, approved, User.role == UserRole.TEACHER),
            "hods": await self.count(User, approved, User.role == UserRole.HOD),
            "totalExams": await self.count(Exam),
            "totalAssignments": await self.count(Assignment),
            "totalNotifications": await self.count(Notification),
            "pendingLeaveRequests": await self.count(LeaveRequest, LeaveRequest.status == LeaveStatus.PENDING),
        }

    async def department_counts(self, identity: Identity) -> Dict[str, int]:
        """Counts every non-admin dashboard shares"""
        return {
            "exams": await self.count(Exam, *department_scope(identity, Exam.department)),
            "assignments": await self.count(Assignment, *department_scope(identity, Assignment.department)),
            "notifications": await self.count(
                Notification,
                *notification_scope(identity, Notification.target_role, Notification.department),
            ),
        }

    async def department_members(self, identity: Identity, role: UserRole) -> int:
        return await self.count(
            User,
            User.status == UserStatus.APPROVED,
            User.role == role,
            User.department == identity.department,
        )

    async def hod_stats(self, identity: Identity) -> Dict[str, Any]:
        reviewable = leave_request_scope(identity) + [LeaveRequest.status == LeaveStatus.PENDING]
        return {
            "students": await self.department_members(identity, UserRole.STUDENT),
            "teachers": await self.department_members(identity, UserRole.TEACHER),
            **await self.department_counts(identity),
            "pendingLeaveRequests": await self.count(LeaveRequest, *reviewable),
        }

    async def teacher_stats(self, identity: Identity) -> Dict[str, Any]:
        return {
            "students": await self.department_members(identity, UserRole.STUDENT),
            **await self.department_counts(identity),
            "myLeaveRequests": await self.count(LeaveRequest, LeaveRequest.requester_id == identity.subject_id),
        }

    async def student_stats(self, identity: Identity) -> Dict[str, Any]:
        result = await self.db.execute(
            select(Attendance.status, func.count(Attendance.id))
            .where(Attendance.user_id == identity.subject_id)
            .group_by(Attendance.status)
        )
        counts = {status: count for status, count in result.all()}
        return {
            **await self.department_counts(identity),
            "attendance": attendance_summary(
                counts.get(AttendanceStatus.PRESENT, 0),
                counts.get(AttendanceStatus.ABSENT, 0),
            ),
        }
