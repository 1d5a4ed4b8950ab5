# Re-export all models for convenient imports
from app.models.user import User, UserRole, UserStatus, Department, REGISTRABLE_ROLES, MEMBER_DEPARTMENTS
from app.models.attendance import Attendance, AttendanceStatus
from app.models.timetable import Timetable, Weekday
from app.models.exam import Exam
from app.models.result import Result, ResultStatus, PASS_MARK
from app.models.assignment import Assignment
from app.models.notification import Notification, NotificationTarget
from app.models.leave_request import LeaveRequest, LeaveStatus

__all__ = [
    # User
    "User",
    "UserRole",
    "UserStatus",
    "Department",
    "REGISTRABLE_ROLES",
    "MEMBER_DEPARTMENTS",
    # Department-scoped records
    "Attendance",
    "AttendanceStatus",
    "Timetable",
    "Weekday",
    "Exam",
    "Assignment",
    "Notification",
    "NotificationTarget",
    # Results
    "Result",
    "ResultStatus",
    "PASS_MARK",
    # Leave
    "LeaveRequest",
    "LeaveStatus",
]
