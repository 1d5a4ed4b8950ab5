from app.services.attribution import AttributionResolver
from app.services.auth_service import AuthService
from app.services.user_service import UserService
from app.services.attendance_service import AttendanceService
from app.services.timetable_service import TimetableService
from app.services.exam_service import ExamService
from app.services.result_service import ResultService
from app.services.assignment_service import AssignmentService
from app.services.notification_service import NotificationService
from app.services.leave_request_service import LeaveRequestService
from app.services.dashboard_service import DashboardService
