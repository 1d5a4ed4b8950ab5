# Pydantic request schemas
from app.schemas.common import CamelModel
from app.schemas.auth import AdminLogin, UserRegister, UserLogin, ChangePassword
from app.schemas.user import ProfileUpdate, StatusUpdate
from app.schemas.attendance import AttendanceMark
from app.schemas.timetable import TimetableSlot
from app.schemas.exam import ExamSubject, ExamSchedule, ExamCreate, ExamUpdate
from app.schemas.result import ResultCreate
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate
from app.schemas.notification import NotificationCreate, NotificationUpdate
from app.schemas.leave_request import LeaveRequestCreate, LeaveReview
