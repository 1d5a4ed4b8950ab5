"""
Unit Tests for request schemas
Tests for: camelCase input, registration rules, date normalisation, range checks
"""
import pytest
from datetime import date
from pydantic import ValidationError

from app.models.attendance import AttendanceStatus
from app.models.leave_request import LeaveStatus
from app.models.user import Department, UserRole
from app.schemas.attendance import AttendanceMark
from app.schemas.auth import ChangePassword, UserRegister
from app.schemas.exam import ExamCreate, ExamSchedule
from app.schemas.leave_request import LeaveReview
from app.schemas.result import ResultCreate
from app.schemas.timetable import TimetableSlot


def registration(**overrides) -> dict:
    data = {
        "fullName": "Priya Sharma",
        "email": "Priya.Sharma@Campus.edu",
        "phone": "9876543210",
        "department": "BCA",
        "role": "student",
        "password": "secret1",
        "confirmPassword": "secret1",
    }
    data.update(overrides)
    return data


class TestUserRegister:

    def test_valid_registration(self):
        user = UserRegister(**registration())

        assert user.full_name == "Priya Sharma"
        assert user.department == Department.BCA
        assert user.role == UserRole.STUDENT

    def test_email_lowercased(self):
        assert UserRegister(**registration()).email == "priya.sharma@campus.edu"

    def test_bcom_department_value(self):
        assert UserRegister(**registration(department="BCom")).department == Department.BCOM

    def test_all_department_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            UserRegister(**registration(department="all"))

        assert "Department must be one of BCA, BCom, BA" in str(exc_info.value)

    def test_admin_role_rejected(self):
        with pytest.raises(ValidationError):
            UserRegister(**registration(role="admin"))

    def test_password_mismatch(self):
        with pytest.raises(ValidationError) as exc_info:
            UserRegister(**registration(confirmPassword="different"))

        assert "Passwords do not match" in str(exc_info.value)

    def test_short_password(self):
        with pytest.raises(ValidationError):
            UserRegister(**registration(password="abc", confirmPassword="abc"))

    def test_whitespace_stripped(self):
        assert UserRegister(**registration(fullName="  Priya  ")).full_name == "Priya"


class TestChangePassword:

    def test_new_passwords_must_match(self):
        with pytest.raises(ValidationError) as exc_info:
            ChangePassword(currentPassword="old", newPassword="secret1", confirmPassword="secret2")

        assert "New passwords do not match" in str(exc_info.value)


class TestCalendarDays:

    def test_attendance_datetime_truncated_to_day(self):
        mark = AttendanceMark(userId="u-1", date="2024-03-05T18:30:00.000Z", status="present")

        assert mark.date == date(2024, 3, 5)
        assert mark.status == AttendanceStatus.PRESENT

    def test_attendance_plain_date(self):
        assert AttendanceMark(user_id="u-1", date="2024-03-05", status="absent").date == date(2024, 3, 5)

    def test_exam_schedule_must_be_ordered(self):
        with pytest.raises(ValidationError):
            ExamSchedule(startDate="2024-04-10", endDate="2024-04-01")

    def test_exam_needs_a_subject(self):
        with pytest.raises(ValidationError):
            ExamCreate(
                examName="Midterm",
                subjects=[],
                examSchedule={"startDate": "2024-04-01", "endDate": "2024-04-10"},
            )

    def test_exam_subject_dates_normalised(self):
        exam = ExamCreate(
            examName="Midterm",
            subjects=[{"subjectName": "Maths", "date": "2024-04-02T09:00:00Z", "time": "10:00"}],
            examSchedule={"startDate": "2024-04-01", "endDate": "2024-04-10"},
        )

        assert exam.subjects[0].date == date(2024, 4, 2)
        assert exam.department is None


class TestRanges:

    @pytest.mark.parametrize("marks", [-1, 100.5])
    def test_marks_out_of_range(self, marks):
        with pytest.raises(ValidationError):
            ResultCreate(studentId="s", examId="e", subject="Maths", marks=marks)

    @pytest.mark.parametrize("marks", [0, 39.5, 100])
    def test_marks_in_range(self, marks):
        assert ResultCreate(studentId="s", examId="e", subject="Maths", marks=marks).marks == marks

    def test_leave_review_must_decide(self):
        with pytest.raises(ValidationError) as exc_info:
            LeaveReview(status="pending")

        assert "Valid status (approved or rejected) is required" in str(exc_info.value)
        assert LeaveReview(status="approved").status == LeaveStatus.APPROVED

    def test_timetable_not_for_admin_role(self):
        with pytest.raises(ValidationError):
            TimetableSlot(day="Monday", subject="Maths", timeSlot="9-10", role="admin")
