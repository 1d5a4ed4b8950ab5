"""
Unit Tests for database helpers and the natural-key constraints
"""
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import commit_or_conflict
from app.core.exceptions import ConflictError
from app.core.types import AdminActor
from app.models.attendance import Attendance, AttendanceStatus
from app.models.exam import Exam
from app.models.result import Result, ResultStatus
from app.models.timetable import Timetable, Weekday
from app.models.user import Department, User, UserRole


def build_user(email: str) -> User:
    return User(
        full_name="Test User",
        email=email,
        phone="9000000000",
        department=Department.BCA,
        role=UserRole.STUDENT,
        hashed_password="x",
    )


def build_attendance(user_id: str, status: AttendanceStatus) -> Attendance:
    return Attendance(
        user_id=user_id,
        role=UserRole.STUDENT,
        department=Department.BCA,
        date=date(2024, 3, 5),
        status=status,
        marked_by=AdminActor(),
    )


@pytest.mark.asyncio
async def test_commit_or_conflict_commits(db_session: AsyncSession):
    user = build_user("first@campus.edu")
    db_session.add(user)

    await commit_or_conflict(db_session)

    assert await db_session.get(User, user.id) is user


@pytest.mark.asyncio
async def test_unique_violation_becomes_conflict(db_session: AsyncSession):
    db_session.add(build_user("dup@campus.edu"))
    await db_session.commit()

    db_session.add(build_user("dup@campus.edu"))
    with pytest.raises(ConflictError) as exc_info:
        await commit_or_conflict(db_session, "Email already registered")

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Email already registered"


@pytest.mark.asyncio
async def test_second_attendance_row_for_same_day(db_session: AsyncSession):
    user = build_user("marked@campus.edu")
    db_session.add(user)
    await db_session.commit()
    user_id = user.id

    db_session.add(build_attendance(user_id, AttendanceStatus.PRESENT))
    await commit_or_conflict(db_session)

    db_session.add(build_attendance(user_id, AttendanceStatus.ABSENT))
    with pytest.raises(ConflictError) as exc_info:
        await commit_or_conflict(db_session)

    assert exc_info.value.code == "CONFLICT"


@pytest.mark.asyncio
async def test_second_result_row_for_same_subject(db_session: AsyncSession):
    user = build_user("graded@campus.edu")
    exam = Exam(
        exam_name="Midterm",
        subjects=[{"subjectName": "Accounts", "date": "2024-05-02", "time": "09:30"}],
        start_date=date(2024, 5, 1),
        end_date=date(2024, 5, 5),
        department=Department.BCA,
        created_by=AdminActor(),
    )
    db_session.add_all([user, exam])
    await db_session.commit()
    user_id, exam_id = user.id, exam.id

    db_session.add(Result(student_id=user_id, exam_id=exam_id, subject="Accounts", marks=55, status=ResultStatus.PASS))
    await commit_or_conflict(db_session)

    db_session.add(Result(student_id=user_id, exam_id=exam_id, subject="Accounts", marks=20, status=ResultStatus.FAIL))
    with pytest.raises(ConflictError):
        await commit_or_conflict(db_session)


@pytest.mark.asyncio
async def test_same_subject_in_another_exam_is_allowed(db_session: AsyncSession):
    user = build_user("twice@campus.edu")
    exams = [
        Exam(exam_name=name, subjects=[], start_date=date(2024, 5, 1), end_date=date(2024, 5, 1),
             department=Department.BCA, created_by=AdminActor())
        for name in ("Midterm", "Final")
    ]
    db_session.add_all([user, *exams])
    await db_session.commit()

    for exam in exams:
        db_session.add(Result(student_id=user.id, exam_id=exam.id, subject="Accounts",
                              marks=60, status=ResultStatus.PASS))
    await commit_or_conflict(db_session)


@pytest.mark.asyncio
async def test_second_timetable_row_for_same_slot(db_session: AsyncSession):
    def build_slot(subject: str) -> Timetable:
        return Timetable(
            day=Weekday.MONDAY,
            time_slot="09:00-10:00",
            role=UserRole.STUDENT,
            department=Department.BCA,
            subject=subject,
            created_by=AdminActor(),
        )

    db_session.add(build_slot("Data Structures"))
    await commit_or_conflict(db_session)

    db_session.add(build_slot("Algorithms"))
    with pytest.raises(ConflictError):
        await commit_or_conflict(db_session)
