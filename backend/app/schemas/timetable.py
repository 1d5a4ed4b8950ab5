from typing import Optional

from pydantic import Field, field_validator

from app.models.timetable import Weekday
from app.models.user import Department, UserRole
from app.schemas.common import CamelModel


class TimetableSlot(CamelModel):
    day: Weekday
    subject: str = Field(..., min_length=1, max_length=255)
    time_slot: str = Field(..., min_length=1, max_length=50)
    role: UserRole
    department: Optional[Department] = None

    @field_validator("role")
    @classmethod
    def audience_role(cls, v: UserRole) -> UserRole:
        if v == UserRole.ADMIN:
            raise ValueError("Role must be one of student, teacher, hod")
        return v
