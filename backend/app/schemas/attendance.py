from datetime import date

from pydantic import Field, field_validator

from app.models.attendance import AttendanceStatus
from app.schemas.common import CamelModel, calendar_day


class AttendanceMark(CamelModel):
    user_id: str = Field(..., min_length=1)
    date: date
    status: AttendanceStatus

    normalize_date = field_validator("date", mode="before")(calendar_day)
