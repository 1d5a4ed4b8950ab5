from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.models.user import Department
from app.schemas.common import CamelModel, calendar_day


class ExamSubject(CamelModel):
    subject_name: str = Field(..., min_length=1, max_length=255)
    date: date
    time: str = Field(..., min_length=1, max_length=50)
    venue: Optional[str] = Field(None, max_length=255)

    normalize_date = field_validator("date", mode="before")(calendar_day)


class ExamSchedule(CamelModel):
    start_date: date
    end_date: date

    normalize_dates = field_validator("start_date", "end_date", mode="before")(calendar_day)

    @model_validator(mode="after")
    def ordered(self):
        if self.end_date < self.start_date:
            raise ValueError("Exam end date must not be before its start date")
        return self


class ExamCreate(CamelModel):
    exam_name: str = Field(..., min_length=1, max_length=255)
    subjects: List[ExamSubject] = Field(..., min_length=1)
    exam_schedule: ExamSchedule
    department: Optional[Department] = None


class ExamUpdate(CamelModel):
    exam_name: Optional[str] = Field(None, min_length=1, max_length=255)
    subjects: Optional[List[ExamSubject]] = Field(None, min_length=1)
    exam_schedule: Optional[ExamSchedule] = None
    department: Optional[Department] = None
