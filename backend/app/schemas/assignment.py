from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from app.models.user import Department
from app.schemas.common import CamelModel, calendar_day


class AssignmentCreate(CamelModel):
    subject: str = Field(..., min_length=1, max_length=255)
    questions: str = Field(..., min_length=1)
    due_date: date
    marks: int = Field(..., ge=0)
    department: Optional[Department] = None

    normalize_date = field_validator("due_date", mode="before")(calendar_day)


class AssignmentUpdate(CamelModel):
    subject: Optional[str] = Field(None, min_length=1, max_length=255)
    questions: Optional[str] = Field(None, min_length=1)
    due_date: Optional[date] = None
    marks: Optional[int] = Field(None, ge=0)
    department: Optional[Department] = None

    normalize_date = field_validator("due_date", mode="before")(calendar_day)
