from pydantic import Field

from app.schemas.common import CamelModel


class ResultCreate(CamelModel):
    student_id: str = Field(..., min_length=1)
    exam_id: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1, max_length=255)
    marks: float = Field(..., ge=0, le=100)
