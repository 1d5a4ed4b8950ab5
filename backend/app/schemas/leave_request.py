from pydantic import Field, field_validator

from app.models.leave_request import LeaveStatus
from app.schemas.common import CamelModel


class LeaveRequestCreate(CamelModel):
    reason: str = Field(..., min_length=1)


class LeaveReview(CamelModel):
    status: LeaveStatus

    @field_validator("status")
    @classmethod
    def decided(cls, v: LeaveStatus) -> LeaveStatus:
        if v == LeaveStatus.PENDING:
            raise ValueError("Valid status (approved or rejected) is required")
        return v
