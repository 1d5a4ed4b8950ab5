from typing import Optional

from pydantic import Field

from app.models.user import UserStatus
from app.schemas.common import CamelModel


class ProfileUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=1, max_length=20)


class StatusUpdate(CamelModel):
    status: UserStatus
