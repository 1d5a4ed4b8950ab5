from typing import Optional

from pydantic import Field

from app.models.notification import NotificationTarget
from app.models.user import Department
from app.schemas.common import CamelModel


class NotificationCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    media: Optional[str] = Field(None, max_length=500)
    target_role: NotificationTarget
    department: Optional[Department] = None


class NotificationUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    media: Optional[str] = Field(None, max_length=500)
    target_role: Optional[NotificationTarget] = None
    department: Optional[Department] = None
