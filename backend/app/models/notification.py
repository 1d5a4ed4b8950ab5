from sqlalchemy import Column, String, Text, DateTime, Enum as SQLEnum
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import AttributionType, generate_uuid
from app.models.user import Department


class NotificationTarget(str, enum.Enum):
    """Audience of a notification. ALL reaches every role."""
    STUDENT = "student"
    TEACHER = "teacher"
    HOD = "hod"
    ALL = "all"


class Notification(Base):
    """Announcement addressed to a role and a department"""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    media = Column(String(500), nullable=True)  # URL, storage is external
    target_role = Column(SQLEnum(NotificationTarget), default=NotificationTarget.ALL, nullable=False)
    department = Column(SQLEnum(Department), nullable=False, index=True)
    created_by = Column(AttributionType, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Notification {self.title!r} -> {self.target_role.value}/{self.department.value}>"
