from sqlalchemy import Column, String, Integer, Text, Date, DateTime, Enum as SQLEnum
from datetime import datetime

from app.core.database import Base
from app.core.types import AttributionType, generate_uuid
from app.models.user import Department


class Assignment(Base):
    """Assignment published to a department"""
    __tablename__ = "assignments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    subject = Column(String(255), nullable=False)
    questions = Column(Text, nullable=False)
    due_date = Column(Date, nullable=False)
    marks = Column(Integer, nullable=False)
    department = Column(SQLEnum(Department), nullable=False, index=True)
    created_by = Column(AttributionType, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Assignment {self.subject} ({self.department.value})>"
