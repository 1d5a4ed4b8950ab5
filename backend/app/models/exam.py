from sqlalchemy import Column, String, Date, DateTime, JSON, Enum as SQLEnum
from datetime import datetime

from app.core.database import Base
from app.core.types import AttributionType, generate_uuid
from app.models.user import Department


class Exam(Base):
    """
    An exam with its subject sessions and overall schedule window.

    ``subjects`` is a JSON list of
    ``{"subjectName", "date", "time", "venue"}`` objects, dates as ISO strings.
    """
    __tablename__ = "exams"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    exam_name = Column(String(255), nullable=False)
    subjects = Column(JSON, nullable=False, default=list)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    department = Column(SQLEnum(Department), nullable=False, index=True)
    created_by = Column(AttributionType, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Exam {self.exam_name} ({self.department.value})>"
