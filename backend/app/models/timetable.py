from sqlalchemy import Column, String, DateTime, UniqueConstraint, Enum as SQLEnum
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import AttributionType, generate_uuid
from app.models.user import Department, UserRole


class Weekday(str, enum.Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class Timetable(Base):
    """A subject scheduled in one time slot of one weekday for a role and department"""
    __tablename__ = "timetables"
    __table_args__ = (
        UniqueConstraint("department", "role", "day", "time_slot", name="uq_timetable_slot"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    day = Column(SQLEnum(Weekday), nullable=False)
    time_slot = Column(String(50), nullable=False)
    subject = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False)
    department = Column(SQLEnum(Department), nullable=False, index=True)
    created_by = Column(AttributionType, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Timetable {self.department.value} {self.role.value} {self.day.value} {self.time_slot}>"
