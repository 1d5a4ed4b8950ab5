from sqlalchemy import Column, String, Float, DateTime, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import generate_uuid


PASS_MARK = 40


class ResultStatus(str, enum.Enum):
    PASS = "pass"
    FAIL = "fail"

    @classmethod
    def for_marks(cls, marks: float) -> "ResultStatus":
        return cls.PASS if marks >= PASS_MARK else cls.FAIL


class Result(Base):
    """Marks for one subject of one exam for one student"""
    __tablename__ = "results"
    __table_args__ = (
        UniqueConstraint("student_id", "exam_id", "subject", name="uq_result_student_exam_subject"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    student_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    exam_id = Column(String(36), ForeignKey("exams.id", ondelete="CASCADE"), nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    marks = Column(Float, nullable=False)
    status = Column(SQLEnum(ResultStatus), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    student = relationship("User", lazy="selectin")
    exam = relationship("Exam", lazy="selectin")

    def __repr__(self):
        return f"<Result {self.student_id} {self.exam_id} {self.subject}={self.marks}>"
