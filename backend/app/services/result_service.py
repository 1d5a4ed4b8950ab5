from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import commit_or_conflict
from app.core.exceptions import ResourceNotFoundError
from app.models.exam import Exam
from app.models.result import Result, ResultStatus
from app.models.user import User, UserRole
from app.modules.auth.identity import Identity
from app.modules.auth.policy import ensure_can_record_result, ensure_can_view_result, owner_scope
from app.schemas.result import ResultCreate
from app.services.scoped import iso
from app.services.user_service import user_summary


class ResultService:
    """Exam results, one per (student, exam, subject)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def to_dict(result: Result) -> Dict[str, Any]:
        exam = result.exam
        return {
            "_id": result.id,
            "studentId": user_summary(result.student, "email", "department"),
            "examId": {
                "_id": exam.id,
                "examName": exam.exam_name,
                "department": exam.department.value,
            } if exam is not None else None,
            "subject": result.subject,
            "marks": result.marks,
            "status": result.status.value,
            "createdAt": iso(result.created_at),
            "updatedAt": iso(result.updated_at),
        }

    async def fetch(self, result_id: str) -> Result:
        result = await self.db.get(Result, result_id)
        if result is None:
            raise ResourceNotFoundError("Result", result_id)
        return result

    async def find(self, student_id: str, exam_id: str, subject: str) -> Optional[Result]:
        return await self.db.scalar(
            select(Result).where(
                Result.student_id == student_id,
                Result.exam_id == exam_id,
                Result.subject == subject,
            )
        )

    async def record(self, identity: Identity, data: ResultCreate) -> Tuple[Dict[str, Any], bool]:
        """Create or update marks for (student, exam, subject). Returns (result, created)."""
        student = await self.db.get(User, data.student_id)
        if student is None or student.role != UserRole.STUDENT:
            raise ResourceNotFoundError("Student", data.student_id)

        exam = await self.db.get(Exam, data.exam_id)
        if exam is None:
            raise ResourceNotFoundError("Exam", data.exam_id)

        ensure_can_record_result(identity, student, exam.department)

        status = ResultStatus.for_marks(data.marks)
        result = await self.find(student.id, exam.id, data.subject)
        created = result is None
        if created:
            result = Result(
                student=student,
                exam=exam,
                subject=data.subject,
                marks=data.marks,
                status=status,
            )
            self.db.add(result)
        else:
            result.marks = data.marks
            result.status = status

        await commit_or_conflict(self.db, "This result was recorded concurrently, please retry")
        return self.to_dict(result), created

    async def list(
        self,
        identity: Identity,
        student_id: Optional[str] = None,
        exam_id: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Students see their own; teachers and HODs see their department's students"""
        conditions = owner_scope(identity, Result.student_id, student_id)
        if not identity.is_admin and identity.role != UserRole.STUDENT:
            conditions.append(Result.student.has(User.department == identity.department))
        if exam_id:
            conditions.append(Result.exam_id == exam_id)
        if subject:
            conditions.append(Result.subject == subject)

        rows = await self.db.execute(
            select(Result).where(*conditions).order_by(Result.created_at.desc())
        )
        return [self.to_dict(r) for r in rows.scalars().all()]

    async def get(self, identity: Identity, result_id: str) -> Dict[str, Any]:
        result = await self.fetch(result_id)
        ensure_can_view_result(identity, result.student)
        return self.to_dict(result)

    async def delete(self, identity: Identity, result_id: str) -> None:
        result = await self.fetch(result_id)
        await self.db.delete(result)
        await self.db.commit()
