from typing import Any, Dict, List, Optional

from sqlalchemy import select

from app.core.logging_config import logger
from app.models.exam import Exam
from app.models.user import Department
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Resource, department_scope, resolve_write_department
from app.schemas.exam import ExamCreate, ExamSubject, ExamUpdate
from app.services.scoped import DepartmentScopedService, iso


def dump_subjects(subjects: List[ExamSubject]) -> List[Dict[str, Any]]:
    return [s.model_dump(by_alias=True, mode="json") for s in subjects]


class ExamService(DepartmentScopedService):
    """Exams with their subject sessions and schedule window"""

    model = Exam
    resource = Resource.EXAM
    label = "Exam"

    def to_dict(self, exam: Exam, created_by: Any) -> Dict[str, Any]:
        return {
            "_id": exam.id,
            "examName": exam.exam_name,
            "subjects": exam.subjects,
            "examSchedule": {
                "startDate": iso(exam.start_date),
                "endDate": iso(exam.end_date),
            },
            "department": exam.department.value,
            "createdBy": created_by,
            "createdAt": iso(exam.created_at),
            "updatedAt": iso(exam.updated_at),
        }

    async def create(self, identity: Identity, data: ExamCreate) -> Dict[str, Any]:
        exam = Exam(
            exam_name=data.exam_name,
            subjects=dump_subjects(data.subjects),
            start_date=data.exam_schedule.start_date,
            end_date=data.exam_schedule.end_date,
            department=resolve_write_department(identity, data.department),
            created_by=identity.attribution,
        )
        self.db.add(exam)
        await self.db.commit()

        logger.info(
            f"Exam created: {exam.exam_name} ({exam.department.value})",
            extra={"event_type": "exam_created", "exam_id": exam.id}
        )
        return await self.serialize(exam)

    async def list(self, identity: Identity, department: Optional[Department] = None) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(Exam)
            .where(*department_scope(identity, Exam.department, department))
            .order_by(Exam.start_date.desc(), Exam.created_at.desc())
        )
        return await self.serialize_many(result.scalars().all())

    async def update(self, identity: Identity, exam_id: str, data: ExamUpdate) -> Dict[str, Any]:
        changes: Dict[str, Any] = {"exam_name": data.exam_name}
        if data.subjects is not None:
            changes["subjects"] = dump_subjects(data.subjects)
        if data.exam_schedule is not None:
            changes["start_date"] = data.exam_schedule.start_date
            changes["end_date"] = data.exam_schedule.end_date
        return await self.update_fields(identity, exam_id, changes, data.department)
