from typing import Any, Dict, List, Optional

from sqlalchemy import select

from app.models.assignment import Assignment
from app.models.user import Department
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Resource, department_scope, resolve_write_department
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate
from app.services.scoped import DepartmentScopedService, iso


class AssignmentService(DepartmentScopedService):
    model = Assignment
    resource = Resource.ASSIGNMENT
    label = "Assignment"

    def to_dict(self, assignment: Assignment, created_by: Any) -> Dict[str, Any]:
        return {
            "_id": assignment.id,
            "subject": assignment.subject,
            "questions": assignment.questions,
            "dueDate": iso(assignment.due_date),
            "marks": assignment.marks,
            "department": assignment.department.value,
            "createdBy": created_by,
            "createdAt": iso(assignment.created_at),
            "updatedAt": iso(assignment.updated_at),
        }

    async def create(self, identity: Identity, data: AssignmentCreate) -> Dict[str, Any]:
        assignment = Assignment(
            subject=data.subject,
            questions=data.questions,
            due_date=data.due_date,
            marks=data.marks,
            department=resolve_write_department(identity, data.department),
            created_by=identity.attribution,
        )
        self.db.add(assignment)
        await self.db.commit()
        return await self.serialize(assignment)

    async def list(
        self,
        identity: Identity,
        department: Optional[Department] = None,
        subject: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        conditions = department_scope(identity, Assignment.department, department)
        if subject:
            conditions.append(Assignment.subject == subject)

        result = await self.db.execute(
            select(Assignment).where(*conditions).order_by(Assignment.due_date.desc())
        )
        return await self.serialize_many(result.scalars().all())

    async def update(self, identity: Identity, assignment_id: str, data: AssignmentUpdate) -> Dict[str, Any]:
        changes = {
            "subject": data.subject,
            "questions": data.questions,
            "due_date": data.due_date,
            "marks": data.marks,
        }
        return await self.update_fields(identity, assignment_id, changes, data.department)
