from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status

from app.models.user import Department
from app.modules.auth.dependencies import DbSession, require_permission
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Action, Resource
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate
from app.services.assignment_service import AssignmentService


router = APIRouter()

CanCreate = Annotated[Identity, Depends(require_permission(Resource.ASSIGNMENT, Action.CREATE))]
CanRead = Annotated[Identity, Depends(require_permission(Resource.ASSIGNMENT, Action.READ))]
CanUpdate = Annotated[Identity, Depends(require_permission(Resource.ASSIGNMENT, Action.UPDATE))]
CanDelete = Annotated[Identity, Depends(require_permission(Resource.ASSIGNMENT, Action.DELETE))]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_assignment(data: AssignmentCreate, identity: CanCreate, db: DbSession):
    assignment = await AssignmentService(db).create(identity, data)
    return {"success": True, "message": "Assignment created successfully", "assignment": assignment}


@router.get("")
async def list_assignments(
    identity: CanRead,
    db: DbSession,
    department: Optional[Department] = None,
    subject: Optional[str] = None,
):
    assignments = await AssignmentService(db).list(identity, department, subject)
    return {"success": True, "count": len(assignments), "assignments": assignments}


@router.get("/{assignment_id}")
async def get_assignment(assignment_id: str, identity: CanRead, db: DbSession):
    assignment = await AssignmentService(db).get(identity, assignment_id)
    return {"success": True, "assignment": assignment}


@router.put("/{assignment_id}")
async def update_assignment(assignment_id: str, data: AssignmentUpdate, identity: CanUpdate, db: DbSession):
    assignment = await AssignmentService(db).update(identity, assignment_id, data)
    return {"success": True, "message": "Assignment updated successfully", "assignment": assignment}


@router.delete("/{assignment_id}")
async def delete_assignment(assignment_id: str, identity: CanDelete, db: DbSession):
    await AssignmentService(db).delete(identity, assignment_id)
    return {"success": True, "message": "Assignment deleted successfully"}
