from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status

from app.models.user import Department
from app.modules.auth.dependencies import DbSession, require_permission
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Action, Resource
from app.schemas.exam import ExamCreate, ExamUpdate
from app.services.exam_service import ExamService


router = APIRouter()

CanCreate = Annotated[Identity, Depends(require_permission(Resource.EXAM, Action.CREATE))]
CanRead = Annotated[Identity, Depends(require_permission(Resource.EXAM, Action.READ))]
CanUpdate = Annotated[Identity, Depends(require_permission(Resource.EXAM, Action.UPDATE))]
CanDelete = Annotated[Identity, Depends(require_permission(Resource.EXAM, Action.DELETE))]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_exam(data: ExamCreate, identity: CanCreate, db: DbSession):
    exam = await ExamService(db).create(identity, data)
    return {"success": True, "message": "Exam created successfully", "exam": exam}


@router.get("")
async def list_exams(identity: CanRead, db: DbSession, department: Optional[Department] = None):
    """Department filter is honoured for the admin only"""
    exams = await ExamService(db).list(identity, department)
    return {"success": True, "count": len(exams), "exams": exams}


@router.get("/{exam_id}")
async def get_exam(exam_id: str, identity: CanRead, db: DbSession):
    exam = await ExamService(db).get(identity, exam_id)
    return {"success": True, "exam": exam}


@router.put("/{exam_id}")
async def update_exam(exam_id: str, data: ExamUpdate, identity: CanUpdate, db: DbSession):
    exam = await ExamService(db).update(identity, exam_id, data)
    return {"success": True, "message": "Exam updated successfully", "exam": exam}


@router.delete("/{exam_id}")
async def delete_exam(exam_id: str, identity: CanDelete, db: DbSession):
    await ExamService(db).delete(identity, exam_id)
    return {"success": True, "message": "Exam deleted successfully"}
