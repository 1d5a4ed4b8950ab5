from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.modules.auth.dependencies import DbSession, require_permission
from app.modules.auth.identity import Identity
from app.modules.auth.policy import Action, Resource
from app.schemas.result import ResultCreate
from app.services.result_service import ResultService


router = APIRouter()

CanRecord = Annotated[Identity, Depends(require_permission(Resource.RESULT, Action.CREATE))]
CanRead = Annotated[Identity, Depends(require_permission(Resource.RESULT, Action.READ))]
CanDelete = Annotated[Identity, Depends(require_permission(Resource.RESULT, Action.DELETE))]


@router.post("")
async def record_result(data: ResultCreate, response: Response, identity: CanRecord, db: DbSession):
    """Create or update marks; pass/fail is derived from the marks"""
    result, created = await ResultService(db).record(identity, data)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return {
        "success": True,
        "message": "Result created successfully" if created else "Result updated successfully",
        "result": result,
    }


@router.get("")
async def list_results(
    identity: CanRead,
    db: DbSession,
    student_id: Optional[str] = Query(None, alias="studentId"),
    exam_id: Optional[str] = Query(None, alias="examId"),
    subject: Optional[str] = None,
):
    results = await ResultService(db).list(identity, student_id, exam_id, subject)
    return {"success": True, "count": len(results), "results": results}


@router.get("/{result_id}")
async def get_result(result_id: str, identity: CanRead, db: DbSession):
    result = await ResultService(db).get(identity, result_id)
    return {"success": True, "result": result}


@router.delete("/{result_id}")
async def delete_result(result_id: str, identity: CanDelete, db: DbSession):
    await ResultService(db).delete(identity, result_id)
    return {"success": True, "message": "Result deleted successfully"}
