"""
TutorHub Backend — Instructor Directory Routes
===============================================

What:  GET /instructor (public directory) and GET /instructor/{id}
       (detail with courses and schedules, instructors only).
"""

from typing import List

from fastapi import APIRouter

from tutorhub.dependencies import CurrentInstructor, DBSession
from tutorhub.schemas.common import ErrorResponse
from tutorhub.schemas.instructor import InstructorDetail, InstructorListItem
from tutorhub.services.instructor_service import instructor_directory

router = APIRouter(prefix="/instructor", tags=["Instructor"])


@router.get(
    "",
    response_model=List[InstructorListItem],
    summary="List all instructors with their courses",
)
async def list_instructors(db: DBSession) -> List[InstructorListItem]:
    return await instructor_directory.list_instructors(db)


@router.get(
    "/{instructor_id}",
    response_model=InstructorDetail,
    responses={
        401: {"description": "Missing or invalid instructor token", "model": ErrorResponse},
        404: {"description": "Instructor not found", "model": ErrorResponse},
    },
    summary="Instructor detail with courses and schedules",
)
async def get_instructor(
    instructor_id: int,
    db: DBSession,
    _principal: CurrentInstructor,
) -> InstructorDetail:
    """Any authenticated instructor may read any instructor's detail."""
    return await instructor_directory.get_instructor(db, instructor_id)
