"""
TutorHub Backend — Course Routes
=================================

What:  Public course listings and course creation by instructors.

Route Inventory:
    GET  /course                      all courses
    GET  /course/{id}                 one course, 404 when absent
    GET  /course/category/{id}        courses of a category, 404 when none
    POST /course                      create (instructor token required)
"""

import logging
from typing import List

from fastapi import APIRouter, status

from tutorhub.dependencies import CurrentInstructor, DBSession
from tutorhub.schemas.common import ErrorResponse
from tutorhub.schemas.course import CourseCreate, CourseListing, CourseRecord
from tutorhub.services.course_service import course_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/course", tags=["Course"])


@router.get("", response_model=List[CourseListing], summary="List all courses")
async def list_courses(db: DBSession) -> List[CourseListing]:
    return await course_service.list_courses(db)


@router.get(
    "/category/{category_id}",
    response_model=List[CourseListing],
    responses={404: {"description": "No Course in this Category", "model": ErrorResponse}},
    summary="List courses of one category",
)
async def list_courses_by_category(category_id: int, db: DBSession) -> List[CourseListing]:
    return await course_service.list_by_category(db, category_id)


@router.get(
    "/{course_id}",
    response_model=CourseListing,
    responses={404: {"description": "Course not found", "model": ErrorResponse}},
    summary="Get one course",
)
async def get_course(course_id: int, db: DBSession) -> CourseListing:
    return await course_service.get_course(db, course_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CourseRecord,
    responses={
        400: {"description": "Missing field or unknown category", "model": ErrorResponse},
        401: {"description": "Missing or invalid instructor token", "model": ErrorResponse},
    },
    summary="Create a course owned by the calling instructor",
)
async def create_course(
    payload: CourseCreate,
    db: DBSession,
    principal: CurrentInstructor,
) -> CourseRecord:
    return await course_service.create_course(db, payload, instructor_id=principal.id)
