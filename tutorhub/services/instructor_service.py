"""
TutorHub Backend — Instructor Directory Service
================================================

What:  Read-only instructor queries behind GET /instructor and
       GET /instructor/{id}.
How:   Associations are eager-loaded with `selectinload` (one extra
       query per relationship, no N+1) and the rows are projected into
       response models that never include the password hash.

Query plan (detail):
    SELECT * FROM instructors WHERE id = :id
    SELECT * FROM courses     WHERE instructor_id IN (:id)
    SELECT * FROM categories  WHERE id IN (...)
    SELECT * FROM schedules   WHERE instructor_id IN (:id)
    SELECT * FROM students    WHERE id IN (...)
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tutorhub.exceptions import NotFoundError
from tutorhub.models import Course, Instructor, Schedule
from tutorhub.schemas.instructor import InstructorDetail, InstructorListItem

logger = logging.getLogger(__name__)


class InstructorService:
    async def list_instructors(self, db: AsyncSession) -> List[InstructorListItem]:
        result = await db.execute(
            select(Instructor)
            .options(selectinload(Instructor.courses))
            .order_by(Instructor.id)
        )
        instructors = result.scalars().all()
        logger.debug("Listing %d instructor(s)", len(instructors))
        return [InstructorListItem.model_validate(i) for i in instructors]

    async def get_instructor(self, db: AsyncSession, instructor_id: int) -> InstructorDetail:
        """
        One instructor with courses (each with its category name) and
        schedules (each with the booked student's name and location).

        Raises:
            NotFoundError: no instructor with this id (404 "Instructor not found")
        """
        result = await db.execute(
            select(Instructor)
            .where(Instructor.id == instructor_id)
            .options(
                selectinload(Instructor.courses).selectinload(Course.category),
                selectinload(Instructor.schedules).selectinload(Schedule.student),
            )
        )
        instructor = result.scalar_one_or_none()
        if instructor is None:
            raise NotFoundError(resource="Instructor", resource_id=instructor_id)

        return InstructorDetail.model_validate(instructor)


instructor_directory = InstructorService()
