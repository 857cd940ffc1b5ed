"""
TutorHub Backend — Course Catalogue Service
============================================

What:  Course listings (all, by id, by category) and course creation.
Who:   Called by the /course routes. Creation is reachable only through the
       instructor guard, which supplies the owner id.

Listing shape:
    Every listing carries the owning instructor's name, picture and location
    plus the category name, loaded with `selectinload`.
"""

import logging
from typing import List

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tutorhub.exceptions import (
    FieldConstraintError,
    NoContentInCategoryError,
    NotFoundError,
)
from tutorhub.models import Category, Course
from tutorhub.schemas.course import CourseCreate, CourseListing, CourseRecord

logger = logging.getLogger(__name__)


def _listing_query() -> Select:
    return (
        select(Course)
        .options(selectinload(Course.instructor), selectinload(Course.category))
        .order_by(Course.id)
    )


class CourseService:
    async def list_courses(self, db: AsyncSession) -> List[CourseListing]:
        result = await db.execute(_listing_query())
        return [CourseListing.model_validate(c) for c in result.scalars().all()]

    async def get_course(self, db: AsyncSession, course_id: int) -> CourseListing:
        result = await db.execute(_listing_query().where(Course.id == course_id))
        course = result.scalar_one_or_none()
        if course is None:
            raise NotFoundError(resource="Course", resource_id=course_id)
        return CourseListing.model_validate(course)

    async def list_by_category(self, db: AsyncSession, category_id: int) -> List[CourseListing]:
        """
        Courses of one category.

        Raises:
            NoContentInCategoryError: the category holds no course, including
                when the category itself does not exist
        """
        result = await db.execute(_listing_query().where(Course.category_id == category_id))
        courses = result.scalars().all()
        if not courses:
            raise NoContentInCategoryError(category_id)
        return [CourseListing.model_validate(c) for c in courses]

    async def create_course(
        self,
        db: AsyncSession,
        payload: CourseCreate,
        instructor_id: int,
    ) -> CourseRecord:
        """
        Create a course owned by `instructor_id`.

        Raises:
            FieldConstraintError: name, price or CategoryId missing, or the
                category does not exist
        """
        if not payload.name:
            raise FieldConstraintError("Course name is required", field="name")
        if payload.price is None:
            raise FieldConstraintError("Course price is required", field="price")
        if payload.category_id is None:
            raise FieldConstraintError("Course category is required", field="CategoryId")

        if await db.get(Category, payload.category_id) is None:
            raise FieldConstraintError(
                "Category does not exist",
                field="CategoryId",
                context={"category_id": payload.category_id},
            )

        course = Course(
            name=payload.name,
            detail=payload.detail,
            price=payload.price,
            img_url=payload.img_url,
            type=payload.type,
            level=payload.level,
            category_id=payload.category_id,
            instructor_id=instructor_id,
        )
        db.add(course)
        await db.flush()
        logger.info("Course %s created by instructor %s", course.id, instructor_id)
        return CourseRecord.model_validate(course)


course_service = CourseService()
