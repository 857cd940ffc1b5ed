"""
TutorHub Backend — Course Schemas
==================================

What:  Request body for course creation and the course projections.

Projections:
    CourseSummary  — nested under instructors: no id, no owner
    CourseListing  — course endpoints: adds id, owner, Instructor and Category
    CourseRecord   — body returned by POST /course
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tutorhub.schemas.common import Projection


class CourseCreate(BaseModel):
    """
    Body of POST /course.

    Unknown keys (including `InstructorId`) are ignored; the owner always
    comes from the authenticated instructor.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    detail: Optional[str] = None
    price: Optional[int] = None
    img_url: Optional[str] = Field(default=None, alias="imgUrl")
    type: Optional[str] = None
    category_id: Optional[int] = Field(default=None, alias="CategoryId")
    level: Optional[str] = None


class CategoryName(Projection):
    name: str


class InstructorBrief(Projection):
    full_name: str = Field(alias="fullName")
    profile_picture: Optional[str] = Field(default=None, alias="profilePicture")
    location: str


class CourseSummary(Projection):
    name: str
    detail: Optional[str] = None
    price: int
    img_url: Optional[str] = Field(default=None, alias="imgUrl")
    type: Optional[str] = None
    category_id: int = Field(alias="CategoryId")
    level: Optional[str] = None


class CourseWithCategory(CourseSummary):
    category: Optional[CategoryName] = Field(default=None, alias="Category")


class CourseRecord(Projection):
    id: int
    name: str
    detail: Optional[str] = None
    price: int
    img_url: Optional[str] = Field(default=None, alias="imgUrl")
    type: Optional[str] = None
    category_id: int = Field(alias="CategoryId")
    instructor_id: int = Field(alias="InstructorId")
    level: Optional[str] = None


class CourseListing(CourseRecord):
    instructor: Optional[InstructorBrief] = Field(default=None, alias="Instructor")
    category: Optional[CategoryName] = Field(default=None, alias="Category")
