"""
TutorHub Backend — Instructor Schemas
======================================

What:  Public instructor projections.
       The password hash and timestamps are never part of any of them.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from tutorhub.schemas.common import Projection
from tutorhub.schemas.course import CourseSummary, CourseWithCategory


class StudentBrief(Projection):
    full_name: str = Field(alias="fullName")
    location: str


class ScheduleEntry(Projection):
    time: datetime
    student: Optional[StudentBrief] = Field(default=None, alias="Student")


class InstructorPublic(Projection):
    id: int
    role: str
    full_name: str = Field(alias="fullName")
    bio: Optional[str] = None
    profile_picture: Optional[str] = Field(default=None, alias="profilePicture")
    location: str
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    email: str
    geometry: Dict[str, Any]


class InstructorListItem(InstructorPublic):
    courses: List[CourseSummary] = Field(default_factory=list, alias="Courses")


class InstructorDetail(InstructorPublic):
    courses: List[CourseWithCategory] = Field(default_factory=list, alias="Courses")
    schedules: List[ScheduleEntry] = Field(default_factory=list, alias="Schedules")
