# Importing every model registers it on Base.metadata (Alembic, create_all)
from tutorhub.models.course import Category, Course
from tutorhub.models.principal import Instructor, PrincipalMixin, Student
from tutorhub.models.schedule import Schedule

__all__ = [
    "Category",
    "Course",
    "Instructor",
    "PrincipalMixin",
    "Schedule",
    "Student",
]
