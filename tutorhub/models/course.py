"""
TutorHub Backend — Category & Course Models
============================================

What:  Course catalogue tables.
       Category is reference data (read-only for the API); a Course belongs
       to exactly one Category and exactly one Instructor.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tutorhub.database import Base

if TYPE_CHECKING:
    from tutorhub.models.principal import Instructor


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    courses: Mapped[List["Course"]] = relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    detail: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    img_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    level: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Owner is always the authenticated instructor, never client-chosen
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id"), nullable=False, index=True
    )
    instructor_id: Mapped[int] = mapped_column(
        ForeignKey("instructors.id"), nullable=False, index=True
    )

    category: Mapped["Category"] = relationship(back_populates="courses")
    instructor: Mapped["Instructor"] = relationship(back_populates="courses")

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, name='{self.name}', instructor_id={self.instructor_id})>"
