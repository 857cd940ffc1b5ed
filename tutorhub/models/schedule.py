"""
TutorHub Backend — Schedule Model
==================================

What:  A booked time slot linking one student to one instructor.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tutorhub.database import Base

if TYPE_CHECKING:
    from tutorhub.models.principal import Instructor, Student


class Schedule(Base):
    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    instructor_id: Mapped[int] = mapped_column(
        ForeignKey("instructors.id"), nullable=False, index=True
    )
    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id"), nullable=False, index=True
    )

    instructor: Mapped["Instructor"] = relationship(back_populates="schedules")
    student: Mapped["Student"] = relationship(back_populates="schedules")

    def __repr__(self) -> str:
        return (
            f"<Schedule(id={self.id}, instructor_id={self.instructor_id}, "
            f"student_id={self.student_id})>"
        )
