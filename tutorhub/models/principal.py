"""
TutorHub Backend — Principal SQLAlchemy Models
===============================================

What:  `Student` and `Instructor` account tables.
How:   Both share `PrincipalMixin`, so the column set (and the credential
       store built on top of it) is written once and parameterized by model.

Table Design:
    - email: unique index; the database constraint is the only guard against
      concurrent duplicate registrations
    - password: bcrypt hash, never projected into any response
    - location: free text exactly as submitted at registration
    - geometry: GeoJSON point `{"type": "Point", "coordinates": [lng, lat]}`
      computed once from `location` and not recomputed afterwards
"""

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tutorhub.database import Base

if TYPE_CHECKING:
    from tutorhub.models.course import Course
    from tutorhub.models.schedule import Schedule


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PrincipalMixin:
    """Columns common to every account type."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    profile_picture: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    geometry: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, email='{self.email}')>"


class Student(PrincipalMixin, Base):
    __tablename__ = "students"

    schedules: Mapped[List["Schedule"]] = relationship(back_populates="student")


class Instructor(PrincipalMixin, Base):
    __tablename__ = "instructors"

    courses: Mapped[List["Course"]] = relationship(
        back_populates="instructor", order_by="Course.id"
    )
    schedules: Mapped[List["Schedule"]] = relationship(
        back_populates="instructor", order_by="Schedule.id"
    )
