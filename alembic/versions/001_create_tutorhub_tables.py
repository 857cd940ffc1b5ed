"""Create accounts, catalogue and schedule tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates categories, students, instructors, courses and schedules.
How:   Parents first (categories, students, instructors), then the tables
       holding foreign keys to them.

Rollback: downgrade() drops every table (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _principal_columns() -> list:
    """Columns shared by students and instructors."""
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column(
            "password",
            sa.String(255),
            nullable=False,
            comment="bcrypt hash, never returned by the API",
        ),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("profile_picture", sa.String(1024), nullable=True),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column(
            "geometry",
            sa.JSON(),
            nullable=False,
            comment="GeoJSON point computed from location at registration",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    for table in ("students", "instructors"):
        op.create_table(table, *_principal_columns())
        # Unique index: the only guard against concurrent duplicate registrations
        op.create_index(f"ix_{table}_email", table, ["email"], unique=True)

    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("detail", sa.Text(), nullable=True),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("img_url", sa.String(1024), nullable=True),
        sa.Column("type", sa.String(100), nullable=True),
        sa.Column("level", sa.String(100), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("instructor_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.ForeignKeyConstraint(["instructor_id"], ["instructors.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_courses_category_id", "courses", ["category_id"])
    op.create_index("ix_courses_instructor_id", "courses", ["instructor_id"])

    op.create_table(
        "schedules",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("time", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("instructor_id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["instructor_id"], ["instructors.id"]),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_schedules_instructor_id", "schedules", ["instructor_id"])
    op.create_index("ix_schedules_student_id", "schedules", ["student_id"])


def downgrade() -> None:
    op.drop_index("ix_schedules_student_id", table_name="schedules")
    op.drop_index("ix_schedules_instructor_id", table_name="schedules")
    op.drop_table("schedules")
    op.drop_index("ix_courses_instructor_id", table_name="courses")
    op.drop_index("ix_courses_category_id", table_name="courses")
    op.drop_table("courses")
    for table in ("instructors", "students"):
        op.drop_index(f"ix_{table}_email", table_name=table)
        op.drop_table(table)
    op.drop_table("categories")
