"""
TutorHub Backend — Credential Store
====================================

What:  Lookup and creation of Student / Instructor records.
How:   One class parameterized by the principal model; `student_store` and
       `instructor_store` are the two instances the app uses.

Uniqueness:
    Email uniqueness is enforced by the table's unique constraint. `create`
    flushes inside the request transaction and converts the resulting
    IntegrityError, so two concurrent registrations with the same email
    cannot both succeed.
"""

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.exceptions import DuplicateEmailError, FieldConstraintError
from tutorhub.models import Instructor, Student
from tutorhub.models.principal import PrincipalMixin

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PrincipalMixin)


class CredentialStore(Generic[P]):
    def __init__(self, model: Type[P]):
        self.model = model

    async def find_by_email(self, db: AsyncSession, email: str) -> Optional[P]:
        result = await db.execute(select(self.model).where(self.model.email == email))
        return result.scalar_one_or_none()

    async def find_by_id(self, db: AsyncSession, principal_id: int) -> Optional[P]:
        return await db.get(self.model, principal_id)

    async def create(self, db: AsyncSession, **fields: Any) -> P:
        """
        Insert a principal and flush so the id is assigned.

        Raises:
            DuplicateEmailError: the email is already registered
            FieldConstraintError: any other constraint violation
        """
        principal = self.model(**fields)
        db.add(principal)
        # The failed flush poisons the session; get_db_session rolls it back
        try:
            await db.flush()
        except IntegrityError as e:
            detail = str(e.orig).lower() if e.orig is not None else str(e).lower()
            logger.warning(
                "%s insert rejected by constraint: %s",
                self.model.__name__,
                type(e.orig).__name__ if e.orig is not None else "IntegrityError",
            )
            if "email" in detail and "unique" in detail:
                raise DuplicateEmailError()
            raise FieldConstraintError(
                message="Submitted data violates a storage constraint",
                context={"detail": detail},
            )

        logger.info("%s created: id=%s", self.model.__name__, principal.id)
        return principal


student_store: CredentialStore[Student] = CredentialStore(Student)
instructor_store: CredentialStore[Instructor] = CredentialStore(Instructor)
