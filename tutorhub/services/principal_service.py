"""
TutorHub Backend — Principal Service (Registration & Login)
============================================================

What:  Registration and login for both account types, written once.
How:   A `PrincipalKind` names the role, its credential store and its
       messages; `PrincipalService(kind)` runs the flows for that role.

Registration Flow:
    ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌──────────┐
    │ Presence │──▶│  Format  │──▶│  Image   │──▶│ Geocode  │──▶│ Hash +   │
    │  checks  │   │  checks  │   │ (opt.)   │   │ limit=1  │   │ insert   │
    └──────────┘   └──────────┘   └──────────┘   └──────────┘   └──────────┘

    Presence order: email → password → fullName → birthDate → location.
    The first missing field wins. If anything after the image upload fails,
    the stored image is removed again; the row is only inserted last, so a
    failed registration leaves nothing behind.

Login Flow:
    Unknown email and wrong password raise the same InvalidCredentialsError
    after one bcrypt check each, so neither the body nor the timing tells
    them apart.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from tutorhub.exceptions import (
    FieldConstraintError,
    InvalidCredentialsError,
    MissingFieldError,
)
from tutorhub.schemas.auth import LoginResponse
from tutorhub.schemas.common import MessageResponse
from tutorhub.services.credential_store import (
    CredentialStore,
    instructor_store,
    student_store,
)
from tutorhub.services.geocoding import Geocoder, first_geometry
from tutorhub.services.image_storage import ImageStorage, StoredImage
from tutorhub.services.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class PrincipalKind:
    role: str
    store: CredentialStore
    registered_message: str


STUDENT = PrincipalKind(
    role="student",
    store=student_store,
    registered_message="Success create a new student",
)
INSTRUCTOR = PrincipalKind(
    role="instructor",
    store=instructor_store,
    registered_message="Success create a new instructor!",
)


@dataclass
class RegistrationForm:
    """Raw registration input. Every field may be missing; validation happens in the service."""

    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    birth_date: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None


@dataclass
class ImageUpload:
    filename: str
    content: bytes


class PrincipalService:
    def __init__(self, kind: PrincipalKind):
        self.kind = kind

    @staticmethod
    def check_required(form: RegistrationForm) -> None:
        """Raises MissingFieldError for the first absent field, in the fixed order."""
        required = (
            ("email", form.email),
            ("password", form.password),
            ("fullName", form.full_name),
            ("birthDate", form.birth_date),
            ("location", form.location),
        )
        for field, value in required:
            if not value:
                raise MissingFieldError(field)

    @staticmethod
    def normalize_email(email: str) -> str:
        """Validated and lower-cased; login looks emails up lower-cased too."""
        try:
            return str(_email_adapter.validate_python(email.strip())).lower()
        except PydanticValidationError:
            raise FieldConstraintError("Invalid email format", field="email")

    @staticmethod
    def parse_birth_date(value: str) -> date:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise FieldConstraintError(
                "Birth Date must be a valid date (YYYY-MM-DD)", field="birthDate"
            )

    async def register(
        self,
        db: AsyncSession,
        form: RegistrationForm,
        geocoder: Geocoder,
        storage: ImageStorage,
        hasher: PasswordHasher,
        image: Optional[ImageUpload] = None,
    ) -> MessageResponse:
        """
        Create a principal of this service's role.

        Raises:
            MissingFieldError, FieldConstraintError, DuplicateEmailError (400)
            LocationNotFoundError (400): the location matched nothing
            GeocodingServiceError (503): provider unreachable
        """
        self.check_required(form)
        email = self.normalize_email(form.email)
        birth_date = self.parse_birth_date(form.birth_date)

        stored: Optional[StoredImage] = None
        if image is not None:
            stored = await storage.store(image.filename, image.content)

        try:
            features = await geocoder.forward_geocode(form.location, limit=1)
            geometry = first_geometry(features, form.location)

            password_hash = await run_in_threadpool(hasher.hash, form.password)

            principal = await self.kind.store.create(
                db,
                email=email,
                password=password_hash,
                full_name=form.full_name,
                bio=form.bio,
                role=self.kind.role,
                birth_date=birth_date,
                phone_number=form.phone_number,
                profile_picture=stored.url if stored else form.profile_picture,
                location=form.location,
                geometry=geometry,
            )
        except Exception:
            if stored is not None:
                await storage.remove(stored.path)
            raise

        logger.info("Registered %s id=%s", self.kind.role, principal.id)
        return MessageResponse(message=self.kind.registered_message)

    async def login(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str],
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> LoginResponse:
        if not email:
            raise MissingFieldError("email")
        if not password:
            raise MissingFieldError("password")

        principal = await self.kind.store.find_by_email(db, email.strip().lower())
        if principal is None:
            await run_in_threadpool(hasher.burn, password)
            raise InvalidCredentialsError()

        if not await run_in_threadpool(hasher.verify, password, principal.password):
            raise InvalidCredentialsError()

        logger.info("%s id=%s logged in", self.kind.role.capitalize(), principal.id)
        return LoginResponse(
            access_token=tokens.issue(principal.id, self.kind.role),
            location=principal.geometry,
            role=principal.role,
            email=principal.email,
        )


student_service = PrincipalService(STUDENT)
instructor_service = PrincipalService(INSTRUCTOR)
