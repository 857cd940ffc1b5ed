"""
TutorHub Backend — Registration & Login Routes
===============================================

What:  POST /{role}/register and POST /{role}/login for students and
       instructors, built from one factory.
How:   `build_principal_router(service)` binds the routes to a
       PrincipalService; `student_router` and `instructor_router` are
       mounted by `create_app()`.

Request formats:
    register: multipart/form-data or application/x-www-form-urlencoded with
              an optional `image` file part (PNG/JPEG profile picture)
    login:    JSON `{"email": ..., "password": ...}`
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile, status

from tutorhub.dependencies import (
    DBSession,
    get_geocoder,
    get_image_storage,
    get_password_hasher,
    get_token_service,
)
from tutorhub.schemas.auth import LoginRequest, LoginResponse
from tutorhub.schemas.common import ErrorResponse, MessageResponse
from tutorhub.services.geocoding import Geocoder
from tutorhub.services.image_storage import ImageStorage
from tutorhub.services.principal_service import (
    ImageUpload,
    PrincipalService,
    RegistrationForm,
    instructor_service,
    student_service,
)
from tutorhub.services.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


def build_principal_router(service: PrincipalService) -> APIRouter:
    role = service.kind.role
    router = APIRouter(prefix=f"/{role}", tags=[role.capitalize()])

    @router.post(
        "/register",
        status_code=status.HTTP_201_CREATED,
        response_model=MessageResponse,
        responses={
            400: {"description": "Missing or invalid field, duplicate email, unknown location", "model": ErrorResponse},
            503: {"description": "Geocoding provider unavailable", "model": ErrorResponse},
        },
        summary=f"Register a new {role}",
    )
    async def register(
        db: DBSession,
        email: Optional[str] = Form(default=None),
        password: Optional[str] = Form(default=None),
        full_name: Optional[str] = Form(default=None, alias="fullName"),
        birth_date: Optional[str] = Form(default=None, alias="birthDate"),
        location: Optional[str] = Form(default=None),
        bio: Optional[str] = Form(default=None),
        phone_number: Optional[str] = Form(default=None, alias="phoneNumber"),
        profile_picture: Optional[str] = Form(default=None, alias="profilePicture"),
        image: Optional[UploadFile] = File(default=None),
        geocoder: Geocoder = Depends(get_geocoder),
        storage: ImageStorage = Depends(get_image_storage),
        hasher: PasswordHasher = Depends(get_password_hasher),
    ) -> MessageResponse:
        upload = None
        # Browsers send an empty part with no filename when no file is chosen
        if image is not None and image.filename:
            upload = ImageUpload(filename=image.filename, content=await image.read())

        form = RegistrationForm(
            email=email,
            password=password,
            full_name=full_name,
            birth_date=birth_date,
            location=location,
            bio=bio,
            phone_number=phone_number,
            profile_picture=profile_picture,
        )
        return await service.register(
            db, form, geocoder=geocoder, storage=storage, hasher=hasher, image=upload
        )

    @router.post(
        "/login",
        response_model=LoginResponse,
        responses={
            400: {"description": "Email or password missing", "model": ErrorResponse},
            401: {"description": "Invalid email or password", "model": ErrorResponse},
        },
        summary=f"Log in as {role}",
    )
    async def login(
        db: DBSession,
        payload: Optional[LoginRequest] = Body(default=None),
        hasher: PasswordHasher = Depends(get_password_hasher),
        tokens: TokenService = Depends(get_token_service),
    ) -> LoginResponse:
        payload = payload or LoginRequest()
        return await service.login(
            db, payload.email, payload.password, hasher=hasher, tokens=tokens
        )

    return router


student_router = build_principal_router(student_service)
instructor_router = build_principal_router(instructor_service)
