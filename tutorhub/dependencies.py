"""
TutorHub Backend — FastAPI Dependencies
========================================

What:  Injection points for route handlers: the shared collaborators built by
       `create_app()` and the per-role authentication guards.
How:   Collaborators live on `app.state` and are read back per request, so
       tests can build an app with fake geocoders or temp-dir storage.

Guard contract:
    The token travels in a bare `access_token` header (no "Bearer" prefix).
    `require_student` / `require_instructor` hand the handler an explicit
    `AuthenticatedPrincipal`; every rejection is the same InvalidTokenError.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.database import get_db_session
from tutorhub.exceptions import InvalidTokenError
from tutorhub.services.credential_store import (
    CredentialStore,
    instructor_store,
    student_store,
)
from tutorhub.services.geocoding import Geocoder
from tutorhub.services.image_storage import ImageStorage
from tutorhub.services.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

access_token_header = APIKeyHeader(name="access_token", auto_error=False)

DBSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_geocoder(request: Request) -> Geocoder:
    return request.app.state.geocoder


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    id: int
    role: str


class PrincipalGuard:
    """
    Dependency that admits only principals of one role.

    A token passes when it verifies, its `role` claim equals this guard's
    role, and its id still resolves in that role's table.
    """

    def __init__(self, role: str, store: CredentialStore):
        self.role = role
        self.store = store

    async def __call__(
        self,
        db: DBSession,
        token: Optional[str] = Depends(access_token_header),
        tokens: TokenService = Depends(get_token_service),
    ) -> AuthenticatedPrincipal:
        claims = tokens.verify(token)

        if claims.role != self.role:
            logger.warning("Token for role %s rejected by %s guard", claims.role, self.role)
            raise InvalidTokenError(context={"reason": "role"})

        principal = await self.store.find_by_id(db, claims.id)
        if principal is None:
            logger.warning("Token references missing %s id=%s", self.role, claims.id)
            raise InvalidTokenError(context={"reason": "unknown_principal"})

        return AuthenticatedPrincipal(id=principal.id, role=self.role)


require_student = PrincipalGuard("student", student_store)
require_instructor = PrincipalGuard("instructor", instructor_store)

CurrentInstructor = Annotated[AuthenticatedPrincipal, Depends(require_instructor)]
CurrentStudent = Annotated[AuthenticatedPrincipal, Depends(require_student)]
