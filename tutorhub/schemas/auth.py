"""
TutorHub Backend — Authentication Schemas
==========================================

What:  Login request/response bodies.

Login request fields are optional on purpose: a missing email or password
is reported as `400 <Field> is required` by the service, in a fixed order,
instead of FastAPI's generic 422.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    """
    Successful login.

    `location` carries the stored geometry point, not the free-text address;
    clients rely on this shape.
    """

    access_token: str
    location: Dict[str, Any] = Field(description="GeoJSON point of the principal")
    role: str
    email: str
