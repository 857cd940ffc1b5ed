"""
TutorHub Backend — Shared Schemas
==================================

What:  Base class for response projections plus the error and health bodies.

Naming:
    Python attributes are snake_case; the JSON wire names keep the
    camelCase / PascalCase keys existing clients already read
    (`fullName`, `CategoryId`, `Courses`). `populate_by_name` lets the same
    model be filled from ORM attributes and re-validated from its own dump.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Projection(BaseModel):
    """Base for every response model built from ORM rows."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """
    Body of every error response.

    No request id here: it travels in the X-Request-ID header, so two
    identical failures produce byte-identical bodies.
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable explanation")


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    database: str = Field(description="connected | disconnected")
    geocoder: str = Field(description="configured | unconfigured")
    uptime_seconds: float
