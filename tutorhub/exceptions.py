"""
TutorHub Backend — Application Exception Hierarchy
===================================================

What:  The closed set of failure kinds the API can report.
How:   Every variant carries its HTTP status, a machine-readable error code
       and a client-safe message. A single translator in `main.py` turns any
       `TutorHubError` into `{"error": ..., "message": ...}` using those
       attributes; anything else becomes a generic 500.

Exception Hierarchy:
    TutorHubError (base)                     → 500
    ├── ValidationError                      → 400
    │   ├── MissingFieldError                → 400  "<Field> is required"
    │   ├── DuplicateEmailError              → 400
    │   ├── FieldConstraintError             → 400
    │   └── LocationNotFoundError            → 400
    ├── InvalidCredentialsError              → 401
    ├── InvalidTokenError                    → 401
    ├── NotFoundError                        → 404
    ├── NoContentInCategoryError             → 404
    ├── GeocodingServiceError                → 503
    └── FileStorageError                     → 500

Security Note:
    `context` is logged server-side and never serialized into the response.
"""

from typing import Any, Dict, Optional


class TutorHubError(Exception):
    """
    Base exception for all TutorHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


# ── 400 Bad Request ───────────────────────────────────────────────────────

class ValidationError(TutorHubError):
    """Client input the client can correct."""

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


# Field name → label used in the error message, in the order fields are checked
FIELD_LABELS: Dict[str, str] = {
    "email": "Email",
    "password": "Password",
    "fullName": "Full Name",
    "birthDate": "Birth Date",
    "location": "Location",
}


class MissingFieldError(ValidationError):
    """A required input field is absent or empty. The message is the field label."""

    error_code = "missing_field"

    def __init__(self, field: str):
        label = FIELD_LABELS.get(field, field)
        super().__init__(message=f"{label} is required", field=field)


class DuplicateEmailError(ValidationError):
    """The credential store already holds a principal with this email."""

    error_code = "duplicate_email"

    def __init__(self, message: str = "Email is already registered"):
        super().__init__(message=message, field="email")


class FieldConstraintError(ValidationError):
    """A stored field violates a format or integrity constraint."""

    error_code = "field_constraint_violation"


class LocationNotFoundError(ValidationError):
    """The geocoder found no match for the submitted free-text location."""

    error_code = "location_not_found"

    def __init__(self, location: Optional[str] = None):
        super().__init__(
            message="Location not found",
            field="location",
            context={"query": location} if location else None,
        )


# ── 401 Unauthorized ──────────────────────────────────────────────────────

class InvalidCredentialsError(TutorHubError):
    """
    Login failed. Raised identically for an unknown email and a wrong
    password so responses cannot be used to probe which emails exist.
    """

    status_code = 401
    error_code = "invalid_credentials"

    def __init__(self):
        super().__init__(message="Invalid email or password")


class InvalidTokenError(TutorHubError):
    """
    Guard rejection: missing header, malformed or unsigned token, wrong role,
    or a principal that no longer exists. All collapse to this one message.
    """

    status_code = 401
    error_code = "invalid_token"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid token", context=context)


# ── 404 Not Found ─────────────────────────────────────────────────────────

class NotFoundError(TutorHubError):
    """A single-resource lookup missed (instructor or course)."""

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
    ):
        ctx: Dict[str, Any] = {"resource": resource}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class NoContentInCategoryError(TutorHubError):
    """A category filter matched zero courses; reported as 404, not an empty list."""

    status_code = 404
    error_code = "no_content_in_category"

    def __init__(self, category_id: Optional[int] = None):
        super().__init__(
            message="No Course in this Category",
            context={"category_id": category_id},
        )


# ── 5xx ───────────────────────────────────────────────────────────────────

class GeocodingServiceError(TutorHubError):
    """The geocoding provider was unreachable or answered with an error status."""

    status_code = 503
    error_code = "geocoding_unavailable"

    def __init__(
        self,
        message: str = "Location service is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(TutorHubError):
    """Writing an uploaded image to the storage volume failed."""

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "Failed to save uploaded image. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
