"""
TutorHub Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` wires middleware, the error translator, routers and
       the shared collaborators (hasher, token service, geocoder, image
       storage) onto `app.state`.
Who:   uvicorn (`uvicorn tutorhub.main:app`) and the test suite, which
       passes fake collaborators.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  Request ID → Access Log → GZip → CORS      │
    │                                                          │
    │  Routes:                                                 │
    │   /student/{register,login}   /instructor/{register,login}│
    │   /instructor  /instructor/{id}                          │
    │   /course  /course/{id}  /course/category/{id}           │
    │   /uploads/{path}  /health                               │
    │                                                          │
    │  Errors:  TutorHubError → {error, message} @ status      │
    │           bad request types → 400 field constraint       │
    │           anything else → 500 "Internal Server Error"    │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, credential validation (fatal), storage directory
    Shutdown: geocoder HTTP client, database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from tutorhub import __version__
from tutorhub.config import Settings, settings as default_settings
from tutorhub.database import dispose_engine
from tutorhub.exceptions import FieldConstraintError, TutorHubError
from tutorhub.middleware.logging import RequestLoggingMiddleware
from tutorhub.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from tutorhub.routes import courses, health, instructors, principals, uploads
from tutorhub.services.geocoding import Geocoder, MapboxGeocoder
from tutorhub.services.image_storage import ImageStorage
from tutorhub.services.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] tutorhub.access: GET /course 200 3.1ms [a1b2c3d4] from 10.0.0.1
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    # httpx logs full request URLs at INFO, which include the Mapbox token
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate credentials; a missing JWT_SECRET or MAPBOX_TOKEN aborts startup
        3. Ensure the storage directory exists

    Shutdown:
        1. Close the geocoder's HTTP client
        2. Dispose the database engine
    """
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    logger.info("TutorHub Backend %s starting up...", __version__)

    try:
        config.validate_required()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        raise

    storage = Path(config.storage_root)
    storage.mkdir(parents=True, exist_ok=True)
    logger.info("Storage directory: %s", storage.resolve())
    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)

    yield

    logger.info("TutorHub Backend shutting down...")
    await app.state.geocoder.aclose()
    await dispose_engine()
    logger.info("Shutdown complete.")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": ..., "message": ...}` responses.

    TutorHubError subclasses carry their own status and error code, so one
    handler covers them all. `context` is logged and never returned.
    """

    @app.exception_handler(TutorHubError)
    async def handle_tutorhub_error(request: Request, exc: TutorHubError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s",
                rid, type(exc).__name__, exc.message, exc.context,
            )
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error_code, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Wrongly typed path or body values become a 400 naming the first bad field."""
        errors = exc.errors()
        location = errors[0].get("loc", ()) if errors else ()
        field = str(location[-1]) if location else "request"
        error = FieldConstraintError(
            message=f"{field} has an invalid value",
            field=field,
            context={"errors": errors},
        )
        return await handle_tutorhub_error(request, error)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the log only; the client sees a fixed message."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "server_error", "message": "Internal Server Error"},
        )


def create_app(
    config: Optional[Settings] = None,
    geocoder: Optional[Geocoder] = None,
    image_storage: Optional[ImageStorage] = None,
) -> FastAPI:
    """
    Assemble the application.

    Args:
        config: settings to build from (defaults to the process-wide `settings`)
        geocoder: replaces the Mapbox client, e.g. with a fake in tests
        image_storage: replaces the storage built from `config.storage_root`
    """
    config = config or default_settings

    app = FastAPI(
        title="TutorHub API",
        description=(
            "Tutoring marketplace backend: student and instructor accounts, "
            "an instructor directory and a course catalogue."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Shared collaborators ──────────────────────────────────────────────
    app.state.settings = config
    app.state.password_hasher = PasswordHasher(rounds=config.password_hash_rounds)
    app.state.token_service = TokenService(config.jwt_secret, config.jwt_algorithm)
    app.state.geocoder = geocoder or MapboxGeocoder(
        access_token=config.mapbox_token,
        base_url=config.mapbox_base_url,
        timeout=config.geocoder_timeout,
    )
    app.state.image_storage = image_storage or ImageStorage(
        storage_root=config.storage_root,
        public_base_url=config.public_base_url,
        max_file_size=config.max_file_size,
    )

    # ── Middleware (last added runs first) ────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Routes ────────────────────────────────────────────────────────────
    app.include_router(principals.student_router)
    app.include_router(principals.instructor_router)
    app.include_router(instructors.router)
    app.include_router(courses.router)
    app.include_router(uploads.router)
    app.include_router(health.router)

    return app


app = create_app()
