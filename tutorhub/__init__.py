"""
TutorHub Backend — Application Package Initializer
===================================================

What: Marks the `tutorhub` directory as a Python package.
Who:  Imported by uvicorn (`tutorhub.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows the same layered split on every endpoint:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, guards
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← registration, login, queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic projections
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    External collaborators (geocoder, image storage, token signer, password
    hasher) are built once by `create_app()` and reached through FastAPI
    dependencies, never imported as module globals by the services.
"""

__version__ = "1.0.0"
