"""
TutorHub Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before anything from `tutorhub` is
       imported, so the settings singleton and the module-level engine pick
       up test values. Route tests run against an in-memory SQLite database
       shared through a StaticPool.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session:  AsyncMock session for service unit tests
    ├── temp_storage:     temporary directory for uploaded images
    ├── image_storage:    ImageStorage rooted in temp_storage
    ├── fake_geocoder:    in-memory Geocoder with canned answers
    ├── db_engine / db_session_factory: in-memory SQLite with all tables
    ├── app:              create_app() wired to the fakes above
    └── test_client:      HTTPX AsyncClient over ASGITransport
"""

import os
import tempfile

# Override settings for testing BEFORE any tutorhub imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["MAPBOX_TOKEN"] = "test-mapbox-token-not-real"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="tutorhub_test_")
os.environ["PASSWORD_HASH_ROUNDS"] = "4"  # bcrypt minimum; keeps the suite fast
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, List, Optional  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from tutorhub.config import settings  # noqa: E402
from tutorhub.database import Base, get_db_session  # noqa: E402
from tutorhub.main import create_app  # noqa: E402
from tutorhub.models import Category  # noqa: E402
from tutorhub.services.geocoding import Feature, Geocoder  # noqa: E402
from tutorhub.services.image_storage import ImageStorage  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Fakes
# ══════════════════════════════════════════════════════════════════════════

def point(lng: float, lat: float) -> Dict[str, Any]:
    return {"type": "Point", "coordinates": [lng, lat]}


class FakeGeocoder(Geocoder):
    """
    Geocoder answering from a dict; unknown queries match nothing.

    Set `failure` to make every call raise it, e.g. GeocodingServiceError().
    """

    def __init__(self, places: Optional[Dict[str, Dict[str, Any]]] = None):
        self.places = places if places is not None else {
            "Jakarta": point(106.8456, -6.2088),
            "Bandung": point(107.6191, -6.9175),
        }
        self.calls: List[tuple] = []
        self.failure: Optional[Exception] = None
        self.closed = False

    async def forward_geocode(self, query: str, limit: int = 1) -> List[Feature]:
        self.calls.append((query, limit))
        if self.failure is not None:
            raise self.failure
        if query not in self.places:
            return []
        return [{"place_name": query, "geometry": self.places[query]}][:limit]

    async def aclose(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    AsyncMock standing in for AsyncSession in service unit tests.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.get = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def image_storage(temp_storage):
    return ImageStorage(storage_root=temp_storage, public_base_url="http://test")


@pytest.fixture
def fake_geocoder():
    return FakeGeocoder()


@pytest.fixture
def sample_png_bytes():
    """A 1x1 transparent PNG."""
    return (
        b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
        b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
        b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
    )


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite shared by every connection of one test through StaticPool."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def categories(db_session_factory) -> Dict[str, int]:
    """Seeds two categories; returns name → id."""
    async with db_session_factory() as session:
        rows = [Category(name="Mathematics"), Category(name="Music")]
        session.add_all(rows)
        await session.commit()
        return {row.name: row.id for row in rows}


@pytest.fixture
def app(db_session_factory, fake_geocoder, image_storage):
    application = create_app(
        config=settings,
        geocoder=fake_geocoder,
        image_storage=image_storage,
    )

    async def override_get_db_session():
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Request Helpers
# ══════════════════════════════════════════════════════════════════════════

def registration_form(**overrides: Any) -> Dict[str, str]:
    form = {
        "email": "alice@mail.com",
        "password": "pw123456",
        "fullName": "Alice Anderson",
        "birthDate": "1990-01-01",
        "location": "Jakarta",
        "bio": "Patient and thorough.",
        "phoneNumber": "+62 811 000 000",
    }
    form.update(overrides)
    return {key: value for key, value in form.items() if value is not None}


async def register(client: AsyncClient, role: str, **overrides: Any):
    return await client.post(f"/{role}/register", data=registration_form(**overrides))


async def login(client: AsyncClient, role: str, email: str, password: str = "pw123456"):
    return await client.post(f"/{role}/login", json={"email": email, "password": password})


async def register_and_login(client: AsyncClient, role: str, **overrides: Any) -> str:
    """Registers a principal and returns its access token."""
    response = await register(client, role, **overrides)
    assert response.status_code == 201, response.text
    form = registration_form(**overrides)
    response = await login(client, role, form["email"], form["password"])
    assert response.status_code == 200, response.text
    return response.json()["access_token"]
