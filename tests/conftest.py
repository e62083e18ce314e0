"""Test fixtures: async test client, test database, language service, factories."""
import os
import tempfile
from typing import AsyncGenerator

_TMP_DIR = tempfile.mkdtemp(prefix="zeina-tests-")
os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault("LANGUAGE_STORE_PATH", os.path.join(_TMP_DIR, "language.json"))
os.environ.setdefault("MEDIA_ROOT", os.path.join(_TMP_DIR, "media"))

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app import models  # noqa: F401
from app.database import Base
from app.api.deps import get_db
from app.main import app
from app.services import language_service as language_module
from app.core.rate_limit import limiter
from app.services.language_service import InMemoryLanguageStore, LanguageService


TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"
ADMIN_HEADERS = {"X-API-Key": "test-api-key"}

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
test_session_factory = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(autouse=True)
def language_service(monkeypatch) -> LanguageService:
    """Fresh in-memory language service per test, starting in English."""
    service = LanguageService(InMemoryLanguageStore())
    monkeypatch.setattr(language_module, "_service", service)
    return service


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    limiter.reset()
    yield
    limiter.reset()


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables and yield a test database session."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_session_factory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Yield an HTTP test client with the test DB injected."""

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_property_payload(**overrides) -> dict:
    """Create a valid apartment creation payload."""
    defaults = {
        "title": "Modern 3-Bedroom Apartment in Hamra, Beirut",
        "description": (
            "Beautiful modern apartment with stunning city views, premium finishes, "
            "and access to building amenities."
        ),
        "location": "Hamra, Beirut",
        "features": ["Balcony", "Generator", "Elevator"],
        "property_type": "apartment",
        "status": "for_sale",
        "governorate": "Beirut",
        "area": 150,
        "bedrooms": 3,
        "bathrooms": 2,
        "floor": 4,
        "parking": 1,
        "price": 250000,
        "currency": "USD",
        "contact_phone": "+961 76 340 101",
        "contact_email": "agent@example.com",
    }
    defaults.update(overrides)
    return defaults


def make_bilingual_payload(**overrides) -> dict:
    """Apartment payload carrying both English and Arabic content."""
    defaults = make_property_payload(
        title_en="Sea View Villa in Jounieh",
        title_ar="فيلا بإطلالة بحرية في جونيه",
        description_en="Spacious villa with a private garden, pool and panoramic views of the bay.",
        description_ar="فيلا واسعة مع حديقة خاصة ومسبح وإطلالة بانورامية على الخليج.",
        location_en="Jounieh, Mount Lebanon",
        location_ar="جونيه، جبل لبنان",
        features_en=["Pool", "Garden"],
        features_ar=["مسبح", "حديقة"],
        property_type="villa",
        governorate="Mount Lebanon",
    )
    defaults.update(overrides)
    return defaults
