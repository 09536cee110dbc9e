"""Shared fixtures: in-memory database, overridden settings, async API client.

Every test gets a fresh in-memory SQLite database and its own upload
directory under tmp_path. get_db and get_settings are overridden on the app,
so nothing touches ./storage.
"""

import os
import tempfile

# Must be set before deskmap modules build the engine and cached settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DISABLE_AUTH"] = "false"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="deskmap-uploads-"))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import deskmap.models  # noqa: F401  (registers tables)
from deskmap.config import Settings, get_settings
from deskmap.database import Base, get_db
from deskmap.main import app
from deskmap.services.auth import AuthService, Identity, Role
from deskmap.services.store import EntityStore

from tests_support import PNG_BYTES


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return EntityStore(test_db)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        upload_dir=str(tmp_path / "uploads"),
        jwt_secret_key="test-secret-key",
        disable_auth=False,
    )


@pytest.fixture
async def client(test_session_factory, settings):
    """API client with the database and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


def _bearer(settings, role):
    identity = Identity(id=f"{role.value.lower()}-1", email=f"{role.value.lower()}@corp.test", role=role)
    token = AuthService.create_access_token(identity, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(settings):
    return _bearer(settings, Role.ADMIN)


@pytest.fixture
def user_headers(settings):
    return _bearer(settings, Role.USER)


@pytest.fixture
def make_map(client, admin_headers):
    """Create a map through the API; returns the JSON body."""
    async def _make(**overrides):
        data = {"name": "HQ", "state": "CA", "city": "SF", "building": "A", "floor": "1"}
        data.update(overrides)
        res = await client.post(
            "/api/maps",
            data=data,
            files={"image": ("floor.png", PNG_BYTES, "image/png")},
            headers=admin_headers,
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def make_employee(client, admin_headers):
    """Create an employee through the API; returns the JSON body."""
    async def _make(**overrides):
        data = {"name": "Jo", "phone": "555", "email": "jo@x.com"}
        data.update(overrides)
        res = await client.post("/api/employees", data=data, headers=admin_headers)
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def make_location(client, admin_headers):
    """Pin an employee on a map through the API; returns the JSON body."""
    async def _make(map_id, employee_id, x=0.5, y=0.5):
        res = await client.post(
            "/api/locations",
            json={"mapId": map_id, "employeeId": employee_id, "x": x, "y": y},
            headers=admin_headers,
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _make
