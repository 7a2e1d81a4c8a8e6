import os

# Settings are read at import time
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import enable_sqlite_foreign_keys, get_db
from app.db.models import Base
from app.db.repositories.document_repository import DocumentRepository
from app.db.seed import seed_sections
from app.domains.identity.schemas import UserCreate
from app.domains.identity.services import IdentityService
from app.main import app

from tests.helpers import PASSWORD, register


@pytest.fixture
async def engine():
    """Fresh in-memory database with every table and the seeded sections"""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(test_engine)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_sections(session)
        await session.commit()

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
async def user1(session):
    """Registered user "user1" and their master document"""
    user = await IdentityService(session).register_user(
        UserCreate(username="user1", password=PASSWORD)
    )
    master = await DocumentRepository(session).get_master(user.username)
    return user, master


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as db_session:
            yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
async def auth1(client):
    return await register(client, "user1")


@pytest.fixture
async def auth2(client):
    return await register(client, "user2")
