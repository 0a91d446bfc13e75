import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from message_apps.database import create_tables, get_db
from message_apps.main import app
from message_apps.repositories import UserRepository, FriendRequestRepository, MessageRepository
from message_apps.services import AuthService, FriendRequestService, MessagingService


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def user_repo(db):
    return UserRepository(db)


@pytest.fixture
def auth_service(user_repo):
    return AuthService(user_repo)


@pytest.fixture
def friend_service(db, user_repo):
    return FriendRequestService(FriendRequestRepository(db), user_repo)


@pytest.fixture
def messaging_service(db, user_repo):
    return MessagingService(MessageRepository(db), user_repo)


@pytest.fixture
async def alice(auth_service):
    return await auth_service.register("alice", "alice@example.com", "password123")


@pytest.fixture
async def bob(auth_service):
    return await auth_service.register("bob", "bob@example.com", "password123")


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
