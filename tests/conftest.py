"""Test configuration and shared fixtures."""

from typing import AsyncGenerator, Callable, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from guild_dashboard.app import Application
from guild_dashboard.core.config import EnablePolicy, Settings
from guild_dashboard.core.database import Base, Database, get_db
from guild_dashboard.models.guild_command import GuildCommand
from guild_dashboard.services.command_store import CommandStore
from guild_dashboard.services.discord_client import DiscordClient

# SQLite in-memory for fast tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_BOT_TOKEN = "test-bot-token"

DISCORD_USERS = {
    "80351110224678912": {"id": "80351110224678912", "username": "nelly", "global_name": "Nelly"},
}


def discord_handler(request: httpx.Request) -> httpx.Response:
    """Fake Discord API: known users resolve, unknown ones 404, id 429 is rate limited."""
    user_id = request.url.path.rsplit("/", 1)[-1]
    if request.headers.get("Authorization") != f"Bot {TEST_BOT_TOKEN}":
        return httpx.Response(401, json={"message": "401: Unauthorized", "code": 0})
    if user_id == "429":
        return httpx.Response(429, json={"message": "You are being rate limited.", "retry_after": 1.5})
    if user_id in DISCORD_USERS:
        return httpx.Response(200, json=DISCORD_USERS[user_id])
    return httpx.Response(404, json={"message": "Unknown User", "code": 10013})


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": TEST_DATABASE_URL,
        "discord_bot_token": TEST_BOT_TOKEN,
        "rate_limit_enabled": False,
        "log_format": "text",
        "log_level": "WARNING",
        "debug": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def engine():
    """Create a test database engine with a fresh schema."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture
async def database(engine) -> Database:
    return Database(engine)


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with database.session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def store(db_session) -> CommandStore:
    return CommandStore(db_session)


@pytest_asyncio.fixture
async def seed_command(db_session) -> Callable:
    """Insert a stored command record directly."""

    async def _seed(
        guild_id: str,
        command_name: str,
        is_enabled: bool = True,
        usage_count: int = 0,
        category: Optional[str] = None,
    ) -> GuildCommand:
        command = GuildCommand(
            guild_id=guild_id,
            command_name=command_name,
            is_enabled=is_enabled,
            usage_count=usage_count,
            category=category,
        )
        db_session.add(command)
        await db_session.commit()
        await db_session.refresh(command)
        return command

    return _seed


@pytest.fixture
def discord_client() -> DiscordClient:
    return DiscordClient(TEST_BOT_TOKEN, transport=httpx.MockTransport(discord_handler))


@pytest_asyncio.fixture
async def make_app(database, db_session, discord_client) -> AsyncGenerator[Callable, None]:
    """Build test applications sharing the per-test database session."""
    built = []

    async def override_get_db():
        yield db_session

    def _make(
        enable_policy: EnablePolicy = EnablePolicy.PRESERVE,
        discord: Optional[DiscordClient] = None,
    ):
        application = Application(
            settings=make_settings(command_sync_enable_policy=enable_policy),
            database=database,
            discord_client=discord or discord_client,
            create_tables=False,
        )
        application.app.dependency_overrides[get_db] = override_get_db
        built.append(application.app)
        return application.app

    yield _make

    for fastapi_app in built:
        fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def app(make_app):
    """Create a test FastAPI application."""
    return make_app()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
