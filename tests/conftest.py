"""
Test fixtures and configuration.

Tests run against in-memory SQLite (aiosqlite); production uses
PostgreSQL through the same repositories.
"""

from typing import AsyncGenerator, Generator

import httpx
import pytest
import pytest_asyncio
from eth_account import Account
from eth_account.signers.local import LocalAccount
from sqlalchemy.ext.asyncio import AsyncSession

from splyt.config.settings import Settings, override_settings, reset_settings
from splyt.di.container import get_container, set_container
from splyt.di.dependencies import get_db_session
from splyt.infrastructure.persistence.database import Database
from splyt.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-secret-key-not-for-production"

# Fixed keys keep wallet addresses stable between runs
ALICE_KEY = "0x" + "a1" * 32
BOB_KEY = "0x" + "b2" * 32
CAROL_KEY = "0x" + "c3" * 32


@pytest.fixture(autouse=True)
def settings() -> Generator[Settings, None, None]:
    """Test settings installed as the global settings."""
    test_settings = Settings(
        DATABASE_URL=TEST_DATABASE_URL,
        JWT_SECRET_KEY=TEST_JWT_SECRET,
        ENV="test",
        LOG_LEVEL="WARNING",
        BLOCKCHAIN_ENABLED=False,
    )
    override_settings(test_settings)

    yield test_settings

    reset_settings()
    set_container(None)


@pytest_asyncio.fixture(scope="function")
async def test_db(settings: Settings) -> AsyncGenerator[Database, None]:
    """
    Fresh in-memory database with all tables.

    Each test gets a clean database.
    """
    db = Database(database_url=settings.DATABASE_URL, echo=False)
    await db.connect()
    await db.create_tables()

    yield db

    await db.disconnect()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session committed when the test finishes."""
    async with test_db.session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(
    settings: Settings, test_db: Database
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client bound to an app that uses the test database."""
    app = create_app(settings)

    # Health endpoints read the container's database directly
    get_container()._database = test_db

    async def override_get_db_session():
        """Provide test database session."""
        async with test_db.session() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://test"
    ) as http_client:
        yield http_client


@pytest.fixture
def alice() -> LocalAccount:
    return Account.from_key(ALICE_KEY)


@pytest.fixture
def bob() -> LocalAccount:
    return Account.from_key(BOB_KEY)


@pytest.fixture
def carol() -> LocalAccount:
    return Account.from_key(CAROL_KEY)
