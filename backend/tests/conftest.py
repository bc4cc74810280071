# Shared pytest configuration and fixtures for all test types
from datetime import datetime

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from api.main import app
from common.core.config import settings
from common.db.base import Base
from packages.auth.dependencies import get_current_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from tests.factories.calendar_factory import CalendarFactory
from tests.fixtures import BANKING, SAMPLE_PHYSICAL_DETAILS, SOFTWARE

# Importing the entity modules registers every table on Base.metadata
from packages.companies.models.database import CompanyEntity, OrganizationEntity  # noqa: F401
from packages.events.models.database import EventEntity  # noqa: F401
from packages.rsvp.models.database import UserEventResponseEntity  # noqa: F401
from packages.subscriptions.models.database import UserSubscriptionEntity  # noqa: F401
from packages.users.models.database.user import UserEntity  # noqa: F401


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """Per-test SQLite file database.

    A file (rather than :memory:) lets concurrently gathered operations each
    hold their own connection, the way they do against Postgres.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'calendar.db'}", echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """
    Patch session factories to use test database.

    This allows real transaction() and get_session() to run with proper
    commit/rollback/ContextVar semantics while using the test database.
    """
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)
    monkeypatch.setattr(
        "common.db.scoped.AsyncSessionLocalReadonly", test_session_factory
    )


@pytest_asyncio.fixture(scope="function")
async def sample_user(test_db: AsyncSession):
    return await CalendarFactory.create_user(test_db)


@pytest_asyncio.fixture(scope="function")
async def other_user(test_db: AsyncSession):
    return await CalendarFactory.create_user(
        test_db, email="trader@example.com", full_name="Tom Trader"
    )


@pytest_asyncio.fixture(scope="function")
async def test_user(sample_user):
    """Create a test authenticated user."""
    return AuthenticatedUser(user_id=sample_user.id)


@pytest_asyncio.fixture(scope="function")
async def client(test_user):
    """Create a test client."""

    def override_get_current_user():
        return test_user

    app.dependency_overrides[get_current_user] = override_get_current_user

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


SERVICE_API_KEY = "sa_test_key"


@pytest_asyncio.fixture(scope="function")
async def service_client(monkeypatch):
    """Client authenticated as the internal service account."""
    monkeypatch.setattr(settings, "service_api_key", SERVICE_API_KEY)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Api-Key": SERVICE_API_KEY},
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def anonymous_client():
    """Client without the identity override."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def aapl(test_db: AsyncSession):
    """Apple, in the Software & IT Services subsector."""
    return await CalendarFactory.create_company(test_db)


@pytest_asyncio.fixture(scope="function")
async def jpm(test_db: AsyncSession):
    return await CalendarFactory.create_company(
        test_db,
        ticker="JPM",
        name="JPMorgan Chase & Co.",
        sector="Financials",
        subsector=BANKING,
    )


@pytest_asyncio.fixture(scope="function")
async def retired_company(test_db: AsyncSession):
    return await CalendarFactory.create_company(
        test_db,
        ticker="OLDS",
        name="Legacy Software Corp",
        subsector=SOFTWARE,
        is_active=False,
    )


@pytest_asyncio.fixture(scope="function")
async def earnings_event(test_db: AsyncSession, aapl):
    """AAPL "Q4 Earnings Call" on Dec 15 2024, hosted by AAPL."""
    event = await CalendarFactory.create_event(
        test_db,
        companies=[aapl],
        description="Fourth quarter results and guidance",
    )
    await CalendarFactory.create_host(
        test_db, event, host_type="single_corp", host_id=aapl.id, primary_company_id=aapl.id
    )
    return event


@pytest_asyncio.fixture(scope="function")
async def banking_event(test_db: AsyncSession, jpm):
    """In-person JPM event on Dec 10 2024."""
    return await CalendarFactory.create_event(
        test_db,
        companies=[jpm],
        title="Banking Summit",
        start_date=datetime(2024, 12, 10, 9, 0),
        location_type="physical",
        location_details=SAMPLE_PHYSICAL_DETAILS,
    )


@pytest_asyncio.fixture(scope="function")
async def software_subscription(test_db: AsyncSession, sample_user):
    """Active paid Software & IT Services subscription for the sample user."""
    return await CalendarFactory.create_subscription(
        test_db, user_id=sample_user.id, subsector=SOFTWARE
    )
