"""
Pytest fixtures for testing.
"""
import os

# Cheap bcrypt rounds and an in-memory database before any app import
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from typing import AsyncGenerator, Callable

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Import database module BEFORE app to allow override
import app.database
from app.config import settings
from app.database import Base
# Import ALL models so Base.metadata knows about all tables
from app.models import Company, Listing, ListingStatus, PostType, User, UserRole
from app.services.categories import seed_default_categories
from app.services.sessions import create_session
from app.services.users import hash_password

# Now import app (after we can override database)
from app.main import app as fastapi_app


# Test database URL (use in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "secret123"

JOB_DESCRIPTION = (
    "We are looking for a backend engineer to build and run our payment APIs in Kigali."
)
JOB_REQUIREMENTS = "Three years of Python and PostgreSQL experience."


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database for each test.
    Ensures cleanup happens even if test fails.
    """
    # StaticPool keeps a single connection so every session sees the same in-memory database
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Replace the app's engine and sessionmaker so get_db() uses the test database
    original_engine = app.database.engine
    original_sessionmaker = app.database.AsyncSessionLocal

    app.database.engine = test_engine
    app.database.AsyncSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    session = app.database.AsyncSessionLocal()

    try:
        yield session
    finally:
        await session.close()
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await test_engine.dispose()

        app.database.engine = original_engine
        app.database.AsyncSessionLocal = original_sessionmaker


@pytest_asyncio.fixture
async def make_client(db: AsyncSession) -> AsyncGenerator[Callable, None]:
    """
    Factory for HTTP clients; pass a user to get a client with a live session cookie.

    Each client keeps its own cookie jar, so tests can act as several users.
    """
    clients = []

    async def factory(user: User = None) -> AsyncClient:
        client = AsyncClient(
            transport=ASGITransport(app=fastapi_app),
            base_url="http://test",
        )
        clients.append(client)
        if user is not None:
            session = await create_session(db, user)
            client.cookies.set(settings.session_cookie_name, session.sid)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def async_client(make_client) -> AsyncClient:
    """Anonymous client."""
    return await make_client()


async def _create_user(db: AsyncSession, email: str, role: UserRole, full_name: str) -> User:
    user = User(
        email=email,
        password=hash_password(TEST_PASSWORD),
        role=role,
        full_name=full_name,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def job_seeker(db: AsyncSession) -> User:
    return await _create_user(db, "seeker@example.com", UserRole.JOB_SEEKER, "Aline Uwase")


@pytest_asyncio.fixture
async def employer(db: AsyncSession) -> User:
    return await _create_user(db, "employer@example.com", UserRole.EMPLOYER, "Eric Mugisha")


@pytest_asyncio.fixture
async def admin(db: AsyncSession) -> User:
    return await _create_user(db, "admin@example.com", UserRole.ADMIN, "Site Admin")


@pytest_asyncio.fixture
async def job_seeker_client(make_client, job_seeker: User) -> AsyncClient:
    return await make_client(job_seeker)


@pytest_asyncio.fixture
async def employer_client(make_client, employer: User) -> AsyncClient:
    return await make_client(employer)


@pytest_asyncio.fixture
async def admin_client(make_client, admin: User) -> AsyncClient:
    return await make_client(admin)


@pytest_asyncio.fixture
async def company(db: AsyncSession, employer: User) -> Company:
    """The employer's company."""
    company = Company(
        user_id=employer.id,
        name="Kigali Tech Ltd",
        industry="Information Technology",
        location="Kigali",
    )
    db.add(company)
    await db.commit()
    await db.refresh(company)
    return company


@pytest_asyncio.fixture
async def categories(db: AsyncSession):
    await seed_default_categories(db)


@pytest.fixture
def job_payload() -> Callable[..., dict]:
    """Valid POST /api/jobs body for a job vacancy; keyword arguments override fields."""
    def build(**overrides) -> dict:
        payload = {
            "postType": "job",
            "title": "Backend Engineer",
            "location": "Kigali",
            "description": JOB_DESCRIPTION,
            "category": "Information Technology",
            "requirements": JOB_REQUIREMENTS,
            "type": "full_time",
            "experienceLevel": "entry",
            "individualName": "Jean Claude",
        }
        payload.update(overrides)
        return payload

    return build


@pytest_asyncio.fixture
async def make_listing(db: AsyncSession) -> Callable:
    """
    Factory that inserts a listing row directly.

    Rows get increasing `created_at` values in creation order unless one
    is given, so "newest first" is deterministic.
    """
    counter = {"n": 0}
    base_time = datetime(2024, 1, 1, 12, 0, 0)

    async def factory(**fields) -> Listing:
        counter["n"] += 1
        values = {
            "post_type": PostType.JOB,
            "title": f"Listing number {counter['n']}",
            "location": "Kigali",
            "description": JOB_DESCRIPTION,
            "category": "Information Technology",
            "requirements": JOB_REQUIREMENTS,
            "individual_name": "Jean Claude",
            "additional_data": {"type": "full_time", "experienceLevel": "entry", "currency": "RWF"},
            "status": ListingStatus.APPROVED,
            "is_active": True,
            "is_featured": False,
            "created_at": base_time + timedelta(minutes=counter["n"]),
        }
        values.update(fields)
        if values.get("company_id") is not None:
            values["individual_name"] = None
        listing = Listing(**values)
        db.add(listing)
        await db.commit()
        await db.refresh(listing)
        return listing

    return factory
