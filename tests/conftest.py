"""Pytest configuration.

This configuration ensures:
1. Required settings exist before any branchauth module is imported
2. Async tests are marked automatically
3. Integration tests get a fresh SQLite database per test
4. Time is controlled through a mutable clock, never the wall clock
"""

import asyncio
import os
from datetime import UTC, datetime, timedelta
from uuid import UUID

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("BCRYPT_ROUNDS", "10")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from branchauth.domain.entities import Credential  # noqa: E402

TEST_SECRET_KEY = os.environ["SECRET_KEY"]
TEST_ISSUER = "branchauth"
TEST_AUDIENCE = "branchauth-clients"
T0 = datetime(2026, 1, 15, 9, 0, 0, tzinfo=UTC)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: API endpoint tests")
    config.addinivalue_line("markers", "asyncio: Async test that requires event loop")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


class FakeClock:
    """Mutable clock implementing ClockProtocol."""

    def __init__(self, start: datetime = T0) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta: float) -> datetime:
        self.current = self.current + timedelta(**delta)
        return self.current


@pytest.fixture
def clock():
    """Provide a FakeClock starting at a fixed instant."""
    return FakeClock()


def create_credential(
    user_id: UUID | None = None,
    username: str = "alice",
    password_hash: str = "$2b$10$placeholderplaceholderplaceholderplaceholderplaceho",
    is_active: bool = True,
    is_locked: bool = False,
    failed_login_attempts: int = 0,
    first_failed_login_at: datetime | None = None,
    roles: list[str] | None = None,
    branch_id: UUID | None = None,
) -> Credential:
    """Create a Credential with sensible defaults for testing."""
    return Credential(
        id=user_id or uuid7(),
        username=username,
        email=f"{username}@example.com",
        first_name=username.capitalize(),
        last_name="Tester",
        password_hash=password_hash,
        branch_id=branch_id or uuid7(),
        is_active=is_active,
        is_locked=is_locked,
        failed_login_attempts=failed_login_attempts,
        first_failed_login_at=first_failed_login_at,
        roles=roles if roles is not None else ["teller"],
    )


@pytest.fixture
def credential_factory():
    """Expose create_credential as a fixture."""
    return create_credential


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Provide a fresh file-backed SQLite Database with all tables created.

    Usage:
        async def test_something(test_database):
            async with test_database.get_session() as session:
                ...
    """
    from branchauth.infrastructure.persistence.database import Database

    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'branchauth.db'}")
    await db.create_all()

    yield db

    await db.drop_all()
    await db.close()
