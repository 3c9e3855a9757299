"""
Shared fixtures — in-memory SQLite database, app and HTTP client.
"""

import os

# Keep the module-level app in main.py off the real Postgres URL.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from config.settings import Settings
from database.models import User
from database.repository import DuplicateEmailError
from database.session import Database
from main import create_app


class InMemoryAccountRepository:
    """Dict-backed stand-in for ``SqlAccountRepository``."""

    def __init__(self):
        self.users: Dict[str, User] = {}

    async def find_by_email(self, email: str) -> Optional[User]:
        return self.users.get(email)

    async def create(self, email: str, password_hash: str) -> User:
        if email in self.users:
            raise DuplicateEmailError(email)
        user = User(
            user_id=uuid.uuid4(),
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self.users[email] = user
        return user


@pytest.fixture
def repo():
    return InMemoryAccountRepository()


@pytest.fixture
def settings():
    # Low cost factor keeps the route tests fast.
    return Settings(database_url="sqlite+aiosqlite:///:memory:", bcrypt_rounds=4)


@pytest.fixture
async def database():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db = Database(engine)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings=settings, database=database)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as ac:
        yield ac
