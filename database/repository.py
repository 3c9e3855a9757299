"""
Account persistence — lookup by email and insert.

"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when an insert collides with the unique index on ``users.email``."""

    def __init__(self, email: str):
        super().__init__(f"Email already in use: {email}")
        self.email = email


class AccountRepository(Protocol):
    async def find_by_email(self, email: str) -> Optional[User]: ...

    async def create(self, email: str, password_hash: str) -> User: ...


class SqlAccountRepository:
    """``AccountRepository`` over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def create(self, email: str, password_hash: str) -> User:
        user = User(email=email, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.warning("Insert for %s hit the unique email index", email)
            raise DuplicateEmailError(email) from exc
        return user
