"""
Tests for the SQLAlchemy account repository on SQLite.
"""

import pytest

from database.repository import DuplicateEmailError, SqlAccountRepository


class TestSqlAccountRepository:
    @pytest.mark.asyncio
    async def test_create_then_find(self, database):
        async with database.session() as session:
            repo = SqlAccountRepository(session)
            created = await repo.create("a@b.com", "hash")
            assert created.user_id is not None
            assert created.created_at is not None

        async with database.session() as session:
            found = await SqlAccountRepository(session).find_by_email("a@b.com")

        assert found is not None
        assert found.user_id == created.user_id
        assert found.password_hash == "hash"

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, database):
        async with database.session() as session:
            assert await SqlAccountRepository(session).find_by_email("x@y.com") is None

    @pytest.mark.asyncio
    async def test_unique_index_raises_duplicate(self, database):
        async with database.session() as session:
            await SqlAccountRepository(session).create("a@b.com", "hash-1")

        async with database.session() as session:
            repo = SqlAccountRepository(session)
            with pytest.raises(DuplicateEmailError) as exc_info:
                await repo.create("a@b.com", "hash-2")
            assert exc_info.value.email == "a@b.com"
            # Session is usable again after the rollback.
            assert await repo.find_by_email("a@b.com") is not None

    @pytest.mark.asyncio
    async def test_ping(self, database):
        assert await database.ping() is True
