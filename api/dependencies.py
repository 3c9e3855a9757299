"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import Settings
from database.repository import SqlAccountRepository
from database.session import Database, get_db_session


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


async def db_session(session: AsyncSession = Depends(get_db_session)) -> AsyncGenerator[AsyncSession, None]:
    """Re-export so routes import from a single place."""
    yield session


def get_account_repository(
    session: AsyncSession = Depends(db_session),
) -> SqlAccountRepository:
    return SqlAccountRepository(session)
