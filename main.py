"""
User authentication service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.health import router as health_router
from api.middleware import register_error_handlers, register_middleware
from auth.routes import router as user_router
from config.settings import Settings, config
from database.session import Database

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("asyncio", "sqlalchemy.engine", "aiosqlite", "asyncpg"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database
    await database.create_all()
    logger.info("Server is running on http://localhost:%d", settings.port)
    yield
    await database.dispose()
    logger.info("Server shut down")


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    settings = settings or config
    if database is None:
        database = Database.from_url(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    app = FastAPI(
        title="User Authentication Service",
        version="1.0.0",
        description="Email/password signup and login.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_error_handlers(app)

    # Routes
    app.include_router(user_router, prefix="/api/user")
    app.include_router(health_router, prefix="/api")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
