# app/core/db.py

import ssl
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from app.core.config import (
    DATABASE_URL,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    APP_ENV,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)

# =====================================================
# BASE
# =====================================================
Base = declarative_base()


# =====================================================
# CONNECTION CONFIG
# =====================================================
def _engine_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    ssl_ctx = ssl.create_default_context()

    # Required for Supabase local dev
    if not DB_SSL_VERIFY:
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    return {
        "connect_args": {
            "ssl": ssl_ctx,
            # Disable prepared statements (asyncpg + Supabase stability)
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        },
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


def _enable_sqlite_foreign_keys(dbapi_connection, _):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# =====================================================
# DATABASE HANDLE
# =====================================================
class Database:
    """Owns the engine and session factory for one process.

    Built once in the application lifespan and handed to request handlers
    through ``app.state.db``. ``connect()`` must run before any session is
    opened and ``dispose()`` releases pooled connections at shutdown.
    """

    def __init__(self, url: str = DATABASE_URL):
        self.url = url
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    def connect(self) -> None:
        if self.engine is not None:
            return

        self.engine = create_async_engine(
            self.url,
            echo=False,                # NEVER enable in prod
            echo_pool=DB_ECHO_POOL,    # debugging only
            **_engine_args(self.url),
        )

        if self.url.startswith("sqlite"):
            event.listen(
                self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys
            )

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database engine created")

    async def dispose(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database engine disposed")

    def session(self) -> AsyncSession:
        if self.session_factory is None:
            raise RuntimeError("Database.connect() has not been called")
        return self.session_factory()

    async def create_all(self) -> None:
        """Create every table. Development and tests only."""
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


# =====================================================
# DEPENDENCY
# =====================================================
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session


# =====================================================
# DEV ONLY: AUTO CREATE TABLES
# =====================================================
async def init_models(database: Database):
    if APP_ENV != "development":
        raise RuntimeError("init_models() is forbidden outside development")

    await database.create_all()
