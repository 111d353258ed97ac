from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import DeclarativeBase

from app.config import Config


# Backends whose drivers we ship and that support UPDATE ... RETURNING
SUPPORTED_DB_TYPES = ("postgresql", "sqlite")


# SQLAlchemy Base for ORM models
class Base(DeclarativeBase):
    pass


def get_db_type(url: str) -> str:
    """Return the backend name of a database URL ("postgresql", "sqlite", ...)."""
    return url.split(":", 1)[0].split("+", 1)[0]


def get_async_url(url: str) -> str:
    """Convert database URL to async SQLAlchemy format."""
    db_type = get_db_type(url)
    if "+" in url.split(":", 1)[0]:
        # Driver already chosen
        return url
    if db_type == "postgresql":
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif db_type == "sqlite":
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the async engine and hands out sessions.

    Services never reach for a module-level session: every unit of work gets
    the session it should use passed in explicitly.
    """

    def __init__(self, url: str | None = None, echo: bool | None = None):
        self.url = url or Config.DATABASE_URL
        self.echo = Config.DATABASE_ECHO if echo is None else echo
        self.db_type = get_db_type(self.url)
        if self.db_type not in SUPPORTED_DB_TYPES:
            raise ValueError(f"Unsupported database type: {self.db_type}")
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self):
        """Create database engine and session factory."""
        if self.engine:
            return
        self.engine = create_async_engine(get_async_url(self.url), echo=self.echo)
        if self.db_type == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def disconnect(self):
        """Close database engine."""
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None

    async def create_all(self):
        """Create all tables known to the ORM metadata."""
        # Models register themselves on Base when imported
        import app.models  # noqa: F401

        if not self.engine:
            await self.connect()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self):
        if not self.engine:
            await self.connect()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    def session(self) -> AsyncSession:
        """Open a new session. Use as ``async with db.session() as session``."""
        if not self.session_factory:
            raise RuntimeError("Database is not connected")
        return self.session_factory()


db = Database()


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    if not db.session_factory:
        await db.connect()
    async with db.session() as session:
        yield session
