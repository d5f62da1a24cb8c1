import logging
import os

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the async engine and session factory for one process.

    Built explicitly and handed to the application, which calls ``open`` on
    startup and ``close`` on shutdown. Request handlers get sessions through
    ``crushmatch.dependencies.get_db``.
    """

    def __init__(self, url: str):
        self.url = normalize_database_url(url)
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    async def open(self) -> None:
        if self._engine is not None:
            return

        engine_kwargs: dict = {"echo": False}
        if self.is_sqlite:
            _ensure_sqlite_dir(self.url)
        else:
            engine_kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True)

        engine = create_async_engine(self.url, **engine_kwargs)

        if self.is_sqlite:
            @event.listens_for(engine.sync_engine, "connect")
            def set_sqlite_pragma(dbapi_conn, connection_record):
                cursor = dbapi_conn.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        async with engine.begin() as conn:
            from crushmatch.models import user, interest  # noqa: F401
            await conn.run_sync(Base.metadata.create_all)

        self._engine = engine
        self._sessionmaker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        logger.info("Database opened (%s)", engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database closed")

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not open")
        return self._sessionmaker()


def _ensure_sqlite_dir(url: str) -> None:
    # sqlite+aiosqlite:///./data/x.sqlite3 -> ./data
    _, _, path = url.partition(":///")
    if not path or path.startswith(":memory:"):
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
