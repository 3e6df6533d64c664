from functools import lru_cache
from typing import Any

from sqlalchemy import URL, event, make_url, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from infra.config.config import DatabaseConfig, get_config
from infra.db.models import Base

_POSTGRES_DRIVER_NAMES = {"postgres", "postgresql", "postgresql+psycopg2", "postgresql+psycopg"}


def _postgres_engine_options(db_config: DatabaseConfig) -> dict[str, Any]:
    return {
        "echo": db_config.ECHO,
        "pool_pre_ping": True,
        "pool_size": db_config.POOL_SIZE,
        "max_overflow": db_config.MAX_OVERFLOW,
        "pool_timeout": db_config.POOL_TIMEOUT,
        "pool_recycle": db_config.POOL_RECYCLE,
    }


def _create_sqlite_engine(url: URL, echo: bool) -> AsyncEngine:
    engine = create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def _create_engine_from_url(db_config: DatabaseConfig) -> AsyncEngine:
    url = make_url(db_config.URL)

    if url.drivername.startswith("sqlite"):
        return _create_sqlite_engine(url.set(drivername="sqlite+aiosqlite"), db_config.ECHO)

    if url.drivername in _POSTGRES_DRIVER_NAMES:
        url = url.set(drivername="postgresql+asyncpg")

    # asyncpg takes TLS settings as a connect argument, not as a libpq query parameter
    connect_args: dict[str, Any] = {}
    if "sslmode" in url.query:
        connect_args["ssl"] = url.query["sslmode"]
        url = url.difference_update_query(["sslmode"])

    options = _postgres_engine_options(db_config)
    if connect_args:
        options["connect_args"] = connect_args

    return create_async_engine(url, **options)


@lru_cache
def get_engine() -> AsyncEngine:
    db_config = get_config().DATABASE_CONFIG

    if db_config.URL:
        return _create_engine_from_url(db_config)

    if db_config.DRIVER == "sqlite":
        url = URL.create(
            drivername="sqlite+aiosqlite",
            database=db_config.SQLITE_PATH,
        )

        return _create_sqlite_engine(url, db_config.ECHO)

    url = URL.create(
        drivername="postgresql+asyncpg",
        username=db_config.USER,
        password=db_config.PASSWORD,
        host=db_config.HOST,
        port=db_config.PORT,
        database=db_config.DATABASE,
    )

    return create_async_engine(url, **_postgres_engine_options(db_config))


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def ping_database() -> None:
    async with get_engine().connect() as connection:
        await connection.execute(text("SELECT 1"))


async def close_engine() -> None:
    await get_engine().dispose()


async def create_database_schema() -> None:
    async with get_engine().begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
