from __future__ import annotations

import os
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from deposito.settings import get_settings

# seconds a writer waits on SQLite's database lock before failing
SQLITE_BUSY_TIMEOUT_SEC = 15


def _default_sqlite_url() -> str:
    # fallback dev: backend/data/deposito.db
    settings = get_settings()
    db_path = settings.data_dir / "deposito.db"
    return f"sqlite:///{db_path.as_posix()}"


def get_database_url() -> str:
    env = os.getenv("DEPOSITO_DATABASE_URL")
    if env and env.strip():
        return env.strip()
    return _default_sqlite_url()


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_conn, _record) -> None:
    # SQLite ships with FK enforcement off; RESTRICT on ledger/account refs needs it
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


@lru_cache
def get_engine() -> Engine:
    url = get_database_url()

    if not is_sqlite(url):
        return create_engine(url, future=True, pool_pre_ping=True)

    # FastAPI runs sync routes in a threadpool: connections cross threads,
    # and concurrent balance writes queue on the lock instead of failing at once
    engine = create_engine(
        url,
        future=True,
        connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SEC},
    )
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, future=True)


def new_session() -> Session:
    return get_session_factory()()


def reset_db_caches() -> None:
    get_session_factory.cache_clear()
    get_engine.cache_clear()


def init_db() -> None:
    """Create missing tables; production schemas go through Alembic."""
    # import here to avoid circular imports
    from deposito.db_base import Base
    from deposito.repositories import sql_models  # noqa: F401

    engine = get_engine()
    Base.metadata.create_all(engine)
