"""Database engine and session management."""
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from agribooks import config
from agribooks.db.models import (  # noqa: F401  # pylint: disable=unused-import
    Alert, Category, Reminder, Transaction, User)


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Build an engine for ``url``.

    SQLite connections are shared across threads (store calls run in worker
    threads); in-memory SQLite uses a single static connection so every session
    sees the same database.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
    )


engine = create_db_engine(config.DATABASE_URL, echo=config.SQL_ECHO)


@contextmanager
def get_session(bind: Engine | None = None) -> Generator[Session, None, None]:
    """Yield a database session; commits on success, rolls back on error."""
    session = Session(bind or engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables. Safe to call on startup (idempotent for existing tables)."""
    SQLModel.metadata.create_all(bind or engine)
