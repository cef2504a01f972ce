import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task  # noqa: F401

logger = logging.getLogger(__name__)


def create_store_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Server databases: no pooling across restarts, pre-ping stale connections
    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        poolclass=NullPool,
    )


def create_tables(engine: Engine) -> None:
    """Create all database tables."""
    SQLModel.metadata.create_all(bind=engine)


def open_store(database_url: str) -> Optional[Engine]:
    """Open the process-wide store handle.

    Returns ``None`` when the store cannot be reached; the failure is logged and
    there is no retry.
    """
    try:
        engine = create_store_engine(database_url)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        create_tables(engine)
    except SQLAlchemyError:
        logger.exception("Could not connect to the task store")
        return None
    logger.info("Task store connection established (%s)", engine.url.render_as_string(hide_password=True))
    return engine


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    """Get a database session bound to ``engine``.

    Usage:
        with get_session(engine) as session:
            # do something with session
    """
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
