"""Engine and session factory configuration."""

from collections.abc import Generator
import logging
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from product_api.core.config import Settings, get_settings
from product_api.db.base import Base

# Register models on Base.metadata
from product_api.db import models  # noqa: F401

logger = logging.getLogger(__name__)

settings = get_settings()


def _engine_options(settings: Settings) -> dict[str, Any]:
    """Pool configuration per backend.

    SQLite connections are shared across threads through a single StaticPool
    connection so an in-memory database survives between sessions.
    """
    if settings.is_sqlite:
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    # pool_pre_ping: Test connections before using (handles stale connections)
    # pool_recycle: Recycle connections after 30 minutes (prevents timeout)
    return {
        "poolclass": QueuePool,
        "pool_pre_ping": True,
        "pool_recycle": 1800,
        "pool_size": 5,
        "max_overflow": 10,
        "connect_args": {"connect_timeout": 10},
    }


engine = create_engine(
    settings.database_url,
    echo=False,
    future=True,
    **_engine_options(settings),
)

SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
)


def get_db() -> Generator[Session, None, None]:
    """Yield a transactional session for the request lifecycle."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> bool:
    """Create missing tables. Returns False when the database is unreachable."""
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Failed to connect to database: {e}")
        return False
    logger.info("Database ready")
    return True


def reset_db() -> None:
    """Drop and recreate every table. All product data is lost."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables recreated")
