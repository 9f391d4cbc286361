"""
Database connection and session management.
"""
import logging
from contextlib import contextmanager
from typing import Generator
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from config.settings import settings
from .models import Base

logger = logging.getLogger(__name__)


def _ensure_database_exists():
    """Create the MySQL database if it does not already exist."""
    url = make_url(settings.database_url)
    db_name = url.database
    # Connect to the server without selecting the database
    tmp_engine = create_engine(url.set(database=None), pool_pre_ping=True)
    with tmp_engine.connect() as conn:
        conn.execute(text(f"CREATE DATABASE IF NOT EXISTS `{db_name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"))
        conn.commit()
    tmp_engine.dispose()


def _engine_options() -> dict:
    options = {"echo": settings.sql_echo}
    backend = make_url(settings.database_url).get_backend_name()
    if backend == "sqlite":
        # Sessions are handed across FastAPI's threadpool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
        options["pool_recycle"] = 3600
    return options


if make_url(settings.database_url).get_backend_name() == "mysql":
    _ensure_database_exists()

# Create engine
engine = create_engine(settings.database_url, **_engine_options())

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Initialize database by creating all tables."""
    logger.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Get database session.
    Use as dependency injection in FastAPI.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context():
    """
    Context manager for database session.
    Use for non-FastAPI contexts.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
