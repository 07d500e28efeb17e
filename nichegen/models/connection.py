"""
Database connection utilities for the NicheGen backend.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, exc, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session as SQLAlchemySession
from sqlalchemy.pool import StaticPool

# Import the Base class
from . import Base

# Configure logging
logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith('sqlite'):
        options = {'connect_args': {'check_same_thread': False}}
        # An in-memory database only lives as long as its single connection
        if url in ('sqlite://', 'sqlite:///:memory:'):
            options['poolclass'] = StaticPool
        return options
    return {
        'pool_recycle': 1800,  # Reconnect after 30 minutes
        'pool_pre_ping': True,  # Verify connections before using
        'pool_timeout': 30,
    }


def create_db_engine(url: str, max_retries: int = 3, retry_interval: int = 2) -> Engine:
    """Create a database engine, retrying while the server comes up."""
    retry_count = 0
    last_error = None

    while retry_count < max_retries:
        try:
            logger.info(f"Attempting to connect to database (attempt {retry_count + 1}/{max_retries})")
            engine = create_engine(url, echo=False, **_engine_options(url))

            # Test the connection
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection successful!")
            return engine

        except (exc.SQLAlchemyError, exc.DBAPIError) as e:
            last_error = e
            retry_count += 1
            if retry_count < max_retries:
                logger.warning(f"Database connection failed: {str(e)}. Retrying in {retry_interval} seconds...")
                time.sleep(retry_interval)

    logger.error(f"Failed to connect to database after {max_retries} attempts. Last error: {str(last_error)}")
    raise last_error


def create_session_factory(engine: Engine) -> sessionmaker:
    """
    Session factory used by the stores.

    Objects stay readable after the session closes, so handlers can serialise
    them without hitting a DetachedInstanceError.
    """
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@contextmanager
def get_db(session_factory: sessionmaker) -> Generator[SQLAlchemySession, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Yields:
        SQLAlchemy Session: The database session
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def ensure_tables_exist(engine: Engine):
    """
    Create any missing tables. Existing tables and data are left untouched.
    """
    logger.info("Ensuring database tables exist...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables check completed")
