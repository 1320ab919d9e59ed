"""
Database connection management for the inspection records library.
Handles connection settings, SQLAlchemy engine creation and connection verification.

There is no module-level engine: callers create one with create_db_engine()
and hand it to a QueryGateway explicitly.
"""

import getpass
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import declarative_base

from inspection_db.exceptions import ConnectivityError

logger = logging.getLogger(__name__)

# SQLAlchemy Base for model declarations
Base = declarative_base()

# Diagnostics that mean "the server could not be reached"
HOST_NOT_FOUND_MARKERS = (
    'The server was not found',
    'could not translate host name',
    'Name or service not known',
)

# Diagnostics that mean "the credentials were rejected"
LOGIN_FAILED_MARKERS = (
    'Login failed for user',
    'password authentication failed',
)


@dataclass
class ConnectionSettings:
    """Where the database lives and who to log in as.

    Credentials are kept apart from the connection string and only handed to
    SQLAlchemy's URL builder.
    """

    server: str = 'localhost'
    database: str = 'Inspection Database'
    username: str = ''
    password: str = ''
    driver: str = 'ODBC Driver 18 for SQL Server'
    timeout: int = 1
    database_url: Optional[str] = None

    @classmethod
    def from_config(cls, config):
        return cls(
            server=config.DB_SERVER,
            database=config.DB_NAME,
            username=config.DB_USER,
            password=config.DB_PASSWORD,
            driver=config.DB_DRIVER,
            timeout=config.DB_CONNECTION_TIMEOUT,
            database_url=config.DATABASE_URL,
        )

    @property
    def connection_string(self):
        """Connection string without credentials."""
        return f"server={self.server};database={self.database};connection timeout={self.timeout}"

    @property
    def url(self):
        if self.database_url:
            return make_url(self.database_url)

        return URL.create(
            'mssql+pyodbc',
            username=self.username or None,
            password=self.password or None,
            host=self.server,
            database=self.database,
            query={'driver': self.driver, 'timeout': str(self.timeout)},
        )

    def __repr__(self):
        return f"ConnectionSettings({self.connection_string!r}, user={self.username!r})"


def create_db_engine(settings, **engine_options):
    """
    Create a SQLAlchemy engine for the given settings.

    Args:
        settings: ConnectionSettings instance
        **engine_options: Extra keyword arguments for sqlalchemy.create_engine

    Returns:
        Engine instance
    """
    options = {'pool_pre_ping': True, 'echo': False}
    options.update(engine_options)

    try:
        engine = create_engine(settings.url, **options)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create database engine for {settings.connection_string}: {e}")
        raise ConnectivityError(f"Failed to create database engine: {e}") from e

    logger.info(f"Database engine created for {settings.connection_string}")
    return engine


@contextmanager
def open_connection(engine):
    """
    Open a connection for a single operation.

    Commits when the block completes, rolls back if it raises, and always
    closes the connection.

    Example:
        with open_connection(engine) as conn:
            conn.execute(text("SELECT 1"))
    """
    conn = engine.connect()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def classify_connection_failure(diagnostic):
    """Return 'host_not_found', 'login_failed' or None for a driver diagnostic."""
    if any(marker in diagnostic for marker in HOST_NOT_FOUND_MARKERS):
        return 'host_not_found'
    if any(marker in diagnostic for marker in LOGIN_FAILED_MARKERS):
        return 'login_failed'
    return None


def connection_up(engine):
    """
    Check whether the database can be reached with the configured credentials.

    Returns:
        True if a connection opened, False when the host was not found or the
        login was rejected.

    Raises:
        ConnectivityError: for any other connection-level failure
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except DBAPIError as e:
        diagnostic = str(e.orig) if e.orig is not None else str(e)
        cause = classify_connection_failure(diagnostic)
        if cause == 'host_not_found':
            logger.warning(f"Unable to locate server at {engine.url.host}")
            return False
        if cause == 'login_failed':
            logger.warning("Unable to log in. Check user/password")
            return False
        logger.error(f"Database connection failed: {diagnostic}")
        raise ConnectivityError(f"SQL Server connection error: {diagnostic}") from e


def current_user():
    """The OS/session user recorded against audit entries."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.environ.get('USERNAME', 'unknown')


def init_db(engine):
    """
    Create all tables declared in inspection_db.models.
    """
    # Import models to ensure they're registered with Base
    from inspection_db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")
