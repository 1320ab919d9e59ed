"""
Tests for connection settings and connectivity checks
"""
import logging
import pytest
from unittest.mock import MagicMock

from sqlalchemy import inspect
from sqlalchemy.exc import DBAPIError

from inspection_db.connection import (
    ConnectionSettings, classify_connection_failure, connection_up, create_db_engine,
    current_user, init_db
)
from inspection_db.exceptions import ConnectivityError
from logging_config import QUIET_LOGGERS, setup_logging


def failing_engine(message):
    engine = MagicMock()
    engine.url.host = 'db.example.com'
    engine.connect.side_effect = DBAPIError('SELECT 1', {}, Exception(message))
    return engine


@pytest.mark.unit
class TestConnectionSettings:
    """Tests for connection settings"""

    def test_connection_string_has_no_credentials(self):
        """Test the loggable string leaves out user and password"""
        settings = ConnectionSettings(server='office-sql', username='admin', password='s3cret')
        assert settings.connection_string == \
            'server=office-sql;database=Inspection Database;connection timeout=1'
        assert 's3cret' not in repr(settings)

    def test_sql_server_url(self):
        """Test SQL Server settings build a pyodbc URL"""
        settings = ConnectionSettings(server='office-sql', database='Inspections',
                                      username='admin', password='s3cret')
        url = settings.url
        assert url.drivername == 'mssql+pyodbc'
        assert url.host == 'office-sql'
        assert url.database == 'Inspections'
        assert url.query['driver'] == 'ODBC Driver 18 for SQL Server'
        assert 's3cret' not in url.render_as_string(hide_password=True)

    def test_database_url_overrides(self):
        """Test a full URL wins over the SQL Server settings"""
        settings = ConnectionSettings(database_url='sqlite://')
        assert settings.url.drivername == 'sqlite'

    def test_from_config(self, app_config):
        """Test settings are read from a config class"""
        settings = ConnectionSettings.from_config(app_config)
        assert settings.database_url == 'sqlite://'
        assert settings.timeout == app_config.DB_CONNECTION_TIMEOUT


@pytest.mark.unit
class TestFailureClassification:
    """Tests for reading driver diagnostics"""

    def test_host_not_found(self):
        """Test unreachable server diagnostics"""
        assert classify_connection_failure('The server was not found or was not accessible') == 'host_not_found'

    def test_login_failed(self):
        """Test rejected credential diagnostics"""
        assert classify_connection_failure("Login failed for user 'admin'.") == 'login_failed'

    def test_other(self):
        """Test anything else is unclassified"""
        assert classify_connection_failure('disk I/O error') is None


@pytest.mark.unit
class TestConnectionUp:
    """Tests for the connectivity check"""

    def test_host_not_found_is_false(self):
        """Test a missing host reports down"""
        assert connection_up(failing_engine('The server was not found')) is False

    def test_login_failed_is_false(self):
        """Test bad credentials report down"""
        assert connection_up(failing_engine("Login failed for user 'admin'.")) is False

    def test_other_failure_raises(self):
        """Test unexpected failures are raised"""
        with pytest.raises(ConnectivityError):
            connection_up(failing_engine('TCP Provider: connection reset'))


@pytest.mark.integration
class TestEngine:
    """Tests against a real SQLite engine"""

    def test_connection_up(self, engine):
        """Test a reachable database reports up"""
        assert connection_up(engine) is True

    def test_init_db_creates_tables(self, engine):
        """Test every declared table exists"""
        tables = set(inspect(engine).get_table_names())
        assert tables == {
            'Company', 'Building', 'Contact', 'Company_Contact_Relations',
            'Building_Contact_Relations', 'ContactLog', 'Elevator', 'Inspection', 'DBEdits',
        }

    def test_init_db_is_repeatable(self, engine):
        """Test creating tables twice is harmless"""
        init_db(engine)
        assert 'Company' in inspect(engine).get_table_names()

    def test_create_engine_bad_url(self):
        """Test an unusable URL raises ConnectivityError"""
        with pytest.raises(ConnectivityError):
            create_db_engine(ConnectionSettings(database_url='nosuchdialect://host/db'))

    def test_current_user(self):
        """Test a user name is always available"""
        assert isinstance(current_user(), str)
        assert current_user()


@pytest.mark.unit
class TestLoggingSetup:
    """Tests for logging configuration"""

    def test_setup_logging_writes_file(self, tmp_path, app_config):
        """Test handlers are installed and the log directory is created"""
        class LogConfig(app_config):
            LOG_DIR = str(tmp_path / 'logs')
            LOG_LEVEL = 'DEBUG'

        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            logger = setup_logging(LogConfig)
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
            assert (tmp_path / 'logs' / app_config.LOG_FILE).exists()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)

    def test_noisy_libraries_are_quietened(self, tmp_path, app_config):
        """Test driver and HTTP loggers are raised to WARNING"""
        class LogConfig(app_config):
            LOG_DIR = str(tmp_path / 'logs')

        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(LogConfig)
            for name in QUIET_LOGGERS:
                assert logging.getLogger(name).level == logging.WARNING
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)
