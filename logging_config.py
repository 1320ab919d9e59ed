"""
Logging setup for applications that embed the inspection library.
Library modules only call logging.getLogger(__name__); handlers are installed here.
"""
import logging
import logging.handlers
from pathlib import Path

QUIET_LOGGERS = ('sqlalchemy.engine', 'urllib3')


def setup_logging(config):
    """
    Install a console handler and a rotating file handler on the root logger

    Args:
        config: Configuration class or instance (see config.py)

    Returns:
        The root logger
    """
    log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    formatter = logging.Formatter(config.LOG_FORMAT)

    log_dir = Path(config.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / config.LOG_FILE

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    for handler in (logging.StreamHandler(), file_handler):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # Statement echo and HTTP pool chatter drown out gateway logging
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(f"Inspection logging at {logging.getLevelName(log_level)} level, file {log_path}")
    return root_logger
