"""
Logger utility for consistent logging across the cart store.

Features:
- Consistent log format across all modules
- Log level taken from LOG_LEVEL / DEBUG settings
- Stream handler to stdout plus a rotating error log
- Optional rotating debug log
- SQLAlchemy engine logging silenced unless DEBUG is on

Connection descriptors and passwords are never passed to a logger; modules
log host names and user ids only.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
VERBOSE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logging(
    log_level_name: str = "INFO",
    debug_mode: bool = False,
    log_dir: Optional[Path] = Path("logs"),
) -> logging.Logger:
    """
    Configure global logging for the application.

    Args:
        log_level_name: Name of the root log level, e.g. "INFO"
        debug_mode: Enables the debug log file and SQL echo logging
        log_dir: Directory for rotating log files; None disables file logging

    Returns:
        logging.Logger: The ``cartstore`` logger
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates when reloading
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    verbose_formatter = logging.Formatter(VERBOSE_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    standard_formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(standard_formatter)
    console_handler.setLevel(logging.DEBUG if debug_mode else log_level)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        error_file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "error.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
        error_file_handler.setLevel(logging.ERROR)
        error_file_handler.setFormatter(verbose_formatter)
        root_logger.addHandler(error_file_handler)

        if debug_mode:
            debug_file_handler = logging.handlers.RotatingFileHandler(
                log_dir / "debug.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5
            )
            debug_file_handler.setLevel(log_level)
            debug_file_handler.setFormatter(verbose_formatter)
            root_logger.addHandler(debug_file_handler)

    # SQL echo would include bound parameters
    logging.getLogger('sqlalchemy.engine').setLevel(
        logging.INFO if debug_mode else logging.WARNING
    )
    logging.getLogger('httpx').setLevel(logging.WARNING)

    logger = logging.getLogger('cartstore')
    logger.info(f"Logging initialized with level {log_level_name.upper()}")
    return logger
