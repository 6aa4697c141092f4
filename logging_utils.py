"""
Logging Utilities for TrendBot

Central logging configuration for the server, the scheduler and one-off CLI
runs, plus a helper that records full exception context without leaking it
into HTTP responses.
"""

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional


def setup_logging(debug: bool = False, log_dir: Optional[str] = None) -> Optional[str]:
    """
    Configure the ROOT logger so every module logger inherits the handlers.

    Args:
        debug: Show DEBUG records on the console as well
        log_dir: Optional directory for a timestamped DEBUG-level log file

    Returns:
        Path of the log file, or None when only console logging is active
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(console_handler)

    log_file_path = None
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file_path = str(Path(log_dir) / f"trendbot_{timestamp}.log")
        file_handler = logging.FileHandler(log_file_path, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    # Third-party HTTP clients are chatty at DEBUG
    for noisy in ("urllib3", "httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return log_file_path


def log_exception(logger: logging.Logger, exc: Exception, context: str = "", **kwargs) -> None:
    """
    Log a full exception with traceback and context information.

    Args:
        logger: Logger instance to use
        exc: Exception that was raised
        context: Additional context string
        **kwargs: Additional context key-value pairs
    """
    error_msg = f"Exception occurred: {type(exc).__name__}: {str(exc)}"
    if context:
        error_msg = f"{context} - {error_msg}"

    logger.error(error_msg)
    logger.debug(f"Traceback:\n{traceback.format_exc()}")

    if kwargs:
        logger.error(f"Context: {kwargs}")

