"""Logging configuration for kubenv.

Provides:
- Console output on stderr (stdout is reserved for command output)
- Optional file logging with rotation
- A timing decorator feeding the ``kubenv.perf`` logger

Environment Variables:
    KUBENV_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
    KUBENV_LOG_FILE: Path to log file (default: no file logging)
    KUBENV_LOG_MAX_SIZE: Max log file size in MB (default: 10)
    KUBENV_LOG_BACKUPS: Number of backup files to keep (default: 5)

Usage:
    from kubenv.utils.logging_config import setup_logging, timed

    setup_logging()  # Call once at startup

    @timed("sync")
    def sync(self):
        ...
"""
import functools
import logging
import os
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional, Union

# Performance logger - separate from main logger for easy filtering
perf_logger = logging.getLogger("kubenv.perf")
main_logger = logging.getLogger("kubenv")

MAIN_FORMAT = "%(asctime)s.%(msecs)03d | %(name)-25s | %(levelname)-7s | %(message)s"
PERF_FORMAT = "%(asctime)s.%(msecs)03d | PERF | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_level(default: str = "WARNING") -> int:
    """Get log level from environment."""
    level_str = os.environ.get("KUBENV_LOG_LEVEL", default).upper()
    return getattr(logging, level_str, logging.WARNING)


def get_log_file() -> Optional[Path]:
    """Get log file path from environment, if any."""
    path_str = os.environ.get("KUBENV_LOG_FILE")
    return Path(path_str) if path_str else None


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[Path] = None,
) -> None:
    """Configure logging for the application.

    Sets up:
    - Console handler on stderr (respects KUBENV_LOG_LEVEL unless ``level`` given)
    - File handler with rotation when a log file is configured (DEBUG level)
    - Performance logger for timing metrics (file only)

    Calling it again replaces the handlers installed by the previous call.
    """
    if level is None:
        log_level = get_log_level()
    elif isinstance(level, str):
        log_level = getattr(logging, level.upper(), logging.WARNING)
    else:
        log_level = level
    log_file = log_file or get_log_file()
    max_size_mb = int(os.environ.get("KUBENV_LOG_MAX_SIZE", "10"))
    backup_count = int(os.environ.get("KUBENV_LOG_BACKUPS", "5"))

    main_format = logging.Formatter(MAIN_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger("kubenv")
    root_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter
    root_logger.handlers.clear()
    perf_logger.handlers.clear()
    perf_logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(main_format)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(main_format)
        root_logger.addHandler(file_handler)

        perf_handler = RotatingFileHandler(
            log_file.parent / f"{log_file.stem}-perf.log",
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        perf_handler.setLevel(logging.DEBUG)
        perf_handler.setFormatter(logging.Formatter(PERF_FORMAT, datefmt=DATE_FORMAT))
        perf_logger.setLevel(logging.DEBUG)
        perf_logger.addHandler(perf_handler)
    else:
        perf_logger.addHandler(logging.NullHandler())

    root_logger.debug(
        f"Logging initialized: level={logging.getLevelName(log_level)}, file={log_file}"
    )


def timed(operation: str):
    """Decorator to log execution time of a store operation.

    The first positional argument after ``self`` (usually a profile name)
    is included in the log line when it is a string.

    Usage:
        @timed("apply")
        def apply(self, name):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            subject = args[1] if len(args) > 1 and isinstance(args[1], str) else None

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                elapsed = (time.perf_counter() - start) * 1000  # ms
                perf_logger.info(
                    f"{operation:15s} | {subject or 'N/A':20s} | {elapsed:8.2f}ms | OK"
                )
                return result
            except Exception as e:
                elapsed = (time.perf_counter() - start) * 1000
                perf_logger.warning(
                    f"{operation:15s} | {subject or 'N/A':20s} | {elapsed:8.2f}ms | FAIL: {e}"
                )
                raise

        return wrapper

    return decorator
