"""Logging, audit and stream helpers."""
from .audit_log import ChangeRecord, get_recent_changes, log_change, setup_audit_logging
from .logging_config import perf_logger, setup_logging, timed
from .streams import copy_stream

__all__ = [
    "ChangeRecord",
    "get_recent_changes",
    "log_change",
    "setup_audit_logging",
    "perf_logger",
    "setup_logging",
    "timed",
    "copy_stream",
]
