"""Audit logging for profile changes.

Every mutation of the profile directory or the active config (import,
apply, remove) is written as one JSON line to a dedicated audit logger.
"""
import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

# Create dedicated audit logger
audit_logger = logging.getLogger("kubenv.audit")
# Silent until setup_audit_logging attaches a file
audit_logger.addHandler(logging.NullHandler())
audit_logger.propagate = False


def setup_audit_logging(log_file: Union[str, Path]) -> None:
    """Configure audit logging to file.

    Args:
        log_file: Path of the audit log (parent directories are created)
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    audit_logger.setLevel(logging.INFO)
    audit_logger.handlers.clear()

    handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=10,
        encoding="utf-8",
    )
    # One JSON document per line
    handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(handler)

    # Don't propagate to the console
    audit_logger.propagate = False


@dataclass
class ChangeRecord:
    """Record of a profile change."""
    timestamp: str
    operation: str  # import, apply, remove
    name: str
    digest: Optional[str]
    success: bool
    error: Optional[str] = None

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(asdict(self), indent=None)

    @classmethod
    def from_json(cls, json_str: str) -> "ChangeRecord":
        """Parse from JSON string."""
        data = json.loads(json_str)
        return cls(**data)


def log_change(
    operation: str,
    name: str,
    digest: Optional[str],
    success: bool = True,
    error: Optional[str] = None,
) -> ChangeRecord:
    """Log a profile change.

    Args:
        operation: The operation performed (e.g., "apply")
        name: Profile name the operation targeted
        digest: Content digest of the profile, when known
        success: Whether the operation succeeded
        error: Error message if failed

    Returns:
        The ChangeRecord that was logged
    """
    record = ChangeRecord(
        timestamp=datetime.now(timezone.utc).isoformat(),
        operation=operation,
        name=name,
        digest=digest,
        success=success,
        error=error,
    )
    audit_logger.info(record.to_json())
    return record


def get_recent_changes(
    log_file: Union[str, Path],
    operation: Optional[str] = None,
    limit: int = 100,
) -> list[ChangeRecord]:
    """Read recent changes from an audit log.

    Args:
        log_file: Path to the audit log
        operation: Filter by operation type
        limit: Maximum number of records to return

    Returns:
        List of ChangeRecords, most recent first
    """
    log_file = Path(log_file)
    if not log_file.exists():
        return []

    records = []
    with open(log_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                record = ChangeRecord.from_json(line)
            except (json.JSONDecodeError, TypeError):
                continue  # Skip malformed lines

            if operation and record.operation != operation:
                continue
            records.append(record)

    return list(reversed(records[-limit:]))
