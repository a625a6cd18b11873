"""Error types raised by kubenv.

Every failure surfaced to a caller is a KubenvError subclass carrying a
human-readable message, so the CLI can print it without a traceback.
"""
from typing import Optional


class KubenvError(Exception):
    """Base class for all kubenv errors."""


class DirectoryResolutionError(KubenvError):
    """A default directory could not be determined (no home directory)."""


class DirectoryCreateError(KubenvError):
    """The profile directory could not be created."""


class DirectoryReadError(KubenvError):
    """The profile directory could not be enumerated."""


class NotFoundError(KubenvError):
    """No profile with the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot find config with name '{name}'")


class DuplicateNameError(KubenvError):
    """A profile with the requested name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Config with name '{name}' already exists")


class DuplicateContentError(KubenvError):
    """A profile with identical content already exists."""

    def __init__(self, existing_name: str, digest: str):
        self.existing_name = existing_name
        self.digest = digest
        super().__init__(f"Config already exists with name '{existing_name}'")


class AlreadyAppliedError(KubenvError):
    """The requested profile is already the active config."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Config '{name}' already applied")


class InvalidNameError(KubenvError):
    """A profile name that cannot be used as a file name."""


class ReadError(KubenvError):
    pass


class WriteError(KubenvError):
    pass


class DeleteError(KubenvError):
    pass


class CopyError(KubenvError):
    pass


class HashError(KubenvError):
    """The digest of a file could not be computed."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class SettingsError(KubenvError):
    """The settings file exists but cannot be parsed."""
