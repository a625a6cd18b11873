"""kubenv: manage named kubeconfig profiles and switch the active one."""
from .config_store import ConfigStore, Profile
from .errors import (
    AlreadyAppliedError,
    CopyError,
    DeleteError,
    DirectoryCreateError,
    DirectoryReadError,
    DirectoryResolutionError,
    DuplicateContentError,
    DuplicateNameError,
    HashError,
    InvalidNameError,
    KubenvError,
    NotFoundError,
    ReadError,
    SettingsError,
    WriteError,
)

__version__ = "0.3.2"

__all__ = [
    "ConfigStore",
    "Profile",
    "KubenvError",
    "AlreadyAppliedError",
    "CopyError",
    "DeleteError",
    "DirectoryCreateError",
    "DirectoryReadError",
    "DirectoryResolutionError",
    "DuplicateContentError",
    "DuplicateNameError",
    "HashError",
    "InvalidNameError",
    "NotFoundError",
    "ReadError",
    "SettingsError",
    "WriteError",
]
