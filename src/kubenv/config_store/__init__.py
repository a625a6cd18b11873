"""Configuration Store package for managing kubeconfig profiles.

This package provides:
- ConfigStore: Index over the profile directory plus import/export/apply/remove
- Profile: A stored config identified by name and SHA-256 digest

Directory structure managed:
    ~/.kube/
    ├── config            # Active config, read and overwritten only
    └── kubenv/           # Stored profiles, owned by the store
        └── <name>.kubeconfig
"""

from .digest import digest_bytes, digest_file, short_digest
from .store import ConfigStore, Profile, validate_name

__all__ = [
    "ConfigStore",
    "Profile",
    "validate_name",
    "digest_bytes",
    "digest_file",
    "short_digest",
]
