"""Default paths and user settings."""
from .paths import (
    ACTIVE_CONFIG_NAME,
    PROFILE_SUFFIX,
    default_home_dir,
    default_kube_dir,
    resolve_dirs,
)
from .settings import Settings, load_settings

__all__ = [
    "ACTIVE_CONFIG_NAME",
    "PROFILE_SUFFIX",
    "default_home_dir",
    "default_kube_dir",
    "resolve_dirs",
    "Settings",
    "load_settings",
]
