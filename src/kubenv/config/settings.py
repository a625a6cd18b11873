"""User settings loaded from YAML and the environment.

Example ``~/.config/kubenv/config.yaml``:

```yaml
dir: ~/.kube/kubenv
kube_dir: ~/.kube
index_active: true
log_level: INFO
log_file: ~/.cache/kubenv/kubenv.log
audit_log: ~/.cache/kubenv/audit.log
```

Precedence (lowest to highest): built-in defaults, settings file,
environment variables, explicit overrides (command-line flags).
"""
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import SettingsError

logger = logging.getLogger(__name__)

SETTINGS_ENV = "KUBENV_CONFIG"

# Environment variable -> settings key
ENV_OVERRIDES = {
    "KUBENV_DIR": "dir",
    "KUBENV_KUBE_DIR": "kube_dir",
    "KUBE_DIR": "kube_dir",
    "KUBENV_INDEX_ACTIVE": "index_active",
    "KUBENV_LOG_LEVEL": "log_level",
    "KUBENV_LOG_FILE": "log_file",
    "KUBENV_AUDIT_LOG": "audit_log",
}

_PATH_KEYS = ("dir", "kube_dir", "log_file", "audit_log")
_TRUE_STRINGS = ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Resolved kubenv settings. ``None`` paths mean "use the default"."""
    dir: Optional[Path] = None
    kube_dir: Optional[Path] = None
    index_active: bool = False
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    audit_log: Optional[Path] = None
    source: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Optional[Path] = None) -> "Settings":
        known = {f.name for f in fields(cls)} - {"source"}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown setting '{key}' in {source}")
                continue
            values[key] = _coerce(key, value)
        return cls(source=source, **values)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Copy with every non-None override applied."""
        values = {k: _coerce(k, v) for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def _coerce(key: str, value: Any) -> Any:
    if value is None:
        return None
    if key in _PATH_KEYS:
        return Path(os.path.expanduser(str(value)))
    if key == "index_active":
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)
    if key == "log_level":
        return str(value).upper()
    return value


def find_settings_file() -> Optional[Path]:
    """Find the settings file, if one exists."""
    env_path = os.environ.get(SETTINGS_ENV)
    if env_path:
        return Path(os.path.expanduser(env_path))

    try:
        candidate = Path.home() / ".config" / "kubenv" / "config.yaml"
    except (RuntimeError, KeyError):
        return None
    return candidate if candidate.exists() else None


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from a YAML file, then apply environment overrides.

    Args:
        path: Explicit settings file. If None, $KUBENV_CONFIG or
              ~/.config/kubenv/config.yaml is used when present.

    Raises:
        SettingsError: If the file cannot be read or is not a YAML mapping
    """
    settings_path = Path(path) if path is not None else find_settings_file()

    settings = Settings()
    if settings_path is not None:
        try:
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise SettingsError(f"Cannot read settings file '{settings_path}': {e}") from e
        except yaml.YAMLError as e:
            raise SettingsError(f"Invalid YAML in settings file '{settings_path}': {e}") from e

        if not isinstance(data, dict):
            raise SettingsError(f"Settings file '{settings_path}' must contain a mapping")
        settings = Settings.from_dict(data, source=settings_path)
        logger.debug(f"Loaded settings from {settings_path}")

    env_values = {}
    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            env_values[key] = value
    return settings.with_overrides(**env_values)
