"""Default locations for kube configs and stored profiles.

Layout:
    ~/.kube/
    ├── config            # Active config read by kubectl
    └── kubenv/
        └── <name>.kubeconfig
"""
from pathlib import Path
from typing import Callable, Optional

from ..errors import DirectoryResolutionError

KUBE_DIR_NAME = ".kube"
PROFILE_DIR_NAME = "kubenv"
ACTIVE_CONFIG_NAME = "config"
PROFILE_SUFFIX = ".kubeconfig"

HomeResolver = Callable[[], Path]


def default_home_dir() -> Path:
    """Resolve the current user's home directory.

    Raises:
        DirectoryResolutionError: If no home directory can be determined
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise DirectoryResolutionError(f"Cannot get home directory: {e}") from e


def default_kube_dir(home_resolver: HomeResolver = default_home_dir) -> Path:
    """~/.kube for the resolved home directory."""
    return home_resolver() / KUBE_DIR_NAME


def resolve_dirs(
    profile_dir: Optional[Path] = None,
    kube_dir: Optional[Path] = None,
    home_resolver: HomeResolver = default_home_dir,
) -> tuple[Path, Path]:
    """Resolve (profile_dir, kube_dir), consulting the home directory only
    for whichever of the two was not given explicitly.
    """
    if kube_dir is None:
        kube_dir = default_kube_dir(home_resolver)
    if profile_dir is None:
        profile_dir = default_kube_dir(home_resolver) / PROFILE_DIR_NAME
    return Path(profile_dir), Path(kube_dir)
