"""Config Store for named kubeconfig profiles.

Handles:
- Discovering ``<name>.kubeconfig`` files in the profile directory
- Name and content (SHA-256) uniqueness of stored profiles
- Sorted listing and detection of the active config
- Import, export, apply and removal of profiles

The in-memory index is rebuilt from disk by ``sync()``. ``import_profile``
and ``remove`` only touch the filesystem; call ``sync()`` again to see
their effect in ``list_profiles()``.

No locking is done: two kubenv processes working on the same directories
at the same time can race.
"""
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..config.paths import (
    ACTIVE_CONFIG_NAME,
    PROFILE_SUFFIX,
    HomeResolver,
    default_home_dir,
    resolve_dirs,
)
from ..errors import (
    AlreadyAppliedError,
    CopyError,
    DeleteError,
    DirectoryCreateError,
    DirectoryReadError,
    DuplicateContentError,
    DuplicateNameError,
    HashError,
    InvalidNameError,
    NotFoundError,
    ReadError,
    WriteError,
)
from ..utils.audit_log import log_change
from ..utils.logging_config import timed
from ..utils.streams import copy_stream
from .digest import digest_bytes, digest_file, short_digest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    """A named, content-hashed config file."""
    name: str
    path: Path
    digest: str
    managed: bool = True  # False for the active config itself

    @classmethod
    def from_file(cls, path: Path, name: Optional[str] = None, managed: bool = True) -> "Profile":
        """Hash ``path`` and build a profile; the name defaults to the digest prefix."""
        digest = digest_file(path)
        return cls(name=name or short_digest(digest), path=Path(path), digest=digest, managed=managed)

    @property
    def short_digest(self) -> str:
        return short_digest(self.digest)


class ConfigStore:
    """
    Manages stored kubeconfig profiles and the active config.

    Directory structure:
        ~/.kube/
        ├── config                 # Active config (owned by kubectl)
        └── kubenv/
            ├── dev.kubeconfig
            └── prod.kubeconfig
    """

    def __init__(
        self,
        profile_dir: Optional[Union[str, Path]] = None,
        kube_dir: Optional[Union[str, Path]] = None,
        home_resolver: HomeResolver = default_home_dir,
        index_active: bool = False,
    ):
        """
        Initialize the config store. Nothing is read or created on disk.

        Args:
            profile_dir: Directory of stored profiles (default: ~/.kube/kubenv)
            kube_dir: Directory holding the active ``config`` (default: ~/.kube)
            home_resolver: Returns the home directory; only called for
                directories not given explicitly
            index_active: Also list the active config under its digest prefix
                when its content is not stored as a profile

        Raises:
            DirectoryResolutionError: If a default directory is needed and
                the home directory cannot be determined
        """
        profile_dir = Path(profile_dir) if profile_dir is not None else None
        kube_dir = Path(kube_dir) if kube_dir is not None else None
        self.profile_dir, self.kube_dir = resolve_dirs(profile_dir, kube_dir, home_resolver)
        self.index_active = index_active

        self._profiles: list[Profile] = []
        self._by_name: dict[str, Profile] = {}
        self._by_digest: dict[str, Profile] = {}
        self._active: Optional[Profile] = None

    @property
    def active_config_path(self) -> Path:
        """File consumed by kubectl as the current configuration."""
        return self.kube_dir / ACTIVE_CONFIG_NAME

    @property
    def active_digest(self) -> Optional[str]:
        """Digest of the active config as of the last sync."""
        return self._active.digest if self._active else None

    # === Synchronization ===

    @timed("sync")
    def sync(self) -> None:
        """Rebuild the index from the profile directory and re-read the active config.

        Raises:
            DirectoryCreateError: If the profile directory cannot be created
            DirectoryReadError: If the profile directory cannot be listed
        """
        self._ensure_profile_dir()
        self._update_profiles()
        self._update_active()

    def _ensure_profile_dir(self) -> None:
        if self.profile_dir.is_dir():
            return
        try:
            self.profile_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(
                f"Cannot create kubenv directory '{self.profile_dir}': {e}"
            ) from e
        logger.info(f"Created profile directory {self.profile_dir}")

    def _update_profiles(self) -> None:
        try:
            # Sorted so that first-seen-wins deduplication does not depend on
            # the filesystem's enumeration order.
            entries = sorted(self.profile_dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise DirectoryReadError(
                f"Cannot read files from directory '{self.profile_dir}': {e}"
            ) from e

        self._profiles.clear()
        self._by_name.clear()
        self._by_digest.clear()
        self._active = None

        for path in entries:
            if not path.name.endswith(PROFILE_SUFFIX) or not path.is_file():
                continue
            try:
                path.name.encode("utf-8")
            except UnicodeEncodeError:
                logger.debug(f"Skipping profile file with undecodable name {path.name!r}")
                continue
            name = path.name[: -len(PROFILE_SUFFIX)]
            try:
                profile = Profile.from_file(path, name=name)
            except HashError as e:
                logger.debug(f"Skipping unreadable profile file: {e}")
                continue
            if not self._add(profile):
                logger.debug(f"Skipping duplicate profile file {path.name}")

        logger.debug(f"Indexed {len(self._profiles)} profiles from {self.profile_dir}")

    def _update_active(self) -> None:
        path = self.active_config_path
        if not path.is_file():
            logger.debug(f"No active config at {path}")
            return
        try:
            active = Profile.from_file(path, managed=False)
        except HashError as e:
            logger.warning(f"Cannot read active config: {e}")
            return

        self._active = active
        if self.index_active:
            self._add(active)

    def _add(self, profile: Profile) -> bool:
        """Insert a profile keeping the list sorted by name.

        Returns False (and leaves the index untouched) when the name or
        digest is already taken.
        """
        if profile.name in self._by_name or profile.digest in self._by_digest:
            return False

        index = len(self._profiles)
        while index > 0 and profile.name < self._profiles[index - 1].name:
            index -= 1
        self._profiles.insert(index, profile)

        self._by_name[profile.name] = profile
        self._by_digest[profile.digest] = profile
        return True

    # === Queries ===

    def list_profiles(self) -> list[Profile]:
        """All indexed profiles sorted by name."""
        return list(self._profiles)

    def current_config(self) -> Optional[Profile]:
        """Indexed profile whose content matches the active config, if any."""
        if self._active is None:
            return None
        return self._by_digest.get(self._active.digest)

    def get_profile(self, name: str) -> Profile:
        """Look up a profile by name.

        Raises:
            NotFoundError: If no profile has this name
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise NotFoundError(name) from None

    # === Mutations ===

    @timed("apply")
    def apply(self, name: str) -> Profile:
        """
        Make a profile the active config.

        The content is written to a temporary file next to the active
        config and renamed over it, so readers never see a partial file.

        Raises:
            NotFoundError: If no profile has this name
            HashError: If the current active config cannot be read
            AlreadyAppliedError: If the active config already has this content
            CopyError: If the profile cannot be copied
        """
        profile = self.get_profile(name)

        active_path = self.active_config_path
        current_digest = digest_file(active_path) if active_path.exists() else None
        if current_digest == profile.digest:
            raise AlreadyAppliedError(name)

        try:
            self._replace_active(profile.path)
        except (OSError, CopyError) as e:
            log_change("apply", name, profile.digest, success=False, error=str(e))
            raise CopyError(
                f"Cannot copy config '{profile.name}' to config file: {e}"
            ) from e

        logger.info(f"Applied profile '{name}' to {active_path}")
        log_change("apply", name, profile.digest)
        return profile

    def _replace_active(self, source: Path) -> None:
        active_path = self.active_config_path
        active_path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=".config.", dir=active_path.parent)
        try:
            with os.fdopen(fd, "wb") as writer, open(source, "rb") as reader:
                copy_stream(reader, writer)
                os.fsync(writer.fileno())
            os.replace(tmp_name, active_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    @timed("import")
    def import_profile(self, content: bytes, name: Optional[str] = None) -> Profile:
        """
        Store new profile content.

        The index is not updated; call ``sync()`` to list the new profile.

        Args:
            content: Raw config bytes
            name: Profile name (default: first 8 hex chars of the digest)

        Returns:
            The written profile

        Raises:
            DuplicateContentError: If a profile with the same content exists
            DuplicateNameError: If the name is taken (indexed or on disk)
            InvalidNameError: If the name cannot be used as a file name
            WriteError: If the file cannot be written
        """
        digest = digest_bytes(content)
        existing = self._by_digest.get(digest)
        # The unstored active config may be indexed; importing it is allowed
        if existing is not None and existing.managed:
            raise DuplicateContentError(existing.name, digest)

        if name is None:
            name = short_digest(digest)
        else:
            validate_name(name)
        named = self._by_name.get(name)
        if named is not None and named.managed:
            raise DuplicateNameError(name)

        path = self.profile_dir / f"{name}{PROFILE_SUFFIX}"
        try:
            with open(path, "xb") as f:
                f.write(content)
        except FileExistsError:
            raise DuplicateNameError(name) from None
        except OSError as e:
            log_change("import", name, digest, success=False, error=str(e))
            raise WriteError(f"Cannot write file '{path}': {e}") from e

        logger.info(f"Imported profile '{name}' ({short_digest(digest)})")
        log_change("import", name, digest)
        return Profile(name=name, path=path, digest=digest)

    def import_stream(self, reader: BinaryIO, name: Optional[str] = None) -> Profile:
        """Read ``reader`` to the end and import its content.

        Raises:
            ReadError: If the stream cannot be read
        """
        try:
            content = reader.read()
        except OSError as e:
            raise ReadError(f"Cannot read content from file: {e}") from e
        return self.import_profile(content, name)

    def get_content(self, name: str) -> bytes:
        """Whole content of a profile.

        Raises:
            NotFoundError: If no profile has this name
            ReadError: If the file cannot be read
        """
        profile = self.get_profile(name)
        try:
            return profile.path.read_bytes()
        except OSError as e:
            raise ReadError(f"Cannot open file '{profile.path}': {e}") from e

    def open_content(self, name: str) -> BinaryIO:
        """Open a profile for reading; the caller closes the stream.

        Raises:
            NotFoundError: If no profile has this name
            ReadError: If the file cannot be opened
        """
        profile = self.get_profile(name)
        try:
            return open(profile.path, "rb")
        except OSError as e:
            raise ReadError(f"Cannot open file '{profile.path}': {e}") from e

    def export_to(self, name: str, writer: BinaryIO) -> int:
        """Stream a profile's content into ``writer``.

        Returns:
            Number of bytes written
        """
        with self.open_content(name) as reader:
            return copy_stream(reader, writer)

    @timed("remove")
    def remove(self, name: str) -> Profile:
        """
        Delete a stored profile's file.

        The index is not updated; call ``sync()`` to drop it from listings.

        Raises:
            NotFoundError: If no profile has this name
            DeleteError: If the file cannot be deleted, or the name refers
                to the active config rather than a stored profile
        """
        profile = self.get_profile(name)
        if not profile.managed:
            raise DeleteError(
                f"Cannot remove config with name '{name}': it is the active config, not a stored profile"
            )

        try:
            profile.path.unlink()
        except OSError as e:
            log_change("remove", name, profile.digest, success=False, error=str(e))
            raise DeleteError(f"Cannot remove config with name '{name}': {e}") from e

        logger.info(f"Removed profile '{name}'")
        log_change("remove", name, profile.digest)
        return profile


def validate_name(name: str) -> None:
    """Reject names that would not map to a single file in the profile directory.

    Raises:
        InvalidNameError: For empty names, names with path separators or NUL
            characters, names starting with a dot, and names that are not
            valid UTF-8
    """
    if not name:
        raise InvalidNameError("Config name must not be empty")
    if "/" in name or (os.sep != "/" and os.sep in name) or (os.altsep and os.altsep in name):
        raise InvalidNameError(f"Config name '{name}' must not contain a path separator")
    if name.startswith("."):
        raise InvalidNameError(f"Config name '{name}' must not start with '.'")
    if "\0" in name:
        raise InvalidNameError(f"Config name {name!r} must not contain a NUL character")
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidNameError(f"Config name {name!r} is not valid UTF-8") from None
