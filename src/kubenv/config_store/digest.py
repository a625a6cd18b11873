"""SHA-256 content digests for profile files."""
import hashlib
from pathlib import Path
from typing import Union

from ..errors import HashError

CHUNK_SIZE = 64 * 1024
SHORT_DIGEST_LEN = 8


def digest_bytes(content: bytes) -> str:
    """Hex SHA-256 of an in-memory buffer."""
    return hashlib.sha256(content).hexdigest()


def digest_file(path: Union[str, Path]) -> str:
    """Hex SHA-256 of a file's content, read in chunks.

    Raises:
        HashError: If the file cannot be opened or read
    """
    sha = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                sha.update(chunk)
    except OSError as e:
        raise HashError(f"Cannot get hash from file '{path}': {e}", path=str(path)) from e
    return sha.hexdigest()


def short_digest(digest: str) -> str:
    """Display/default-name prefix of a digest."""
    return digest[:SHORT_DIGEST_LEN]
