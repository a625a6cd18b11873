"""Chunked byte copying between files and standard streams."""
from typing import BinaryIO

from ..errors import CopyError

BUF_SIZE = 1024


def copy_stream(reader: BinaryIO, writer: BinaryIO, chunk_size: int = BUF_SIZE) -> int:
    """Copy everything from ``reader`` to ``writer`` in bounded chunks.

    Returns:
        Number of bytes copied

    Raises:
        CopyError: If reading or writing fails
    """
    total = 0
    while True:
        try:
            chunk = reader.read(chunk_size)
        except OSError as e:
            raise CopyError(f"Cannot read: {e}") from e
        if not chunk:
            break
        try:
            writer.write(chunk)
        except OSError as e:
            raise CopyError(f"Cannot write: {e}") from e
        total += len(chunk)

    try:
        writer.flush()
    except OSError as e:
        raise CopyError(f"Cannot write: {e}") from e
    return total
