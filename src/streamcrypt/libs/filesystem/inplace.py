"""
In-place file rewriting.

None of these helpers are atomic: a crash between truncation and the final
write leaves the file partially rewritten.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

BufferTransform = Callable[[bytearray], None]


def read_bytes(path: str | Path) -> bytes:
    """Read the entire contents of ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    with Path(path).open("rb") as f:
        return f.read()


def rewrite_bytes(path: str | Path, data: bytes) -> None:
    """Replace the contents of an existing file with ``data``.

    The file is opened read/write (it must already exist), rewound,
    truncated and then written.

    Args:
        path: Existing file to overwrite.
        data: New file contents.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    with Path(path).open("r+b") as f:
        f.seek(0)
        f.truncate(0)
        f.write(data)
    logger.debug("Rewrote %d bytes to %s", len(data), path)


def transform_in_place(
    path: str | Path,
    transform: BufferTransform,
    chunk_size: int = 65536,
) -> int:
    """Apply a length-preserving transform to a file, chunk by chunk.

    Each chunk is read into a ``bytearray``, passed to ``transform`` (which
    must modify it in place without changing its length) and written back
    at the offset it was read from.

    Args:
        path: Existing file to transform.
        transform: Callable mutating a chunk in place.
        chunk_size: Bytes per chunk. Must be positive.

    Returns:
        Total number of bytes processed.

    Raises:
        ValueError: If ``chunk_size`` is not positive or the transform
            changed a chunk's length.
        FileNotFoundError: If the file does not exist.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    total = 0
    with Path(path).open("r+b") as f:
        while chunk := f.read(chunk_size):
            buf = bytearray(chunk)
            transform(buf)
            if len(buf) != len(chunk):
                raise ValueError("transform must preserve chunk length")
            f.seek(total)
            f.write(buf)
            total += len(buf)
            f.seek(total)
    logger.debug("Transformed %d bytes in %s", total, path)
    return total
