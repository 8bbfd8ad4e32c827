from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from .errors import KeyFormatError

logger = logging.getLogger(__name__)

_HEX_BYTE_RE = re.compile(r"(?:0[xX])?([0-9a-fA-F]{1,2})")


def parse_hex_key(tokens: Iterable[str]) -> bytes:
    """Decode a key given as one hexadecimal token per byte.

    Each token may carry an optional ``0x`` prefix, e.g.
    ``["0x01", "02", "a"]`` -> ``b"\\x01\\x02\\x0a"``.

    Args:
        tokens: Hex byte tokens in key order.

    Returns:
        The raw key bytes.

    Raises:
        KeyFormatError: If any token is not a single hex byte.
    """
    out = bytearray()
    for pos, token in enumerate(tokens):
        m = _HEX_BYTE_RE.fullmatch(token.strip())
        if m is None:
            raise KeyFormatError(f"Invalid key hex byte at position {pos}: {token!r}")
        out.append(int(m.group(1), 16))
    return bytes(out)


def format_hex_key(key: bytes) -> str:
    """Render key bytes as space-separated lowercase hex, e.g. ``"0a ff 01"``."""
    return " ".join(f"{b:02x}" for b in key)


def load_key_file(path: str | Path) -> bytes:
    """Read a key file written by :func:`save_key_file`.

    Args:
        path: Path to a text file of whitespace-separated hex bytes.

    Returns:
        The raw key bytes.

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyFormatError: If the file content is not a valid hex key.
    """
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(f"Key file not found: {p}")
    logger.debug("Loading key from: %s", p)
    return parse_hex_key(p.read_text(encoding="utf-8").split())


def save_key_file(key: bytes, path: str | Path) -> Path:
    """Write ``key`` as hex text, creating parent directories as needed.

    Returns:
        The resolved path written to.
    """
    p = Path(path).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(format_hex_key(key) + "\n", encoding="utf-8")
    logger.info("Key saved to: %s", p)
    return p
