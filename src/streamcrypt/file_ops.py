"""
File-level encryption operations.

Every operation rewrites the target file in place. The rewrite is not
transactional: an interruption after truncation can leave a partial file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from streamcrypt.libs.crypto import aead
from streamcrypt.libs.crypto.errors import AuthenticationError, FormatError
from streamcrypt.libs.crypto.rc4 import RC4
from streamcrypt.libs.filesystem import read_bytes, rewrite_bytes, transform_in_place

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


def rc4_file(
    path: str | Path,
    key: bytes,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """En/decrypt a file with RC4 in place.

    The same call encrypts and decrypts. The key is validated before the
    file is opened.

    Args:
        path: File to transform.
        key: RC4 key, 5 to 256 bytes.
        chunk_size: Bytes processed per read/write step.

    Returns:
        Number of bytes processed.

    Raises:
        InvalidKeyError: If the key length is out of range.
        FileNotFoundError: If the file does not exist.
    """
    cipher = RC4(key)
    n = transform_in_place(path, cipher.apply_keystream, chunk_size)
    logger.info("RC4 processed %d bytes: %s", n, path)
    return n


def encrypt_file(path: str | Path, key: bytes) -> int:
    """Encrypt a file with ChaCha20-Poly1305.

    The file is replaced by ``nonce || ciphertext || tag`` using a fresh
    random nonce.

    Returns:
        Size of the encrypted file in bytes.

    Raises:
        InvalidKeyError: If the key is not 32 bytes.
        FileNotFoundError: If the file does not exist.
    """
    plaintext = read_bytes(path)
    blob = aead.encrypt(key, plaintext)
    rewrite_bytes(path, blob)
    logger.info("Encrypted %d -> %d bytes: %s", len(plaintext), len(blob), path)
    return len(blob)


def decrypt_file(path: str | Path, key: bytes) -> int:
    """Decrypt a file produced by :func:`encrypt_file`.

    The file is only rewritten once the tag has been verified; on any
    failure it is left untouched.

    Returns:
        Size of the recovered plaintext in bytes.

    Raises:
        InvalidKeyError: If the key is not 32 bytes.
        FormatError: If the file is too short to contain a nonce.
        AuthenticationError: If the tag does not verify.
        FileNotFoundError: If the file does not exist.
    """
    blob = read_bytes(path)
    try:
        plaintext = aead.decrypt(key, blob)
    except FormatError:
        logger.warning("File too short to contain a nonce: %s", path)
        raise
    except AuthenticationError:
        logger.warning("Authentication failed, file left unchanged: %s", path)
        raise
    rewrite_bytes(path, plaintext)
    logger.info("Decrypted %d -> %d bytes: %s", len(blob), len(plaintext), path)
    return len(plaintext)


def keygen() -> bytes:
    """Generate a fresh 256-bit ChaCha20-Poly1305 key."""
    return aead.generate_key()
