"""
ChaCha20-Poly1305 (RFC 8439) authenticated encryption with nonce framing.

Framed layout produced by :func:`encrypt` and consumed by :func:`decrypt`::

    nonce (12 bytes) || ciphertext || tag (16 bytes)

The primitive itself is provided by pycryptodome.
"""

from __future__ import annotations

from Crypto.Cipher import ChaCha20_Poly1305
from Crypto.Random import get_random_bytes

from .errors import AuthenticationError, FormatError, InvalidKeyError

KEY_SIZE = 32  #: 256-bit key
NONCE_SIZE = 12  #: 96-bit nonce
TAG_SIZE = 16  #: Poly1305 tag


def generate_key() -> bytes:
    """Return a fresh random 256-bit key."""
    return get_random_bytes(KEY_SIZE)


def generate_nonce() -> bytes:
    """Return a fresh random 96-bit nonce."""
    return get_random_bytes(NONCE_SIZE)


def _check_key(key: bytes) -> bytes:
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise InvalidKeyError(
            f"ChaCha20-Poly1305 key must be {KEY_SIZE} bytes, got {len(key)}"
        )
    return key


def seal(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """Encrypt and authenticate ``plaintext``.

    Args:
        key: 32-byte key.
        nonce: 12-byte nonce. Must never repeat under the same key.
        plaintext: Data to encrypt.

    Returns:
        ``ciphertext || tag``.

    Raises:
        InvalidKeyError: If the key length is wrong.
        ValueError: If the nonce length is wrong.
    """
    key = _check_key(key)
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    cipher = ChaCha20_Poly1305.new(key=key, nonce=bytes(nonce))
    ct, tag = cipher.encrypt_and_digest(bytes(plaintext))
    return ct + tag


def open_sealed(key: bytes, nonce: bytes, sealed: bytes) -> bytes:
    """Verify and decrypt ``ciphertext || tag``.

    Args:
        key: 32-byte key.
        nonce: 12-byte nonce used when sealing.
        sealed: Output of :func:`seal`.

    Returns:
        The plaintext.

    Raises:
        InvalidKeyError: If the key length is wrong.
        AuthenticationError: If the tag does not verify.
    """
    key = _check_key(key)
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    if len(sealed) < TAG_SIZE:
        raise AuthenticationError("Decryption failed: ciphertext shorter than tag")

    ct, tag = bytes(sealed[:-TAG_SIZE]), bytes(sealed[-TAG_SIZE:])
    cipher = ChaCha20_Poly1305.new(key=key, nonce=bytes(nonce))
    try:
        return cipher.decrypt_and_verify(ct, tag)
    except ValueError as e:
        raise AuthenticationError("Decryption failed: tag mismatch") from e


def encrypt(key: bytes, plaintext: bytes, nonce: bytes | None = None) -> bytes:
    """Encrypt ``plaintext`` into a framed blob.

    Args:
        key: 32-byte key.
        plaintext: Data to encrypt.
        nonce: Optional explicit nonce; a random one is generated if ``None``.

    Returns:
        ``nonce || ciphertext || tag``.
    """
    if nonce is None:
        nonce = generate_nonce()
    return bytes(nonce) + seal(key, nonce, plaintext)


def decrypt(key: bytes, blob: bytes) -> bytes:
    """Decrypt a blob produced by :func:`encrypt`.

    Raises:
        InvalidKeyError: If the key length is wrong.
        FormatError: If ``blob`` is too short to contain a nonce.
        AuthenticationError: If the tag does not verify.
    """
    if len(blob) < NONCE_SIZE:
        raise FormatError("Data too short to contain a nonce")
    return open_sealed(key, blob[:NONCE_SIZE], blob[NONCE_SIZE:])
