"""
RC4 (ARC4) keystream cipher.

The cipher state is a 256-entry permutation table plus two 8-bit cursors.
Two usage modes are provided over the same algorithm:

- stateful: hold an :class:`RC4` instance and feed it data incrementally;
  the keystream position carries over between calls.
- stateless: :func:`apply_keystream_static` schedules a fresh state, runs it
  once over the whole buffer and discards it.

RC4 provides no integrity protection and has well-known keystream biases.
It is kept for compatibility with existing data, not for new designs.
"""

from __future__ import annotations

from collections.abc import Buffer

from .errors import InvalidKeyError

__all__ = [
    "KEY_MIN_SIZE",
    "KEY_MAX_SIZE",
    "RC4",
    "RC4State",
    "apply_keystream",
    "apply_keystream_static",
    "new",
    "schedule_key",
    "validate_key",
]

KEY_MIN_SIZE = 5  #: 40 bits
KEY_MAX_SIZE = 256  #: 2048 bits


class RC4State:
    """Mutable RC4 cipher state.

    Attributes:
        table: Permutation of ``0..255``.
        i: Incrementing stream cursor.
        j: Key-dependent stream cursor.
    """

    __slots__ = ("table", "i", "j")

    def __init__(self, table: bytearray, i: int = 0, j: int = 0) -> None:
        self.table = table
        self.i = i
        self.j = j

    def copy(self) -> RC4State:
        """Return an independent snapshot of this state.

        Continuing both the original and the copy yields the *same* keystream
        twice. Only fork a state when that is what you want.
        """
        return RC4State(bytearray(self.table), self.i, self.j)

    def is_permutation(self) -> bool:
        """Check that ``table`` holds every value ``0..255`` exactly once."""
        return len(self.table) == 256 and len(set(self.table)) == 256

    def __repr__(self) -> str:
        return f"<RC4State i={self.i} j={self.j}>"


def validate_key(key: bytes | bytearray | memoryview) -> bytes:
    """Check the key length and normalize it to ``bytes``.

    Args:
        key: Raw key bytes.

    Returns:
        The key as an immutable ``bytes`` object.

    Raises:
        InvalidKeyError: If the key is not between 5 and 256 bytes long.
    """
    key = bytes(key)
    if not (KEY_MIN_SIZE <= len(key) <= KEY_MAX_SIZE):
        raise InvalidKeyError(
            f"RC4 key must be {KEY_MIN_SIZE}..{KEY_MAX_SIZE} bytes, got {len(key)}"
        )
    return key


def schedule_key(key: bytes | bytearray | memoryview) -> RC4State:
    """Run the Key-Scheduling Algorithm (KSA).

    Args:
        key: RC4 key of 5 to 256 bytes.

    Returns:
        A fresh state with both stream cursors at zero.

    Raises:
        InvalidKeyError: If the key length is out of range.
    """
    key = validate_key(key)
    S = bytearray(range(256))
    j = 0
    klen = len(key)
    for i in range(256):
        j = (j + S[i] + key[i % klen]) & 0xFF
        S[i], S[j] = S[j], S[i]
    return RC4State(S)


def apply_keystream(state: RC4State, buffer: Buffer) -> None:
    """XOR the next ``len(buffer)`` keystream bytes into ``buffer`` in place.

    This is the Pseudo-Random Generation Algorithm (PRGA). The same call
    encrypts and decrypts; ``state`` is advanced by one step per byte.

    Args:
        state: Cipher state, mutated in place.
        buffer: Writable byte buffer (``bytearray`` or writable
            ``memoryview``).

    Raises:
        TypeError: If ``buffer`` is not writable. Raised before ``state``
            is touched.
    """
    view = memoryview(buffer).cast("B")
    if view.readonly:
        raise TypeError("RC4 keystream can only be applied to a writable buffer")

    S = state.table
    i = state.i
    j = state.j
    for idx in range(len(view)):
        i = (i + 1) & 0xFF
        j = (j + S[i]) & 0xFF
        S[i], S[j] = S[j], S[i]
        view[idx] ^= S[(S[i] + S[j]) & 0xFF]
    state.i = i
    state.j = j


class RC4:
    """Stateful RC4 cipher session.

    Each call continues the keystream where the previous one stopped, so
    feeding data in chunks gives the same result as a single call over the
    concatenation.

    Never reuse one session (or one key) for two independent messages: both
    would be XORed with the same keystream, and XORing the two ciphertexts
    cancels it out.
    """

    __slots__ = ("_state",)

    def __init__(self, key: bytes | bytearray | memoryview) -> None:
        """
        Args:
            key: RC4 key bytes, 5 to 256 bytes long.

        Raises:
            InvalidKeyError: If the key length is out of range.
        """
        self._state = schedule_key(key)

    @property
    def state(self) -> RC4State:
        """The cipher state owned by this session."""
        return self._state

    def apply_keystream(self, buffer: Buffer) -> None:
        """Encrypt/decrypt ``buffer`` in place. See :func:`apply_keystream`."""
        apply_keystream(self._state, buffer)

    def crypt(self, data: bytes | bytearray | memoryview) -> bytes:
        """Encrypt/decrypt data, returning a new ``bytes`` object.

        Args:
            data: Input bytes, either plaintext or ciphertext.

        Returns:
            Output bytes after XOR with the RC4 keystream.
        """
        out = bytearray(data)
        apply_keystream(self._state, out)
        return bytes(out)

    def keystream(self, n: int) -> bytes:
        """Return the next ``n`` raw keystream bytes."""
        if n < 0:
            raise ValueError("n must be non-negative")
        out = bytearray(n)
        apply_keystream(self._state, out)
        return bytes(out)


def apply_keystream_static(
    key: bytes | bytearray | memoryview,
    data: bytes | bytearray | memoryview,
) -> bytes:
    """One-shot RC4 over a complete buffer with a freshly scheduled state.

    Equivalent to ``RC4(key).crypt(data)``. The input is left untouched.

    Args:
        key: RC4 key bytes, 5 to 256 bytes long.
        data: Whole plaintext or ciphertext.

    Returns:
        The transformed bytes.

    Raises:
        InvalidKeyError: If the key length is out of range.
    """
    return RC4(key).crypt(data)


def new(key: bytes | bytearray | memoryview) -> RC4:
    """Create a stateful RC4 cipher object.

    Args:
        key: RC4 key bytes, 5 to 256 bytes long.

    Returns:
        A new :class:`RC4` session.
    """
    return RC4(key)
