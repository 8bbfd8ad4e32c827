class CryptoError(Exception):
    """Base class for all encryption and decryption failures."""


class InvalidKeyError(CryptoError, ValueError):
    """Key material rejected before any cipher state was touched."""


class KeyFormatError(CryptoError, ValueError):
    """A textual key token could not be decoded into a byte."""


class AuthenticationError(CryptoError):
    """Authentication tag did not verify; no plaintext is released."""


class FormatError(CryptoError):
    """Framed data is malformed (e.g. too short to hold a nonce)."""
