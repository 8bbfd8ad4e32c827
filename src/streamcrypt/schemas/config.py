"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass
class GeneralConfig:
    """Application-wide settings.

    Attributes:
        log_level: Logging level name.
        log_dir: Directory for the rotating log file, or None for console only.
    """

    log_level: str = "INFO"
    log_dir: str | None = None


@dataclass
class RC4Config:
    """Settings for in-place RC4 file processing.

    Attributes:
        chunk_size: Bytes processed per read/write step.
    """

    chunk_size: int = 65536


@dataclass
class AEADConfig:
    """Settings for ChaCha20-Poly1305 file encryption.

    Attributes:
        key_file: Default key file used when no key is given explicitly.
    """

    key_file: str | None = None
