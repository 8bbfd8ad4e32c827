from __future__ import annotations

from typing import Any

from streamcrypt.schemas import AEADConfig, GeneralConfig, RC4Config


class ConfigAdapter:
    """Typed accessor over a loaded configuration mapping.

    Each section (``general``, ``rc4``, ``aead``) is optional; missing keys
    fall back to the dataclass defaults.

    Args:
        config (dict[str, Any]): Loaded configuration mapping.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping."""
        return self._config

    def get_general_config(self) -> GeneralConfig:
        """Build a GeneralConfig from the ``general`` section.

        Returns:
            GeneralConfig: Resolved general settings.
        """
        cfg = self._section("general")
        return GeneralConfig(
            log_level=str(cfg.get("log_level") or "INFO").upper(),
            log_dir=cfg.get("log_dir") or None,
        )

    def get_rc4_config(self) -> RC4Config:
        """Build an RC4Config from the ``rc4`` section.

        Returns:
            RC4Config: Resolved RC4 settings.

        Raises:
            ValueError: If ``chunk_size`` is not a positive integer.
        """
        cfg = self._section("rc4")
        chunk_size = int(cfg.get("chunk_size", 65536))
        if chunk_size <= 0:
            raise ValueError(f"rc4.chunk_size must be positive, got {chunk_size}")
        return RC4Config(chunk_size=chunk_size)

    def get_aead_config(self) -> AEADConfig:
        """Build an AEADConfig from the ``aead`` section.

        Returns:
            AEADConfig: Resolved AEAD settings.
        """
        cfg = self._section("aead")
        return AEADConfig(key_file=cfg.get("key_file") or None)

    def _section(self, name: str) -> dict[str, Any]:
        section = self._config.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{name}' must be a table")
        return section
