"""
Data contracts and type definitions.
"""

__all__ = [
    "AEADConfig",
    "GeneralConfig",
    "RC4Config",
]

from .config import AEADConfig, GeneralConfig, RC4Config
