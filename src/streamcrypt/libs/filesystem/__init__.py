"""
Filesystem utilities for rewriting files in place.
"""

__all__ = [
    "read_bytes",
    "rewrite_bytes",
    "transform_in_place",
]

from .inplace import read_bytes, rewrite_bytes, transform_in_place
