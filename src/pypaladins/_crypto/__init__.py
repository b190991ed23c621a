"""Signing primitives for Paladins API communication."""

from __future__ import annotations

from pypaladins._crypto.hashing import md5_hex
from pypaladins._crypto.signing import build_signature, build_timestamp

__all__ = [
    "build_signature",
    "build_timestamp",
    "md5_hex",
]
