"""Hash functions for Paladins API request signing."""

from __future__ import annotations

import hashlib


def md5_hex(value: str) -> str:
    """Compute MD5 of a UTF-8 string, returning lowercase hex.

    Parameters
    ----------
    value : str
        The string to hash.

    Returns
    -------
    str
        32-character lowercase hex digest, the form the API compares
        signatures against.
    """
    return hashlib.md5(value.encode("utf-8")).hexdigest()
