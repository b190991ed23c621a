"""Request signing for the Paladins API.

Every authenticated URL carries a timestamp at minute granularity and an
MD5 signature over ``devId + method + authKey + timestamp``.  The server
rejects signatures whose timestamp is outside the current minute, so both
values are computed fresh for every request.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pypaladins import _clock
from pypaladins._crypto.hashing import md5_hex

_TIMESTAMP_FORMAT = "%Y%m%d%H%M"


def build_timestamp(now: datetime | None = None) -> str:
    """Format *now* (default: current UTC time) as ``YYYYMMDDHHMM00``.

    Naive datetimes are taken to be UTC already.
    """
    if now is None:
        now = _clock.utcnow()
    elif now.tzinfo is not None:
        now = now.astimezone(UTC)
    return now.strftime(_TIMESTAMP_FORMAT) + "00"


def build_signature(dev_id: str, method: str, auth_key: str, timestamp: str) -> str:
    """Sign a request for *method*.

    Parameters
    ----------
    dev_id : str
        Developer id issued by Hi-Rez.
    method : str
        Remote method name without the ``Json`` suffix (e.g. ``"getplayer"``).
    auth_key : str
        Developer authorization key.
    timestamp : str
        Value from :func:`build_timestamp`; the same value must be sent
        in the URL.

    Returns
    -------
    str
        Lowercase hex MD5 digest.
    """
    return md5_hex(f"{dev_id}{method}{auth_key}{timestamp}")
