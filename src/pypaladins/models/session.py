"""Session models."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pypaladins import _clock
from pypaladins._constants import SESSION_APPROVED, SESSION_TTL_SECONDS


class CreateSessionResponse(BaseModel):
    """Body returned by ``createsessionJson``.

    Parameters
    ----------
    ret_msg : str or None
        ``"Approved"`` on success, otherwise the rejection reason.
    session_id : str or None
        The new session id.
    timestamp : str or None
        Remote creation time (informational only).
    """

    model_config = ConfigDict(extra="allow")

    ret_msg: str | None = None
    session_id: str | None = None
    timestamp: str | None = None

    @property
    def approved(self) -> bool:
        return self.ret_msg == SESSION_APPROVED and bool(self.session_id)


class Session(BaseModel):
    """An API session minted by ``createsession``.

    Parameters
    ----------
    session_id : str
        Opaque id sent on every authenticated call.
    created_at : datetime
        Local UTC time the session was created.  Expiry is measured
        against the local clock, never the remote one.
    ttl : float
        Lifetime in seconds.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    session_id: str
    created_at: datetime = Field(default_factory=lambda: _clock.utcnow())
    ttl: float = SESSION_TTL_SECONDS

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(seconds=self.ttl)

    @property
    def is_expired(self) -> bool:
        """Whether the session has outlived its TTL."""
        return _clock.utcnow() >= self.expires_at

    def as_log_dict(self) -> dict[str, Any]:
        return {"created_at": self.created_at.isoformat(), "expires_at": self.expires_at.isoformat()}
