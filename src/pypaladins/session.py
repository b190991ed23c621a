"""Session lifecycle for authenticated API calls.

The API requires a session id on nearly every call.  Sessions are minted
by ``createsession`` and stay valid for 12 minutes; the number of sessions
a developer may open per day is capped, so the id is cached and reused
until it expires.

Storage goes through the :class:`SessionCache` capability.  Callers can
plug in any key/value store with expiry; without one the client falls back
to :class:`InMemorySessionCache`.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Protocol

from pydantic import ValidationError

from pypaladins import _clock
from pypaladins._api._common import build_url
from pypaladins._constants import CREATE_SESSION_METHOD
from pypaladins._crypto.signing import build_signature, build_timestamp
from pypaladins._redact import mask_session_fields, redact_url
from pypaladins._transport import Transport
from pypaladins.config import PaladinsConfig
from pypaladins.exceptions import PaladinsSessionError, PaladinsTransportError
from pypaladins.models.session import CreateSessionResponse, Session

_logger = logging.getLogger(__name__)


class SessionCache(Protocol):
    """Minimal key/value store with per-entry expiry.

    ``contains`` must report ``False`` for expired entries.
    """

    def contains(self, key: str) -> bool: ...

    def fetch(self, key: str) -> Any: ...

    def save(self, key: str, value: Any, expires_at: datetime) -> None: ...


class InMemorySessionCache:
    """Process-local :class:`SessionCache` used when none is supplied."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[Any, datetime]] = {}

    def contains(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return False
        if _clock.utcnow() >= entry[1]:
            del self._entries[key]
            return False
        return True

    def fetch(self, key: str) -> Any:
        if not self.contains(key):
            return None
        return self._entries[key][0]

    def save(self, key: str, value: Any, expires_at: datetime) -> None:
        self._entries[key] = (value, expires_at)


class SessionManager:
    """Resolve, create and invalidate the cached session id.

    The manager holds no token itself; the cache alone decides whether a
    session is live.  Refresh is single-flight: coroutines that find the
    session missing wait on one lock and re-check the cache, so only the
    first of them calls ``createsession``.
    """

    def __init__(self, config: PaladinsConfig, transport: Transport, cache: SessionCache) -> None:
        self._config = config
        self._transport = transport
        self._cache = cache
        self._lock = asyncio.Lock()

    @property
    def cache_key(self) -> str:
        return self._config.session_cache_key

    def cached_session_id(self) -> str | None:
        """The live session id, or ``None`` if absent or expired."""
        if not self._cache.contains(self.cache_key):
            return None
        value = self._cache.fetch(self.cache_key)
        if not value:
            return None
        return str(value)

    async def get_session_id(self) -> str:
        """Return a live session id, creating one if needed."""
        session_id = self.cached_session_id()
        if session_id is not None:
            return session_id

        async with self._lock:
            session_id = self.cached_session_id()
            if session_id is not None:
                return session_id
            session = await self.create_session()
            self._cache.save(self.cache_key, session.session_id, session.expires_at)
            return session.session_id

    async def create_session(self) -> Session:
        """Mint a new session with ``createsession``.

        Does not touch the cache.

        Raises
        ------
        PaladinsSessionError
            If the request fails, the body is malformed, or ``ret_msg``
            is anything but ``"Approved"``.
        """
        config = self._config
        timestamp = build_timestamp()
        signature = build_signature(config.dev_id, CREATE_SESSION_METHOD, config.auth_key, timestamp)
        url = build_url(config.base_url, CREATE_SESSION_METHOD, auth=(config.dev_id, signature, timestamp))

        _logger.debug("Creating session: GET %s", redact_url(url, signature))
        try:
            body = await self._transport.get_json(url)
        except PaladinsTransportError as exc:
            raise PaladinsSessionError(str(exc), method=CREATE_SESSION_METHOD) from exc

        try:
            response = CreateSessionResponse.model_validate(body)
        except ValidationError as exc:
            raise PaladinsSessionError(
                f"Malformed createsession response: {mask_session_fields(body)!r}",
                method=CREATE_SESSION_METHOD,
            ) from exc

        if not response.approved or response.session_id is None:
            raise PaladinsSessionError(
                response.ret_msg or "Session was not approved",
                method=CREATE_SESSION_METHOD,
            )

        session = Session(session_id=response.session_id, ttl=config.session_ttl)
        _logger.debug("Session created %s", session.as_log_dict())
        return session

    def invalidate(self) -> None:
        """Forget the cached session; the next call creates a new one."""
        _logger.debug("Invalidating cached session")
        self._cache.save(self.cache_key, None, _clock.utcnow())
