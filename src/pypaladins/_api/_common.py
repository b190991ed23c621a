"""Shared request helpers for the Paladins API.

This module centralizes the request pipeline every endpoint goes through:
- building the ``<method>Json`` URL with its signed prefix
- issuing the GET through the transport
- detecting the in-band ``ret_msg`` soft error and retrying it

It is internal to pypaladins and may change at any time.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pypaladins._constants import INVALID_SESSION_MESSAGES
from pypaladins._crypto.signing import build_signature, build_timestamp
from pypaladins._redact import redact_url
from pypaladins._transport import Transport
from pypaladins.config import PaladinsConfig
from pypaladins.exceptions import PaladinsApiError, PaladinsError

if TYPE_CHECKING:
    from pypaladins.session import SessionManager

_logger = logging.getLogger(__name__)


def format_param(value: Any) -> str:
    """Render one path parameter.

    Enums use their value and sequences are comma-joined for the batch
    endpoints.  Nothing is URL-escaped.
    """
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, (list, tuple)):
        return ",".join(format_param(item) for item in value)
    return str(value)


def build_url(
    base_url: str,
    method: str,
    params: Sequence[Any] = (),
    *,
    auth: Sequence[str] = (),
) -> str:
    """Assemble ``<base>/<method>Json[/<auth>...][/<param>...]``.

    Falsy parameters (``None``, ``0``, ``""``, empty lists) are skipped
    entirely rather than leaving an empty segment.
    """
    segments = [f"{base_url}/{method}Json"]
    segments.extend(auth)
    segments.extend(format_param(value) for value in params if value)
    return "/".join(segments)


def soft_error_message(body: Any) -> str | None:
    """Return the in-band ``ret_msg`` of *body*, if it carries one."""
    if not isinstance(body, Mapping):
        return None
    message = body.get("ret_msg")
    if message is None:
        return None
    return str(message)


def is_invalid_session_message(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in INVALID_SESSION_MESSAGES)


async def request_json(
    method: str,
    params: Sequence[Any] = (),
    *,
    config: PaladinsConfig,
    transport: Transport,
    sessions: SessionManager | None = None,
    authenticated: bool = True,
) -> Any:
    """Call *method* and return its decoded JSON body.

    Each attempt builds a fresh URL (new timestamp, signature and session
    lookup).  A body carrying ``ret_msg`` is retried until
    ``config.max_tries`` attempts have been made.  Transport errors,
    including 404 and 502, propagate immediately.

    Raises
    ------
    PaladinsApiError
        If every attempt returned a ``ret_msg`` soft error.
    """
    if authenticated and sessions is None:
        raise PaladinsError(f"{method} requires a session manager")

    delay = config.retry_delay
    attempt = 1
    while True:
        secrets: tuple[str, ...] = ()
        auth: tuple[str, ...] = ()
        if authenticated:
            assert sessions is not None  # noqa: S101
            session_id = await sessions.get_session_id()
            timestamp = build_timestamp()
            signature = build_signature(config.dev_id, method, config.auth_key, timestamp)
            auth = (config.dev_id, signature, session_id, timestamp)
            secrets = (signature, session_id)
        url = build_url(config.base_url, method, params, auth=auth)

        _logger.debug("GET %s (attempt %d/%d)", redact_url(url, *secrets), attempt, config.max_tries)
        body = await transport.get_json(url)

        message = soft_error_message(body)
        if message is None:
            return body
        if attempt >= config.max_tries:
            raise PaladinsApiError(message, method=method)

        _logger.warning(
            "%s returned ret_msg=%r (attempt %d/%d); retrying",
            method,
            message,
            attempt,
            config.max_tries,
        )
        if sessions is not None and is_invalid_session_message(message):
            sessions.invalidate()
        if delay > 0:
            await asyncio.sleep(delay)
            delay *= config.retry_backoff
        attempt += 1
