"""Helpers for safe debug logging.

Request URLs embed the signature and session id, and createsession
responses echo the session id back.  These helpers mask them before they
reach logs or exception messages.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"


def redact_url(url: str, *secrets: str) -> str:
    """Return *url* with every non-empty secret replaced by a marker."""
    for secret in secrets:
        if secret:
            url = url.replace(secret, REDACTED)
    return url


def mask_session_fields(body: Any) -> Any:
    """Return *body* with a top-level ``session_id`` masked.

    Non-mapping bodies are returned unchanged.
    """
    if not isinstance(body, Mapping):
        return body
    return {key: (REDACTED if str(key).lower() == "session_id" and value else value) for key, value in body.items()}
