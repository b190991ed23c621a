"""Custom exception hierarchy for pypaladins."""

from __future__ import annotations


class PaladinsError(Exception):
    """Base exception for all pypaladins errors."""


class PaladinsConfigError(PaladinsError):
    """Invalid or missing configuration."""


class PaladinsTransportError(PaladinsError):
    """HTTP-level failure (network, unexpected status, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class PaladinsNotFoundError(PaladinsTransportError):
    """The API answered HTTP 404 for the requested URL."""


class PaladinsProxyError(PaladinsTransportError):
    """The API answered HTTP 502 (upstream proxy failure)."""


class PaladinsApiError(PaladinsError):
    """The API reported an in-band error through ``ret_msg``.

    Raised once the soft-error retries are exhausted.  ``message`` holds
    the remote text verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
    ) -> None:
        self.message = message
        self.method = method
        super().__init__(message)


class PaladinsSessionError(PaladinsApiError):
    """Session creation was rejected or the response was malformed."""


class PaladinsInvalidArgumentError(PaladinsError, ValueError):
    """A caller-supplied argument cannot be turned into a valid request.

    Covers player identifiers that are neither a name nor an integer id,
    and player names that do not resolve on the requested platform.
    """
