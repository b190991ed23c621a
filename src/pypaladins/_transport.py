"""HTTP transport for the Paladins API."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pypaladins._constants import USER_AGENT
from pypaladins.config import PaladinsConfig
from pypaladins.exceptions import PaladinsNotFoundError, PaladinsProxyError, PaladinsTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the request executor.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed transport that maps status codes to typed errors.

    Bad statuses never raise inside aiohttp; they are inspected here so
    404 and 502 surface as their own exception types.
    """

    def __init__(self, config: PaladinsConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, url: str) -> Any:
        """GET *url* and return the decoded JSON body.

        Raises
        ------
        PaladinsNotFoundError
            On HTTP 404.
        PaladinsProxyError
            On HTTP 502.
        PaladinsTransportError
            On network failure or a body that is not JSON.
        """
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout, raise_for_status=False) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise PaladinsTransportError(f"Request failed: {exc}", url=url) from exc
        except TimeoutError as exc:
            raise PaladinsTransportError(
                f"Request timed out after {self._config.request_timeout}s",
                url=url,
            ) from exc

        _logger.debug("HTTP %d (%d bytes)", status, len(text))

        if status == 404:
            raise PaladinsNotFoundError(f"Resource was not found. URL - {url}", status_code=status, url=url)
        if status == 502:
            raise PaladinsProxyError(f"Proxy error. URL - {url}", status_code=status, url=url)

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise PaladinsTransportError(
                f"Invalid JSON (HTTP {status}): {text[:200]}",
                status_code=status,
                url=url,
            ) from exc
