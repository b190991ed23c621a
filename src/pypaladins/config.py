"""Client configuration for pypaladins."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pypaladins._constants import BASE_URL, DEFAULT_MAX_TRIES, SESSION_CACHE_SUFFIX, SESSION_TTL_SECONDS
from pypaladins.exceptions import PaladinsConfigError
from pypaladins.models.enums import Language


@dataclasses.dataclass(frozen=True)
class PaladinsConfig:
    """Client configuration.

    Parameters
    ----------
    dev_id : str
        Developer id issued by Hi-Rez / Evil Mojo.
    auth_key : str
        Developer authorization key.
    base_url : str
        API base URL, without a trailing slash.
    language : int
        Default language id for localized endpoints.
    max_tries : int
        Total attempts for a call whose response carries an in-band
        ``ret_msg`` error.  ``1`` disables retrying.
    retry_delay : float
        Seconds to wait before the first retry.  ``0`` retries at once.
    retry_backoff : float
        Multiplier applied to the delay after every retry.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    session_ttl : float
        Seconds a session id is cached.  The API grants 12 minutes.
    cache_namespace : str
        Prefix of the session cache key (``"<namespace>.sessionId"``).
    """

    dev_id: str
    auth_key: str
    base_url: str = BASE_URL
    language: int = Language.ENGLISH
    max_tries: int = DEFAULT_MAX_TRIES
    retry_delay: float = 0.0
    retry_backoff: float = 2.0
    request_timeout: float = 30.0
    session_ttl: float = SESSION_TTL_SECONDS
    cache_namespace: str = "pypaladins"

    def __post_init__(self) -> None:
        if self.max_tries < 1:
            raise PaladinsConfigError(f"max_tries must be at least 1, got {self.max_tries}")
        if self.retry_delay < 0 or self.retry_backoff < 0:
            raise PaladinsConfigError("retry_delay and retry_backoff must not be negative")
        if self.request_timeout <= 0:
            raise PaladinsConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.session_ttl <= 0:
            raise PaladinsConfigError(f"session_ttl must be positive, got {self.session_ttl}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def session_cache_key(self) -> str:
        return f"{self.cache_namespace}.{SESSION_CACHE_SUFFIX}"

    @classmethod
    def from_env(cls, **overrides: Any) -> PaladinsConfig:
        """Create configuration from environment variables.

        Reads ``PALADINS_DEV_ID`` and ``PALADINS_AUTH_KEY`` plus the
        optional ``PALADINS_*`` tuning variables.  Explicit keyword
        arguments override environment values.

        Raises
        ------
        PaladinsConfigError
            If the credentials are missing or a numeric variable does
            not parse.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "PALADINS_DEV_ID": ("dev_id", str),
            "PALADINS_AUTH_KEY": ("auth_key", str),
            "PALADINS_BASE_URL": ("base_url", str),
            "PALADINS_LANGUAGE": ("language", int),
            "PALADINS_MAX_TRIES": ("max_tries", int),
            "PALADINS_RETRY_DELAY": ("retry_delay", float),
            "PALADINS_REQUEST_TIMEOUT": ("request_timeout", float),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, convert) in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except ValueError as exc:
                raise PaladinsConfigError(f"{env_key} is not a valid {convert.__name__}: {val!r}") from exc

        config_kwargs.update(overrides)

        missing = [name for name in ("dev_id", "auth_key") if not config_kwargs.get(name)]
        if missing:
            raise PaladinsConfigError(f"Missing Paladins credentials: {', '.join(missing)}")

        return cls(**config_kwargs)
