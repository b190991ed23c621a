"""pypaladins - Async Python client for the Paladins developer API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pypaladins")
except PackageNotFoundError:
    __version__ = "0+local"
from pypaladins.client import PaladinsClient, create_client
from pypaladins.config import PaladinsConfig
from pypaladins.exceptions import (
    PaladinsApiError,
    PaladinsConfigError,
    PaladinsError,
    PaladinsInvalidArgumentError,
    PaladinsNotFoundError,
    PaladinsProxyError,
    PaladinsSessionError,
    PaladinsTransportError,
)
from pypaladins.models import (
    CreateSessionResponse,
    Language,
    PlayerIdInfo,
    Portal,
    Queue,
    Session,
)
from pypaladins.session import InMemorySessionCache, SessionCache

__all__ = [
    "__version__",
    "CreateSessionResponse",
    "InMemorySessionCache",
    "Language",
    "PaladinsApiError",
    "PaladinsClient",
    "PaladinsConfig",
    "PaladinsConfigError",
    "PaladinsError",
    "PaladinsInvalidArgumentError",
    "PaladinsNotFoundError",
    "PaladinsProxyError",
    "PaladinsSessionError",
    "PaladinsTransportError",
    "PlayerIdInfo",
    "Portal",
    "Queue",
    "Session",
    "SessionCache",
    "create_client",
]
