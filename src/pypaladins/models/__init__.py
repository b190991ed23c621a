"""Typed models used by pypaladins.

Response bodies are otherwise returned as decoded JSON.
"""

from pypaladins.models.enums import Language, Portal, Queue
from pypaladins.models.player import PlayerIdInfo
from pypaladins.models.session import CreateSessionResponse, Session

__all__ = [
    "CreateSessionResponse",
    "Language",
    "PlayerIdInfo",
    "Portal",
    "Queue",
    "Session",
]
