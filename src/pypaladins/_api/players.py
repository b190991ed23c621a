"""Player identifier resolution.

Endpoints that take a player accept either the numeric player id or a
player name.  Names are looked up with ``getplayeridbyname``, which may
return one account per platform; the caller picks the platform.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pypaladins.exceptions import PaladinsInvalidArgumentError
from pypaladins.models.player import PlayerIdInfo

_logger = logging.getLogger(__name__)


def validate_player_identifier(player: Any) -> int | str:
    """Accept a player name (``str``) or player id (``int``).

    ``bool`` is rejected even though it is an ``int`` subclass.
    """
    if isinstance(player, bool) or not isinstance(player, (str, int)):
        raise PaladinsInvalidArgumentError(
            "The player must be either a name (str) or a player id (int), "
            f"got {type(player).__name__}"
        )
    if isinstance(player, str) and not player.strip():
        raise PaladinsInvalidArgumentError("The player name must not be empty")
    return player


def select_player(entries: Any, platform: int, *, name: str = "") -> PlayerIdInfo:
    """Return the first lookup entry whose ``portal_id`` equals *platform*.

    Raises
    ------
    PaladinsInvalidArgumentError
        If no entry matches; an account on another platform is never
        returned in its place.
    """
    items = entries if isinstance(entries, list) else []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        try:
            info = PlayerIdInfo.model_validate(item)
        except ValidationError:
            _logger.debug("Skipping player lookup entry without a usable player_id: %r", item)
            continue
        if info.portal_id == int(platform):
            return info
    raise PaladinsInvalidArgumentError(
        f"The requested player {name!r} could not be found on platform {int(platform)}."
    )
