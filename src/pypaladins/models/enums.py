"""Identifier enums used as request parameters."""

from __future__ import annotations

import enum


class Language(enum.IntEnum):
    """Language ids accepted by the localized endpoints."""

    ENGLISH = 1
    GERMAN = 2
    FRENCH = 3
    CHINESE = 5
    SPANISH = 7
    SPANISH_LATAM = 9
    PORTUGUESE = 10
    RUSSIAN = 11
    POLISH = 12
    TURKISH = 13


class Portal(enum.IntEnum):
    """Account platforms (``portal_id`` in player payloads)."""

    HIREZ = 1
    STEAM = 5
    PS4 = 9
    XBOX = 10
    SWITCH = 22
    DISCORD = 25
    EPIC = 28


class Queue(enum.IntEnum):
    """Commonly used match queue ids."""

    RANKED_LEGACY = 400
    SIEGE = 424
    RANKED_GAMEPAD = 428
    ONSLAUGHT = 452
    TEAM_DEATHMATCH = 469
    RANKED = 486
