"""Player lookup models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class PlayerIdInfo(BaseModel):
    """One entry of a ``getplayeridbyname`` style lookup.

    Only the fields needed to pick an account are typed; everything else
    the API sends is kept as extra data.
    """

    model_config = ConfigDict(extra="allow")

    player_id: int
    portal_id: int | None = None
    portal: str | None = None
    name: str | None = None
    privacy_flag: str | None = None
    ret_msg: Any = None
