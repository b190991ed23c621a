"""High-level async client for the Paladins developer API."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence
from typing import Any

import aiohttp

from pypaladins._api._common import request_json
from pypaladins._api.players import select_player, validate_player_identifier
from pypaladins._constants import DEFAULT_PLATFORM
from pypaladins._transport import HttpTransport
from pypaladins.config import PaladinsConfig
from pypaladins.exceptions import PaladinsError
from pypaladins.models.enums import Queue
from pypaladins.models.session import Session
from pypaladins.session import InMemorySessionCache, SessionCache, SessionManager

_logger = logging.getLogger(__name__)


def _format_date(value: dt.date | str) -> str:
    if isinstance(value, dt.date):
        return value.strftime("%Y%m%d")
    return value


class PaladinsClient:
    """Async client for the Paladins developer API.

    Every endpoint coroutine returns the decoded JSON body unchanged.
    Session handling is transparent: the first authenticated call creates
    a session and later calls reuse it until it expires.

    Usage::

        async with PaladinsClient(config) as client:
            champions = await client.get_champions()

    Share one instance between callers; every instance mints its own
    sessions unless they share a ``cache``.
    """

    def __init__(
        self,
        config: PaladinsConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        cache: SessionCache | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._cache: SessionCache = cache if cache is not None else InMemorySessionCache()
        self._transport: HttpTransport | None = None
        self._sessions: SessionManager | None = None

    @property
    def config(self) -> PaladinsConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> PaladinsClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        self._sessions = SessionManager(self._config, self._transport, self._cache)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._sessions = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise PaladinsError("Client not initialized. Use 'async with PaladinsClient(...) as client:'")
        return self._transport

    def _require_sessions(self) -> SessionManager:
        if self._sessions is None:
            raise PaladinsError("Client not initialized. Use 'async with PaladinsClient(...) as client:'")
        return self._sessions

    def _language(self, language: int | None) -> int:
        return self._config.language if language is None else language

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def create_session(self) -> Session:
        """Mint a new session and make it the cached one."""
        sessions = self._require_sessions()
        session = await sessions.create_session()
        self._cache.save(sessions.cache_key, session.session_id, session.expires_at)
        return session

    async def ensure_session(self) -> str:
        """Return the live session id, creating a session if needed."""
        return await self._require_sessions().get_session_id()

    def invalidate_session(self) -> None:
        """Force session invalidation (next call will create a new one)."""
        self._require_sessions().invalidate()

    async def request(self, method: str, *params: Any, authenticated: bool = True) -> Any:
        """Call any remote *method* (without the ``Json`` suffix).

        Falsy *params* are left out of the URL.
        """
        return await request_json(
            method,
            params,
            config=self._config,
            transport=self._require_transport(),
            sessions=self._sessions if authenticated else None,
            authenticated=authenticated,
        )

    # ------------------------------------------------------------------
    # Connectivity, development & system status
    # ------------------------------------------------------------------

    async def ping(self) -> Any:
        """Check that the API is reachable (no session needed)."""
        return await self.request("ping", authenticated=False)

    async def test_session(self) -> Any:
        return await self.request("testsession")

    async def get_data_used(self) -> Any:
        """Current usage and usage limits of the developer account."""
        return await self.request("getdataused")

    async def get_server_status(self) -> Any:
        return await self.request("gethirezserverstatus")

    async def get_patch_info(self) -> Any:
        return await self.request("getpatchinfo")

    # ------------------------------------------------------------------
    # Champions & items
    # ------------------------------------------------------------------

    async def get_champions(self, language: int | None = None) -> Any:
        return await self.request("getchampions", self._language(language))

    async def get_champion_cards(self, champion_id: int, language: int | None = None) -> Any:
        return await self.request("getchampioncards", champion_id, self._language(language))

    async def get_champion_leaderboard(self, champion_id: int, queue: int = Queue.RANKED) -> Any:
        """Top players of a champion in *queue*.

        Only requires a handful of matches, so it is not a skill ranking.
        """
        return await self.request("getchampionleaderboard", champion_id, queue)

    async def get_champion_skins(self, champion_id: int, language: int | None = None) -> Any:
        return await self.request("getchampionskins", champion_id, self._language(language))

    async def get_champion_recommended_items(self, champion_id: int, language: int | None = None) -> Any:
        return await self.request("getchampionrecommendeditems", champion_id, self._language(language))

    async def get_items(self, language: int | None = None) -> Any:
        return await self.request("getitems", self._language(language))

    async def get_bounty_items(self) -> Any:
        return await self.request("getbountyitems")

    # ------------------------------------------------------------------
    # Players & player ids
    # ------------------------------------------------------------------

    async def get_player(self, player: int | str, platform: int = DEFAULT_PLATFORM) -> Any:
        """Fetch a player by id or by name.

        A name is resolved with :meth:`get_player_id_by_name` to the first
        account on *platform* (Steam by default).

        Raises
        ------
        PaladinsInvalidArgumentError
            If *player* is neither ``str`` nor ``int``, or the name has no
            account on *platform*.
        """
        player = validate_player_identifier(player)
        if isinstance(player, str):
            entries = await self.get_player_id_by_name(player)
            player_id = select_player(entries, platform, name=player).player_id
            _logger.debug("Resolved player %r on platform %d to id %d", player, int(platform), player_id)
        else:
            player_id = player
        return await self.request("getplayer", player_id)

    async def get_player_batch(self, player_ids: Sequence[int]) -> Any:
        """Fetch several players at once (ids are sent comma-separated)."""
        return await self.request("getplayerbatch", list(player_ids))

    async def get_player_id_by_name(self, name: str) -> Any:
        """All accounts named *name*, one entry per platform."""
        return await self.request("getplayeridbyname", name)

    async def get_player_id_by_portal_user_id(self, portal_user_id: str, platform: int = DEFAULT_PLATFORM) -> Any:
        return await self.request("getplayeridbyportaluserid", platform, portal_user_id)

    async def get_player_ids_by_gamertag(self, gamertag: str, platform: int = DEFAULT_PLATFORM) -> Any:
        return await self.request("getplayeridsbygamertag", platform, gamertag)

    async def get_player_id_info_for_xbox_and_switch(self, name: str) -> Any:
        return await self.request("getplayeridinfoforxboxandswitch", name)

    # ------------------------------------------------------------------
    # Player info
    # ------------------------------------------------------------------

    async def get_player_friends(self, player_id: int) -> Any:
        return await self.request("getfriends", player_id)

    async def get_champion_ranks(self, player_id: int) -> Any:
        return await self.request("getchampionranks", player_id)

    async def get_player_champion_ranks(self, player_id: int) -> Any:
        """Deprecated alias of :meth:`get_champion_ranks`."""
        return await self.get_champion_ranks(player_id)

    async def get_player_loadouts(self, player_id: int, language: int | None = None) -> Any:
        return await self.request("getplayerloadouts", player_id, self._language(language))

    async def get_player_achievements(self, player_id: int) -> Any:
        return await self.request("getplayerachievements", player_id)

    async def get_player_status(self, player_id: int) -> Any:
        return await self.request("getplayerstatus", player_id)

    async def get_player_match_history(self, player_id: int) -> Any:
        return await self.request("getmatchhistory", player_id)

    async def get_player_queue_stats(self, player_id: int, queue: int) -> Any:
        return await self.request("getqueuestats", player_id, queue)

    async def search_players(self, search: str) -> Any:
        return await self.request("searchplayers", search)

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------

    async def get_demo_details(self, match_id: int) -> Any:
        return await self.request("getdemodetails", match_id)

    async def get_match_details(self, match_id: int) -> Any:
        return await self.request("getmatchdetails", match_id)

    async def get_match_details_batch(self, match_ids: Sequence[int]) -> Any:
        """Details of several ended matches (ids are sent comma-separated)."""
        return await self.request("getmatchdetailsbatch", list(match_ids))

    async def get_match_ids_by_queue(
        self,
        date: dt.date | str,
        hour: int | str = "-1",
        queue: int = Queue.SIEGE,
    ) -> Any:
        """Ids of matches played in *queue* on *date*.

        *hour* is ``"0"``-``"23"``, ``"-1"`` for the whole day, or an
        ``"HH,MM"`` ten-minute window.  ``date`` objects are sent as
        ``YYYYMMDD``.
        """
        return await self.request("getmatchidsbyqueue", queue, _format_date(date), str(hour))

    async def get_active_match_details(self, match_id: int) -> Any:
        """Basic info about a live match."""
        return await self.request("getmatchplayerdetails", match_id)

    async def get_top_matches(self) -> Any:
        return await self.request("gettopmatches")

    # ------------------------------------------------------------------
    # Leagues & seasons
    # ------------------------------------------------------------------

    async def get_ranked_leaderboard(
        self,
        queue: int = Queue.RANKED_LEGACY,
        tier: int = 3,
        season: int = 5,
    ) -> Any:
        return await self.request("getleagueleaderboard", queue, tier, season)

    async def get_ranked_seasons(self, queue: int = Queue.RANKED_LEGACY) -> Any:
        return await self.request("getleagueseasons", queue)

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    async def get_team_details(self, clan_id: int) -> Any:
        return await self.request("getteamdetails", clan_id)

    async def get_team_players(self, clan_id: int) -> Any:
        return await self.request("getteamplayers", clan_id)

    async def search_teams(self, search: str) -> Any:
        return await self.request("searchteams", search)

    # ------------------------------------------------------------------
    # Other (mostly deprecated upstream)
    # ------------------------------------------------------------------

    async def get_match_mode_details(self, match_id: int) -> Any:
        return await self.request("getmodedetails", match_id)

    async def get_esports_pro_league_details(self) -> Any:
        return await self.request("getesportsproleaguedetails")

    async def get_motd(self) -> Any:
        """Message of the day."""
        return await self.request("getmotd")


def create_client(
    dev_id: str,
    auth_key: str,
    *,
    cache: SessionCache | None = None,
    session: aiohttp.ClientSession | None = None,
    **overrides: Any,
) -> PaladinsClient:
    """Build a client from credentials.

    Call once at startup and pass the instance to whoever needs it; every
    call returns a new, independent client.
    """
    config = PaladinsConfig(dev_id=dev_id, auth_key=auth_key, **overrides)
    return PaladinsClient(config, session=session, cache=cache)
