from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any

import pytest
from conftest import FakeClock, method_of, segments_of

from pypaladins import Language, Portal, Queue
from pypaladins.client import PaladinsClient, create_client
from pypaladins.config import PaladinsConfig
from pypaladins.exceptions import (
    PaladinsApiError,
    PaladinsError,
    PaladinsInvalidArgumentError,
    PaladinsNotFoundError,
    PaladinsSessionError,
)


@dataclass
class FakePaladinsBackend:
    urls: list[str] = field(default_factory=list)
    calls: dict[str, int] = field(default_factory=dict)
    reject_session: bool = False
    soft_error_methods: set[str] = field(default_factory=set)

    def _record_call(self, method: str) -> None:
        self.calls[method] = self.calls.get(method, 0) + 1

    def params(self, method: str) -> list[str]:
        """Path parameters of the last call to *method* (after the auth prefix)."""
        url = next(u for u in reversed(self.urls) if method_of(u) == method)
        segments = segments_of(url)
        return segments[4:] if method != "ping" else segments

    async def get_json(self, url: str) -> Any:
        self.urls.append(url)
        method = method_of(url)
        self._record_call(method)

        if method in self.soft_error_methods:
            return {"ret_msg": f"{method} is unavailable"}

        if method == "ping":
            return "Paladins API (ver 6.3.0.0) [PATCH - 6.3] - Ping successful."

        if method == "createsession":
            if self.reject_session:
                return {"ret_msg": "Invalid Developer Id", "session_id": None}
            n = self.calls[method]
            return {"ret_msg": "Approved", "session_id": f"SESSION-{n}", "timestamp": "5/17/2024 1:45:00 PM"}

        if method == "testsession":
            return "This was a successful test with the following parameters added: ..."

        if method == "getchampions":
            return [{"id": 2205, "Name": "Androxus", "ret_msg": None}]

        if method == "getplayeridbyname":
            return [
                {"player_id": 9001, "portal_id": "10", "portal": "Xbox", "ret_msg": None},
                {"player_id": 4242, "portal_id": "5", "portal": "Steam", "ret_msg": None},
            ]

        if method == "getplayer":
            return [{"Id": int(self.params("getplayer")[0]), "Name": "Androxus", "ret_msg": None}]

        if method in {"getplayerbatch", "getmatchdetailsbatch", "getmatchidsbyqueue", "getleagueleaderboard"}:
            return []

        if method == "getmatchdetails":
            raise PaladinsNotFoundError(f"Resource was not found. URL - {url}", status_code=404, url=url)

        raise AssertionError(f"Unexpected method in fake backend: {method}")


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch, clock: FakeClock) -> FakePaladinsBackend:
    fake_backend = FakePaladinsBackend()

    async def fake_get_json(_self: Any, url: str) -> Any:
        return await fake_backend.get_json(url)

    monkeypatch.setattr("pypaladins._transport.HttpTransport.get_json", fake_get_json)
    return fake_backend


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_client_happy_path(config: PaladinsConfig, backend: FakePaladinsBackend, clock: FakeClock) -> None:
    async with PaladinsClient(config) as client:
        assert "Ping successful" in await client.ping()
        assert backend.calls.get("createsession", 0) == 0

        champions = await client.get_champions()
        assert champions[0]["Name"] == "Androxus"
        assert backend.params("getchampions") == ["1"]

        await client.get_champions(language=Language.GERMAN)
        assert backend.params("getchampions") == ["2"]

        player = await client.get_player("Androxus")
        assert player[0]["Id"] == 4242

        player = await client.get_player("Androxus", platform=Portal.XBOX)
        assert player[0]["Id"] == 9001

        await client.get_player(777)
        assert backend.params("getplayer") == ["777"]

    assert backend.calls["createsession"] == 1


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_session_renewed_after_expiry(
    config: PaladinsConfig, backend: FakePaladinsBackend, clock: FakeClock
) -> None:
    async with PaladinsClient(config) as client:
        await client.test_session()
        clock.advance(minutes=5)
        await client.test_session()
        assert backend.calls["createsession"] == 1

        clock.advance(minutes=8)
        await client.test_session()

    assert backend.calls["createsession"] == 2
    assert segments_of(backend.urls[-1])[2] == "SESSION-2"


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_parameter_encoding(config: PaladinsConfig, backend: FakePaladinsBackend) -> None:
    async with PaladinsClient(config) as client:
        await client.get_player_batch([1, 2, 3])
        assert backend.params("getplayerbatch") == ["1,2,3"]

        await client.get_match_details_batch((10, 20))
        assert backend.params("getmatchdetailsbatch") == ["10,20"]

        await client.get_match_ids_by_queue(dt.date(2024, 5, 17), hour=0)
        assert backend.params("getmatchidsbyqueue") == ["424", "20240517", "0"]

        await client.get_ranked_leaderboard(Queue.RANKED, tier=0, season=7)
        assert backend.params("getleagueleaderboard") == ["486", "7"]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_unknown_player_name_raises(config: PaladinsConfig, backend: FakePaladinsBackend) -> None:
    async with PaladinsClient(config) as client:
        with pytest.raises(PaladinsInvalidArgumentError):
            await client.get_player("Androxus", platform=Portal.SWITCH)
        with pytest.raises(PaladinsInvalidArgumentError):
            await client.get_player(3.5)  # type: ignore[arg-type]

    assert backend.calls.get("getplayer", 0) == 0


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_errors_propagate(config: PaladinsConfig, backend: FakePaladinsBackend) -> None:
    backend.soft_error_methods.add("getchampions")

    async with PaladinsClient(config) as client:
        with pytest.raises(PaladinsApiError, match="getchampions is unavailable"):
            await client.get_champions()
        with pytest.raises(PaladinsNotFoundError):
            await client.get_match_details(1)

    assert backend.calls["getchampions"] == 3
    assert backend.calls["getmatchdetails"] == 1


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_session_rejected(config: PaladinsConfig, backend: FakePaladinsBackend) -> None:
    backend.reject_session = True

    async with PaladinsClient(config) as client:
        with pytest.raises(PaladinsSessionError, match="Invalid Developer Id"):
            await client.get_champions()

    assert backend.calls.get("getchampions", 0) == 0


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_explicit_session_management(config: PaladinsConfig, backend: FakePaladinsBackend) -> None:
    async with PaladinsClient(config) as client:
        session = await client.create_session()
        assert await client.ensure_session() == session.session_id == "SESSION-1"

        client.invalidate_session()
        assert await client.ensure_session() == "SESSION-2"


@pytest.mark.asyncio
async def test_client_requires_context_manager(config: PaladinsConfig) -> None:
    client = PaladinsClient(config)

    with pytest.raises(PaladinsError, match="not initialized"):
        await client.get_champions()


def test_create_client_returns_independent_instances() -> None:
    first = create_client("1004", "KEY", max_tries=5)
    second = create_client("1004", "KEY")

    assert first is not second
    assert first.config.max_tries == 5
    assert second.config.max_tries == 3
