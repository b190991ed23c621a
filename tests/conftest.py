from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from pypaladins._constants import BASE_URL
from pypaladins.config import PaladinsConfig


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def method_of(url: str) -> str:
    """``createsessionJson/...`` -> ``createsession``."""
    first = url[len(BASE_URL) + 1 :].split("/", 1)[0]
    return first.removesuffix("Json")


def segments_of(url: str) -> list[str]:
    return url[len(BASE_URL) + 1 :].split("/")[1:]


@dataclass
class FakeApi:
    """Transport double answering by remote method name.

    ``responses[method]`` is a list consumed front to back; the last item
    repeats.  Exceptions in the list are raised instead of returned.
    """

    responses: dict[str, list[Any]] = field(default_factory=dict)
    session_response: dict[str, Any] | None = None
    session_delay: float = 0.0
    on_create_session: Callable[[], None] | None = None
    urls: list[str] = field(default_factory=list)
    sessions_created: int = 0

    def calls(self, method: str) -> int:
        return sum(1 for url in self.urls if method_of(url) == method)

    async def get_json(self, url: str) -> Any:
        self.urls.append(url)
        method = method_of(url)

        if method == "createsession":
            if self.session_delay:
                await asyncio.sleep(self.session_delay)
            self.sessions_created += 1
            if self.on_create_session is not None:
                self.on_create_session()
            if self.session_response is not None:
                return self.session_response
            return {
                "ret_msg": "Approved",
                "session_id": f"SESSION-{self.sessions_created}",
                "timestamp": "5/17/2024 1:45:00 PM",
            }

        queue = self.responses.get(method)
        if not queue:
            raise AssertionError(f"Unexpected method in fake API: {method}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock(datetime(2024, 5, 17, 13, 45, 27, tzinfo=UTC))
    monkeypatch.setattr("pypaladins._clock.utcnow", fake)
    return fake


@pytest.fixture
def config() -> PaladinsConfig:
    return PaladinsConfig(dev_id="1004", auth_key="AUTHKEY123")


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()
