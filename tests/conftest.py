"""Shared test fixtures for gmtracker tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from gmtracker.app import create_app
from gmtracker.cache import FreshnessCache
from gmtracker.models import ServerRecord
from gmtracker.settings import TrackerSettings


class FakeClock:
    """Settable stand-in for the wall clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FakeProvider:
    """Server list provider that counts calls and can be told to fail."""

    def __init__(self, servers: list[ServerRecord] | None = None) -> None:
        self.servers = servers or []
        self.error: Exception | None = None
        self.calls = 0

    def fetch(self) -> list[ServerRecord]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.servers)


@pytest.fixture()
def raw_servers() -> list[dict]:
    """Two server objects as the Steam API returns them."""
    return [
        {
            "addr": "203.0.113.10:27015",
            "gameport": 27015,
            "steamid": "90071996842377216",
            "name": "Flatgrass Build",
            "appid": 4000,
            "gamedir": "garrysmod",
            "version": "1.0.0.92",
            "product": "garrysmod",
            "region": 3,
            "players": 7,
            "max_players": 16,
            "bots": 0,
            "map": "gm_flatgrass",
            "secure": True,
            "dedicated": True,
            "os": "l",
            "gametype": "sandbox",
        },
        {
            "addr": "198.51.100.4:27016",
            "gameport": 27016,
            "steamid": "90071996842377217",
            "name": "Construct RP",
            "appid": 4000,
            "gamedir": "garrysmod",
            "version": "1.0.0.92",
            "product": "garrysmod",
            "region": 0,
            "players": 12,
            "max_players": 32,
            "bots": 2,
            "map": "gm_construct",
            "secure": False,
            "dedicated": False,
            "os": "w",
            "gametype": "darkrp",
        },
    ]


@pytest.fixture()
def servers(raw_servers: list[dict]) -> list[ServerRecord]:
    return [ServerRecord.model_validate(s) for s in raw_servers]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 12, 0, tzinfo=UTC))


@pytest.fixture()
def provider(servers: list[ServerRecord]) -> FakeProvider:
    return FakeProvider(servers)


@pytest.fixture()
def server_cache(provider: FakeProvider, clock: FakeClock) -> FreshnessCache:
    return FreshnessCache(provider, clock=clock)


@pytest.fixture()
def settings() -> TrackerSettings:
    return TrackerSettings(apikey="test-key", _env_file=None)  # type: ignore[call-arg]


@pytest.fixture()
def client(settings: TrackerSettings, server_cache: FreshnessCache):
    """Create a test client around the fake-provider cache."""
    with TestClient(create_app(settings, cache=server_cache)) as c:
        yield c
