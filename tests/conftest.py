from __future__ import annotations

import sys
from pathlib import Path

import pytest
import requests

# Ensure project root import
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gameshelf.bridge import Bridge
from gameshelf.steam import DirectoryCache, STEAM_APPDETAILS_URL, STEAM_APPLIST_URL, SteamClient
from gameshelf.store import LibraryStore


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeResponse:
    def __init__(self, payload=None, status: int = 200, bad_json: bool = False):
        self.payload = payload
        self.status_code = status
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.bad_json:
            raise ValueError("not json")
        return self.payload


class FakeSession:
    """Answers Steam's two endpoints from in-memory data."""

    def __init__(self, apps=None, details=None):
        self.apps = apps if apps is not None else []
        self.details = details if details is not None else {}
        self.calls = []
        self.fail = None  # exception to raise on every call

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.fail is not None:
            raise self.fail
        if url == STEAM_APPLIST_URL:
            return FakeResponse({"applist": {"apps": self.apps}})
        if url == STEAM_APPDETAILS_URL:
            app_id = str(params["appids"])
            if app_id in self.details:
                return FakeResponse({app_id: {"success": True, "data": self.details[app_id]}})
            return FakeResponse({app_id: {"success": False}})
        return FakeResponse(status=404)

    def directory_fetches(self) -> int:
        return sum(1 for url, _, _ in self.calls if url == STEAM_APPLIST_URL)


def steam_details(name: str, **extra):
    data = {
        "name": name,
        "short_description": f"{name} is a game.",
        "developers": ["Valve"],
        "publishers": ["Valve"],
        "release_date": {"coming_soon": False, "date": "19 Nov, 1998"},
        "header_image": f"https://cdn.example/{name}/header.jpg",
        "screenshots": [{"id": 0, "path_thumbnail": "https://cdn.example/s0.jpg", "path_full": "https://cdn.example/s0_full.jpg"}],
        "genres": [{"id": "1", "description": "Action"}],
        "categories": [{"id": 2, "description": "Single-player"}],
        "metacritic": {"score": 96, "url": "https://metacritic.example"},
    }
    data.update(extra)
    return data


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    return FakeSession(
        apps=[
            {"appid": 220, "name": "Half-Life 2"},
            {"appid": 70, "name": "Half-Life"},
            {"appid": 42, "name": "Foo Deluxe"},
        ],
        details={
            "70": steam_details("Half-Life"),
            "220": steam_details("Half-Life 2"),
            "42": steam_details("Foo Deluxe"),
        },
    )


@pytest.fixture
def client(session, clock):
    return SteamClient(session=session, cache=DirectoryCache(clock=clock), timeout=5)


@pytest.fixture
def store(tmp_path):
    return LibraryStore(tmp_path / "games.json")


@pytest.fixture
def launched():
    return []


@pytest.fixture
def bridge(store, client, launched):
    return Bridge(store, client, launcher=launched.append, picker=lambda: "/games/Picked.exe")
