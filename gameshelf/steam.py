"""Steam store lookups used to enrich library entries.

The bulk app directory is large and rarely changes, so it is cached for a
freshness window (24h by default) in an explicit DirectoryCache. Name
resolution is exact-match first, then the first substring match in
directory order.
"""
from __future__ import annotations

import logging
import threading
import time
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

import requests

from .errors import NoMatch, UpstreamRejected, UpstreamUnavailable
from .models import DirectoryApp, EnrichmentMetadata

logger = logging.getLogger(__name__)

STEAM_APPLIST_URL = "https://api.steampowered.com/ISteamApps/GetAppList/v2/"
STEAM_APPDETAILS_URL = "https://store.steampowered.com/api/appdetails"
DEFAULT_TTL = timedelta(hours=24)
DEFAULT_TIMEOUT = 10.0


class DirectoryCache:
    def __init__(self, ttl: timedelta = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._apps: Optional[List[DirectoryApp]] = None
        self._fetched_at = 0.0
        self._lock = threading.Lock()

    def is_fresh(self) -> bool:
        if self._apps is None:
            return False
        return (self.clock() - self._fetched_at) < self.ttl.total_seconds()

    def get(self, fetch: Callable[[], List[DirectoryApp]]) -> List[DirectoryApp]:
        """Return the cached snapshot, calling `fetch` only when it is stale.

        Callers arriving while a fetch is in flight wait for it and share
        its result.
        """
        with self._lock:
            if not self.is_fresh():
                apps = fetch()
                self._apps = apps
                self._fetched_at = self.clock()
            return self._apps

    def invalidate(self) -> None:
        with self._lock:
            self._apps = None
            self._fetched_at = 0.0


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, (str, dict)) and value:
        return [value]
    return []


def _descriptions(items: Any) -> List[str]:
    out: List[str] = []
    for it in _as_list(items):
        if isinstance(it, dict) and it.get("description"):
            out.append(str(it["description"]))
    return out


def _strings(items: Any) -> List[str]:
    return [str(x) for x in _as_list(items) if isinstance(x, (str, int, float))]


def parse_details(app_id: int, data: Dict[str, Any]) -> EnrichmentMetadata:
    """Map Steam's appdetails `data` object onto EnrichmentMetadata."""
    release = data.get("release_date") or {}
    metacritic = data.get("metacritic") or {}
    score = metacritic.get("score") if isinstance(metacritic, dict) else None
    try:
        critic_score = int(score) if score is not None else None
    except (TypeError, ValueError):
        critic_score = None

    return EnrichmentMetadata(
        source_id=int(app_id),
        name=str(data.get("name") or ""),
        description=str(data.get("short_description") or data.get("detailed_description") or ""),
        developers=_strings(data.get("developers")),
        publishers=_strings(data.get("publishers")),
        release_date=str(release.get("date") or "") if isinstance(release, dict) else "",
        header_image=str(data.get("header_image") or ""),
        screenshots=[
            str(s["path_thumbnail"])
            for s in _as_list(data.get("screenshots"))
            if isinstance(s, dict) and s.get("path_thumbnail")
        ],
        genres=_descriptions(data.get("genres")),
        categories=_descriptions(data.get("categories")),
        critic_score=critic_score,
    )


def match_app(apps: List[DirectoryApp], name: str) -> DirectoryApp:
    wanted = (name or "").strip().lower()
    if not wanted:
        raise NoMatch("Game not found on Steam")

    for app in apps:
        if app.name.lower() == wanted:
            return app
    # first in directory order, not the closest
    for app in apps:
        if wanted in app.name.lower():
            return app
    raise NoMatch("Game not found on Steam")


class SteamClient:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        cache: Optional[DirectoryCache] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        country: str = "us",
        language: str = "en",
        applist_url: str = STEAM_APPLIST_URL,
        details_url: str = STEAM_APPDETAILS_URL,
    ):
        self.session = session or requests.Session()
        self.cache = cache or DirectoryCache()
        self.timeout = timeout
        self.country = country
        self.language = language
        self.applist_url = applist_url
        self.details_url = details_url

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            res = self.session.get(url, params=params, timeout=self.timeout)
            res.raise_for_status()
            return res.json()
        except requests.Timeout as e:
            logger.warning("Steam request timed out: %s", url)
            raise UpstreamUnavailable("Steam did not respond in time") from e
        except requests.RequestException as e:
            logger.warning("Steam request failed: %s (%s)", url, e)
            raise UpstreamUnavailable(f"Steam request failed: {e}") from e
        except ValueError as e:
            raise UpstreamUnavailable("Steam returned an unreadable response") from e

    def fetch_directory(self) -> List[DirectoryApp]:
        data = self._get_json(self.applist_url)
        try:
            raw = data["applist"]["apps"]
        except (KeyError, TypeError) as e:
            raise UpstreamUnavailable("Steam app list has an unexpected shape") from e
        if not isinstance(raw, list):
            raise UpstreamUnavailable("Steam app list has an unexpected shape")

        apps: List[DirectoryApp] = []
        for item in raw:
            try:
                apps.append(DirectoryApp(app_id=int(item["appid"]), name=str(item["name"])))
            except (KeyError, TypeError, ValueError):
                continue
        logger.info("Fetched Steam app list (%d apps)", len(apps))
        return apps

    def directory(self) -> List[DirectoryApp]:
        return self.cache.get(self.fetch_directory)

    def resolve(self, name: str) -> int:
        app = match_app(self.directory(), name)
        logger.info("Resolved %r to Steam app %s (%s)", name, app.app_id, app.name)
        return app.app_id

    def fetch_details(self, app_id: int) -> EnrichmentMetadata:
        params = {"appids": app_id, "cc": self.country, "l": self.language}
        payload = self._get_json(self.details_url, params=params)

        entry = payload.get(str(app_id)) if isinstance(payload, dict) else None
        if not isinstance(entry, dict) or not entry.get("success"):
            raise UpstreamRejected("Failed to fetch game details from Steam")

        data = entry.get("data")
        if not isinstance(data, dict):
            raise UpstreamRejected("Failed to fetch game details from Steam")
        return parse_details(app_id, data)

    def enrich(self, name: str) -> EnrichmentMetadata:
        return self.fetch_details(self.resolve(name))
