from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .errors import BadRequest, DuplicateEntry, NotFound, StoreReadFailure
from .models import EnrichmentMetadata, GameEntry
from .utils import atomic_write_json, display_name_for, timestamp_id, utc_now_iso

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "path", "metadata")
IMMUTABLE_FIELDS = ("id", "addedAt")


class LibraryStore:
    """The local game library, kept as one JSON document: {"games": [...]}.

    Every mutation is a full read-modify-write under one lock, and the new
    document replaces the old one atomically.
    """

    def __init__(self, library_file: Path):
        self.library_file = Path(library_file)
        self._lock = threading.Lock()
        self.ensure()

    def ensure(self) -> None:
        if not self.library_file.exists():
            atomic_write_json(self.library_file, {"games": []})

    # -- reading ------------------------------------------------------------

    def _read(self) -> List[GameEntry]:
        try:
            data = json.loads(self.library_file.read_text("utf-8"))
        except (OSError, ValueError) as e:
            raise StoreReadFailure(f"cannot read {self.library_file}: {e}") from e

        raw = data.get("games") if isinstance(data, dict) else None
        if not isinstance(raw, list):
            raise StoreReadFailure(f"{self.library_file} has no games list")

        games: List[GameEntry] = []
        for item in raw:
            try:
                games.append(GameEntry.from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed library entry %r: %s", item, e)
        return games

    def _load(self) -> List[GameEntry]:
        try:
            return self._read()
        except StoreReadFailure as e:
            logger.warning("%s; treating library as empty", e)
            return []

    def _save(self, games: List[GameEntry]) -> None:
        atomic_write_json(self.library_file, {"games": [g.to_dict() for g in games]})

    def list(self) -> List[GameEntry]:
        return self._load()

    def get(self, game_id: str) -> GameEntry:
        for g in self._load():
            if g.id == game_id:
                return g
        raise NotFound("Game not found")

    # -- writing ------------------------------------------------------------

    def add(self, path: str) -> GameEntry:
        if not isinstance(path, str) or not path.strip():
            raise BadRequest("path must be a non-empty string")
        with self._lock:
            games = self._load()
            if any(g.path == path for g in games):
                raise DuplicateEntry("Game already exists in library")

            taken = {g.id for g in games}
            new_id = timestamp_id()
            while new_id in taken:
                new_id = str(int(new_id) + 1)

            entry = GameEntry(
                id=new_id,
                name=display_name_for(path),
                path=path,
                added_at=utc_now_iso(),
                metadata=None,
            )
            games.append(entry)
            self._save(games)
        logger.info("Added %s (%s)", entry.name, entry.path)
        return entry

    def update(self, game_id: str, fields: Mapping[str, Any]) -> GameEntry:
        changes = _coerce_fields(fields)
        with self._lock:
            games = self._load()
            idx = next((i for i, g in enumerate(games) if g.id == game_id), None)
            if idx is None:
                raise NotFound("Game not found")

            new_path = changes.get("path")
            if new_path is not None and any(g.path == new_path and g.id != game_id for g in games):
                raise DuplicateEntry("Game already exists in library")

            games[idx] = games[idx].with_changes(**changes)
            self._save(games)
            return games[idx]

    def remove(self, game_id: str) -> None:
        with self._lock:
            games = self._load()
            kept = [g for g in games if g.id != game_id]
            if len(kept) == len(games):
                return
            self._save(kept)
        logger.info("Removed game %s", game_id)


def _coerce_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Map UI-side keys onto GameEntry attributes; metadata is taken whole."""
    if not isinstance(fields, Mapping):
        raise BadRequest("fields must be an object")

    changes: Dict[str, Any] = {}
    for key, value in fields.items():
        if key in IMMUTABLE_FIELDS:
            logger.warning("Ignoring update to immutable field %r", key)
            continue
        if key not in EDITABLE_FIELDS:
            logger.warning("Ignoring unknown field %r", key)
            continue
        if key == "metadata":
            if value is None or isinstance(value, EnrichmentMetadata):
                changes["metadata"] = value
            else:
                try:
                    changes["metadata"] = EnrichmentMetadata.from_dict(value)
                except (KeyError, TypeError, ValueError) as e:
                    raise BadRequest(f"invalid metadata: {e}") from e
        else:
            if not isinstance(value, str) or not value.strip():
                raise BadRequest(f"{key} must be a non-empty string")
            changes[key] = value
    return changes
