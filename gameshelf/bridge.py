from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from .errors import BadRequest, LibraryError, UnknownOperation
from .launch import launch
from .picker import choose_file
from .steam import SteamClient
from .store import LibraryStore

logger = logging.getLogger(__name__)

# UI-facing name -> Bridge method. Nothing outside this table is callable.
OPERATIONS: Dict[str, str] = {
    "listGames": "list_games",
    "addGame": "add_game",
    "deleteGame": "delete_game",
    "updateGame": "update_game",
    "fetchMetadata": "fetch_metadata",
    "launchGame": "launch_game",
    "chooseFile": "choose_file",
}

ARITY: Dict[str, int] = {
    "listGames": 0,
    "addGame": 1,
    "deleteGame": 1,
    "updateGame": 2,
    "fetchMetadata": 2,
    "launchGame": 1,
    "chooseFile": 0,
}


def _require_str(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise BadRequest(f"{what} must be a non-empty string")
    return value


class Bridge:
    def __init__(
        self,
        store: LibraryStore,
        client: SteamClient,
        launcher: Callable[[str], None] = launch,
        picker: Callable[[], Optional[str]] = choose_file,
    ):
        self.store = store
        self.client = client
        self.launcher = launcher
        self.picker = picker

    # -- operations -----------------------------------------------------------

    def list_games(self) -> List[dict]:
        return [g.to_dict() for g in self.store.list()]

    def add_game(self, path: str) -> dict:
        return self.store.add(_require_str(path, "path")).to_dict()

    def delete_game(self, game_id: str) -> dict:
        self.store.remove(_require_str(game_id, "id"))
        return {"success": True}

    def update_game(self, game_id: str, fields: Dict[str, Any]) -> dict:
        return self.store.update(_require_str(game_id, "id"), fields).to_dict()

    def fetch_metadata(self, game_id: str, name: Optional[str]) -> dict:
        entry = self.store.get(_require_str(game_id, "id"))
        query = name if isinstance(name, str) and name.strip() else entry.name

        # nothing is written unless enrichment fully succeeded
        meta = self.client.enrich(query)
        changes: Dict[str, Any] = {"metadata": meta}
        if meta.name:
            changes["name"] = meta.name
        return self.store.update(entry.id, changes).to_dict()

    def launch_game(self, path: str) -> dict:
        self.launcher(_require_str(path, "path"))
        return {"success": True}

    def choose_file(self) -> Optional[str]:
        return self.picker()

    # -- dispatch ---------------------------------------------------------------

    def invoke(self, operation: str, args: Sequence[Any] = ()) -> Dict[str, Any]:
        """Run one named operation; failures come back as a message string."""
        try:
            result = self.call(operation, args)
        except LibraryError as e:
            logger.warning("%s failed: %s", operation, e)
            return {"ok": False, "error": str(e), "kind": type(e).__name__}
        except Exception:
            logger.exception("%s crashed", operation)
            return {"ok": False, "error": f"{operation} failed unexpectedly", "kind": "InternalError"}
        return {"ok": True, "result": result}

    def call(self, operation: str, args: Sequence[Any] = ()) -> Any:
        method = OPERATIONS.get(operation)
        if method is None:
            raise UnknownOperation(f"Unknown operation: {operation}")
        if not isinstance(args, (list, tuple)):
            raise BadRequest("args must be a list")
        if len(args) != ARITY[operation]:
            raise BadRequest(f"{operation} takes {ARITY[operation]} argument(s), got {len(args)}")
        return getattr(self, method)(*args)
