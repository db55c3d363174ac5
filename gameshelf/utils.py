import json
import os
import sys
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def is_windows() -> bool:
    return os.name == "nt"


def is_macos() -> bool:
    return sys.platform == "darwin"


def platform_name() -> str:
    if is_windows():
        return "win32"
    return sys.platform


def default_data_dir() -> Path:
    if is_windows():
        base = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
        return Path(base) / "Game Shelf"
    return Path.home() / ".local" / "share" / "gameshelf"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def timestamp_id() -> str:
    """Milliseconds since the epoch, as a string."""
    return str(time.time_ns() // 1_000_000)


def display_name_for(path: str) -> str:
    # "C:\\Games\\Foo.exe" and "/games/Foo.exe" both give "Foo"
    base = path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    stem, dot, ext = base.rpartition(".")
    if dot and stem:
        return stem
    return base


def atomic_write_json(target: Path, payload: Any) -> None:
    """Write JSON next to `target` and swap it in with os.replace."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, target)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
