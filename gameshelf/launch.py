# gameshelf/launch.py
from __future__ import annotations

import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import List, Union

from .errors import FileNotFound, LaunchFailed
from .utils import is_macos, is_windows

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
# Small helpers
# ──────────────────────────────────────────────────────────────────────────────

def opener_argv(path: str) -> List[str]:
    """argv for the desktop's default-open helper (never a shell string)."""
    if is_macos():
        return ["open", path]
    return ["xdg-open", path]

def _open_with_os(path: str) -> None:
    if is_windows():
        os.startfile(path)  # type: ignore[attr-defined]
        return
    p = subprocess.Popen(
        opener_argv(path),
        shell=False,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
    # reap the opener once it exits; the game itself is not tracked
    if hasattr(p, "wait"):
        threading.Thread(target=p.wait, daemon=True).start()

# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────

def launch(path: Union[str, Path]) -> None:
    """
    Hand `path` to the OS default-open mechanism.

    - The file is checked at call time; a missing file never reaches the OS.
    - Fire-and-forget: returning means the request was accepted, not that
      the game is running. The OS owns the child process.
    """
    target = str(path)
    if not target or not Path(target).exists():
        logger.warning("Launch refused, file missing: %s", target)
        raise FileNotFound("Game executable not found")

    try:
        _open_with_os(target)
    except OSError as e:
        logger.error("Launch failed for %s: %s", target, e)
        raise LaunchFailed(e.strerror or str(e)) from e

    logger.info("Launch requested: %s", target)
