import json
import logging
import math
from typing import Any, Callable, Dict
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULTS = {
    "country": "us",
    "language": "en",
    "request_timeout": 10.0,
    "directory_ttl_hours": 24.0,
}

def _text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("expected a non-empty string")
    return value.strip()

def _positive(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("expected a number")
    n = float(value)
    if not math.isfinite(n) or n <= 0:
        raise ValueError("expected a positive number")
    return n

COERCE: Dict[str, Callable[[Any], Any]] = {
    "country": _text,
    "language": _text,
    "request_timeout": _positive,
    "directory_ttl_hours": _positive,
}

def load_settings(settings_file: Path) -> Dict:
    settings = dict(DEFAULTS)
    try:
        if not settings_file.exists():
            return settings
        data = json.loads(settings_file.read_text("utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", settings_file, e)
        return settings
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", settings_file)
        return settings

    for key, coerce in COERCE.items():
        if key not in data:
            continue
        try:
            settings[key] = coerce(data[key])
        except (TypeError, ValueError) as e:
            logger.warning("Bad %s in %s (%r: %s); using %r", key, settings_file, data[key], e, DEFAULTS[key])
    return settings
