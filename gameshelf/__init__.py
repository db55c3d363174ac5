import os
from datetime import timedelta
from pathlib import Path
from typing import Optional

from flask import Flask

from .bridge import Bridge
from .routes import bp as routes_bp
from .settings import load_settings
from .steam import STEAM_APPDETAILS_URL, STEAM_APPLIST_URL, DirectoryCache, SteamClient
from .store import LibraryStore
from .utils import default_data_dir

# Bind only localhost unless overridden
BIND = os.environ.get("BIND", "127.0.0.1")
PORT = int(os.environ.get("PORT", "5000"))
DATA_DIR = os.environ.get("GAMESHELF_DATA") or str(default_data_dir())
LOG_LEVEL = os.environ.get("GAMESHELF_LOG_LEVEL", "INFO")
LOG_FILENAME = "gameshelf.log"

def ensure_data_dir(data_dir: str) -> None:
    try:
        os.makedirs(data_dir, exist_ok=True)
    except OSError as e:
        raise SystemExit(f"Cannot create data directory {data_dir}: {e}")

def create_app(data_dir: str, *, bridge: Optional[Bridge] = None) -> Flask:
    app = Flask(__name__)
    app.secret_key = os.environ.get("FLASK_SECRET", "dev-" + os.urandom(8).hex())
    root = Path(data_dir)
    app.config["DATA_DIR"] = str(root)
    app.config["APP_TITLE"] = "Game Shelf"
    app.config["LIBRARY_FILE"] = str(root / "games.json")
    app.config["SETTINGS_FILE"] = str(root / "settings.json")
    app.config["STEAM_APPLIST_URL"] = os.environ.get("STEAM_APPLIST_URL", STEAM_APPLIST_URL)
    app.config["STEAM_APPDETAILS_URL"] = os.environ.get("STEAM_APPDETAILS_URL", STEAM_APPDETAILS_URL)
    app.config["LOCAL_ONLY"] = True

    settings = load_settings(Path(app.config["SETTINGS_FILE"]))
    app.config["STEAM_COUNTRY"] = settings["country"]
    app.config["STEAM_LANGUAGE"] = settings["language"]
    app.config["REQUEST_TIMEOUT"] = float(settings["request_timeout"])
    app.config["DIRECTORY_TTL"] = timedelta(hours=float(settings["directory_ttl_hours"]))

    if bridge is None:
        client = SteamClient(
            cache=DirectoryCache(ttl=app.config["DIRECTORY_TTL"]),
            timeout=app.config["REQUEST_TIMEOUT"],
            country=app.config["STEAM_COUNTRY"],
            language=app.config["STEAM_LANGUAGE"],
            applist_url=app.config["STEAM_APPLIST_URL"],
            details_url=app.config["STEAM_APPDETAILS_URL"],
        )
        bridge = Bridge(LibraryStore(Path(app.config["LIBRARY_FILE"])), client)
    app.extensions["gameshelf"] = bridge

    app.register_blueprint(routes_bp)
    return app
