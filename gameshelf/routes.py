from __future__ import annotations
import logging
from flask import Blueprint, current_app, render_template_string, request, jsonify

from .bridge import Bridge, OPERATIONS
from .errors import LibraryError
from .templates import INDEX_HTML
from .utils import platform_name

logger = logging.getLogger(__name__)

bp = Blueprint("gameshelf", __name__)

LOOPBACK = {"127.0.0.1", "::1", "localhost"}

# error kind -> HTTP status
STATUS_BY_KIND = {cls.__name__: cls.http_status for cls in LibraryError.__subclasses__()}

def _bridge() -> Bridge:
    return current_app.extensions["gameshelf"]

@bp.before_request
def local_only():
    # launch and file picking act on this machine, so only it may ask
    if current_app.config.get("LOCAL_ONLY") and request.remote_addr not in LOOPBACK:
        logger.warning("Blocked request from %s to %s", request.remote_addr, request.path)
        return jsonify({"ok": False, "error": "Unauthorized Access"}), 403

@bp.get("/")
def index():
    return render_template_string(
        INDEX_HTML,
        app_title=current_app.config["APP_TITLE"],
        platform=platform_name(),
    )

@bp.get("/api/operations")
def operations():
    return jsonify({"operations": sorted(OPERATIONS), "platform": platform_name()})

@bp.post("/api/<operation>")
def invoke(operation):
    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return jsonify({"ok": False, "error": "Request body must be a JSON object"}), 400

    reply = _bridge().invoke(operation, body.get("args", []))
    if reply["ok"]:
        return jsonify(reply), 200
    return jsonify(reply), STATUS_BY_KIND.get(reply.get("kind"), 500)

@bp.get("/favicon.ico")
def favicon():
    return ("", 204)
