#!/usr/bin/env python3
import logging
import os
import sys
from pathlib import Path
from gameshelf import create_app, ensure_data_dir, BIND, PORT, DATA_DIR, LOG_LEVEL, LOG_FILENAME
from gameshelf.logging_setup import setup_logging

def _resolve_data_dir() -> str:
    if len(sys.argv) >= 2:
        return os.path.abspath(sys.argv[1])
    return os.path.abspath(DATA_DIR)

if __name__ == "__main__":
    data_dir = _resolve_data_dir()
    ensure_data_dir(data_dir)
    setup_logging(getattr(logging, LOG_LEVEL.upper(), logging.INFO), Path(data_dir) / LOG_FILENAME)
    app = create_app(data_dir)
    logging.getLogger("gameshelf").info("Game Shelf on http://%s:%d (data: %s)", BIND, PORT, data_dir)
    app.run(host=BIND, port=PORT, debug=False)
