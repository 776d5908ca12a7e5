"""
project: tilegen
module: __init__.py
License: MIT

Flask application setup.

The generator itself lives in ``tilegen.layout`` and has no web dependency;
this module wires a small Flask app around it so a browser tile renderer can
fetch layouts as JSON. Configuration is sourced from environment variables
(optionally loaded from ``.env``) with development defaults. A local
``instance/`` directory holds the log file.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from tilegen.layout.config import LayoutSizeError

__version__ = "0.1.0"

# Load .env if present so SECRET_KEY / LAYOUT_* can be supplied without
# exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only installs still serve requests; only file logging is lost.
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-integer %s=%r", name, raw)
        return default


app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    # Layout generation defaults / limits
    LAYOUT_DEFAULT_WIDTH=_env_int("LAYOUT_DEFAULT_WIDTH", 40),
    LAYOUT_DEFAULT_HEIGHT=_env_int("LAYOUT_DEFAULT_HEIGHT", 30),
    LAYOUT_MAX_WIDTH=_env_int("LAYOUT_MAX_WIDTH", 256),
    LAYOUT_MAX_HEIGHT=_env_int("LAYOUT_MAX_HEIGHT", 256),
    LAYOUT_ENABLE_METRICS=bool(os.getenv("LAYOUT_ENABLE_METRICS", "1") == "1"),
)
# Keep layer names in generation order in JSON responses
app.json.sort_keys = False

# Register HTTP blueprints (after app creation to avoid circular imports)
from tilegen.routes.layout_api import bp_layout  # noqa: E402

app.register_blueprint(bp_layout)


def create_app():
    """Return the configured Flask app instance."""
    return app


@app.errorhandler(LayoutSizeError)
def layout_size_error(e):
    return jsonify({"error": e.message, "field": e.field, "code": e.code}), 400


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
