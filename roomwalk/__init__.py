"""
project: Roomwalk
module: __init__.py
License: MIT

Flask application factory.

The layout generator itself lives in ``roomwalk.layout`` and has no web
dependencies; this module only wires it into a small JSON API. Configuration
is sourced from environment variables (optionally from a `.env` file) with
defaults suitable for development.
"""

import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from roomwalk.logging_utils import get_logger

__version__ = "0.2.0"

log = get_logger("roomwalk.app")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(config: dict | None = None) -> Flask:
    """Build and return a configured Flask app.

    ``config`` entries override environment-derived settings (tests pass
    ``TESTING`` and cache/metrics flags this way).
    """
    # Load .env if present so ROOMWALK_* settings can live in a file during development.
    load_dotenv()
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        LAYOUT_ENABLE_METRICS=_env_flag("LAYOUT_ENABLE_METRICS", "1"),
        LAYOUT_DISABLE_CACHE=_env_flag("LAYOUT_DISABLE_CACHE", "0"),
        SUPPRESS_ROUTE_MAP=_env_flag("ROOMWALK_SUPPRESS_ROUTE_MAP", "1"),
    )
    if config:
        app.config.update(config)

    from roomwalk.routes.layout_api import bp_layout

    app.register_blueprint(bp_layout)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        log.error(event="http_500", error_id=error_id, reason=str(e))
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    if not app.config.get("SUPPRESS_ROUTE_MAP"):
        print("Registered routes:")
        print(app.url_map)
    return app


__all__ = ["create_app", "__version__"]
