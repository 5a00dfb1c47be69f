"""
project: Undercroft
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally loaded from a
``.env`` file) with development defaults. Dungeon generation parameters use
the same ``DUNGEON_*`` names as ``DungeonConfig.from_env`` so the HTTP surface
and the CLI agree on defaults.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so `SECRET_KEY`, `DUNGEON_*`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(overrides: dict | None = None) -> Flask:
    """Build and return a configured Flask app.

    ``overrides`` is applied last (tests use it to shrink grids and disable the cache).
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs still serve requests; only file logging needs the folder
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        # Dungeon generation defaults (see DungeonConfig.from_env)
        DUNGEON_WIDTH=int(os.getenv("DUNGEON_WIDTH", "101")),
        DUNGEON_HEIGHT=int(os.getenv("DUNGEON_HEIGHT", "101")),
        DUNGEON_ROOM_ATTEMPTS=int(os.getenv("DUNGEON_ROOM_ATTEMPTS", "500")),
        DUNGEON_SIZE_MODIFIER=int(os.getenv("DUNGEON_SIZE_MODIFIER", "0")),
        DUNGEON_DIRECTION_CHANCE=int(os.getenv("DUNGEON_DIRECTION_CHANCE", "0")),
        DUNGEON_CONNECTION_CHANCE=int(os.getenv("DUNGEON_CONNECTION_CHANCE", "30")),
        DUNGEON_SEED=os.getenv("DUNGEON_SEED") or None,
        DUNGEON_ENABLE_GENERATION_METRICS=_env_flag("DUNGEON_ENABLE_GENERATION_METRICS", "1"),
        DUNGEON_DISABLE_CACHE=_env_flag("DUNGEON_DISABLE_CACHE"),
        DUNGEON_CACHE_MAX=int(os.getenv("DUNGEON_CACHE_MAX", "8")),
        # Largest grid side accepted over HTTP; generation is quadratic in it
        DUNGEON_MAX_SIDE=int(os.getenv("DUNGEON_MAX_SIDE", "501")),
    )
    if overrides:
        app.config.update(overrides)

    from undercroft.routes.dungeon_api import bp_dungeon
    from undercroft.routes.seed_api import bp_seed

    app.register_blueprint(bp_dungeon)
    app.register_blueprint(bp_seed)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app


__all__ = ["create_app"]
