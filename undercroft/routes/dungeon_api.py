"""
project: Undercroft
module: dungeon_api.py
License: MIT

Dungeon layout API routes.

Serves generated region grids, per-tile passability, and room lookups backed
by each dungeon's spatial index. Generation parameters come from query
arguments, falling back to the app's ``DUNGEON_*`` config; the seed falls back
to the session seed set through ``/api/dungeon/seed``.
"""

import random
import threading

from flask import Blueprint, current_app, jsonify, request, session

from undercroft.dungeon import DungeonConfig, DungeonError, InvalidConfig, Rect, generate_dungeon
from undercroft.logging_utils import get_logger
from undercroft.routes.seed_api import _coerce_seed
from undercroft.utils.grid_codec import encode_rows

log = get_logger("undercroft.api")

# Simple in-process cache config -> Dungeon. Finished dungeons are frozen, so
# sharing them between requests is safe; the lock only guards the dict.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()


def _cache_key(config: DungeonConfig) -> tuple:
    return (
        config.seed,
        config.width,
        config.height,
        config.room_attempts,
        config.size_modifier,
        config.direction_chance,
        config.connection_chance,
    )


def get_cached_dungeon(config: DungeonConfig):
    cfg = current_app.config
    if cfg.get("DUNGEON_DISABLE_CACHE"):
        return generate_dungeon(config)
    key = _cache_key(config)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = generate_dungeon(config)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > cfg.get("DUNGEON_CACHE_MAX", 8):
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def clear_dungeon_cache() -> None:
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


def _int_arg(name: str, default=None):
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        if default is None:
            raise InvalidConfig(name, "is required")
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfig(name, f"must be an integer, got {raw!r}") from None


def _resolve_seed() -> int:
    raw = request.args.get("seed")
    if raw is not None and raw.strip():
        return _coerce_seed(raw)
    if session.get("dungeon_seed") is not None:
        return session["dungeon_seed"]
    configured = current_app.config.get("DUNGEON_SEED")
    if configured is not None:
        return _coerce_seed(configured)
    # Pin a random seed to the session so follow-up tile/room calls agree
    seed = random.randint(1, 1_000_000)
    session["dungeon_seed"] = seed
    return seed


def config_from_request() -> DungeonConfig:
    cfg = current_app.config
    config = DungeonConfig(
        width=_int_arg("width", cfg["DUNGEON_WIDTH"]),
        height=_int_arg("height", cfg["DUNGEON_HEIGHT"]),
        room_attempts=_int_arg("room_attempts", cfg["DUNGEON_ROOM_ATTEMPTS"]),
        size_modifier=_int_arg("size_modifier", cfg["DUNGEON_SIZE_MODIFIER"]),
        direction_chance=_int_arg("direction_chance", cfg["DUNGEON_DIRECTION_CHANCE"]),
        connection_chance=_int_arg("connection_chance", cfg["DUNGEON_CONNECTION_CHANCE"]),
        seed=_resolve_seed(),
        enable_metrics=bool(cfg["DUNGEON_ENABLE_GENERATION_METRICS"]),
    )
    max_side = cfg["DUNGEON_MAX_SIDE"]
    for name in ("width", "height"):
        if getattr(config, name) > max_side:
            raise InvalidConfig(name, f"must be at most {max_side}")
    return config.validate()


bp_dungeon = Blueprint("dungeon", __name__)


@bp_dungeon.errorhandler(DungeonError)
def _dungeon_error(err):
    log.warn(event="dungeon_request_rejected", path=request.path, error=str(err))
    return jsonify({"error": str(err)}), 400


@bp_dungeon.route("/api/dungeon/map")
def dungeon_map():
    """
    Return the region grid for the requested parameters.
    Response: { 'seed', 'width', 'height', 'connector_region', 'main_room',
                'rooms': [...], 'metrics': {...}, 'grid' | 'grid_rle' }
    ``grid`` is row-major (grid[y][x]); -1 marks impassable cells.
    """
    encoding = request.args.get("encoding", "rows")
    if encoding not in ("rows", "rle"):
        raise InvalidConfig("encoding", "must be 'rows' or 'rle'")
    dungeon = get_cached_dungeon(config_from_request())
    payload = dungeon.to_dict(include_grid=False)
    rows = dungeon.grid.to_rows()
    if encoding == "rle":
        payload["grid_rle"] = encode_rows(rows)
    else:
        payload["grid"] = rows
    return jsonify(payload)


@bp_dungeon.route("/api/dungeon/tile")
def dungeon_tile():
    """
    Return region id and passability for one cell.
    Response: { 'x', 'y', 'region', 'passable' }
    """
    x = _int_arg("x")
    y = _int_arg("y")
    dungeon = get_cached_dungeon(config_from_request())
    region = dungeon.region_at(x, y)
    return jsonify({"x": x, "y": y, "region": region, "passable": dungeon.is_passable(x, y)})


@bp_dungeon.route("/api/dungeon/rooms")
def dungeon_rooms():
    """
    Return rooms overlapping a viewport rectangle (x, y, w, h).
    Without a viewport every room is returned.
    Response: { 'seed', 'rooms': [...] }
    """
    dungeon = get_cached_dungeon(config_from_request())
    if request.args.get("x") is None:
        rooms = dungeon.rooms
    else:
        view = Rect(_int_arg("x"), _int_arg("y"), _int_arg("w"), _int_arg("h"))
        rooms = dungeon.rooms_overlapping(view)
    return jsonify({"seed": dungeon.seed, "rooms": [r.to_dict() for r in rooms]})
