"""
project: tilegen
module: layout_api.py
License: MIT

Layout retrieval API routes.

Serves generated layouts to the browser tile renderer in three shapes (plain
JSON layers, a Tiled map document, an ASCII preview) plus the tile code
vocabulary the renderer maps onto its atlas.
"""

import hashlib
import os
import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from tilegen.layout import LayoutConfig, LayoutGenerator, LayoutResult, tileset_vocabulary
from tilegen.layout.config import LayoutSizeError, check_dimension
from tilegen.layout.export import to_ascii, to_json, to_tiled
from tilegen.logging_utils import get_logger

bp_layout = Blueprint("layout", __name__)
log = get_logger("tilegen.api")

SEED_MAX = 9223372036854775807


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into bounded 64-bit signed int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    return random.randint(1, 1_000_000)


# Small in-process cache (seed,width,height)->LayoutResult, lock-guarded for threaded servers.
_layout_cache = {}
_layout_cache_lock = threading.Lock()
_LAYOUT_CACHE_MAX = 8


def get_cached_layout(seed: int, width: int, height: int, enable_metrics: bool = True) -> LayoutResult:
    config = LayoutConfig(width=width, height=height, seed=seed).normalized()
    if os.environ.get("LAYOUT_DISABLE_CACHE") == "1":
        return LayoutGenerator(config, enable_metrics=enable_metrics).run()
    key = (seed, config.width, config.height)
    with _layout_cache_lock:
        result = _layout_cache.get(key)
    if result is not None:
        log.debug(event="layout_cache_hit", seed=seed, width=config.width, height=config.height)
        return result
    result = LayoutGenerator(config, enable_metrics=enable_metrics).run()
    log.info(event="layout_cache_miss", seed=seed, width=config.width, height=config.height)
    with _layout_cache_lock:
        _layout_cache[key] = result
        if len(_layout_cache) > _LAYOUT_CACHE_MAX:
            first_key = next(iter(_layout_cache.keys()))
            if first_key != key:
                _layout_cache.pop(first_key, None)
    return result


def _dimension(name: str, default: int, maximum: int) -> int:
    raw = request.args.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise LayoutSizeError(name, "must be an integer", "type")
    check_dimension(name, value)
    if value > maximum:
        raise LayoutSizeError(name, f"must be at most {maximum}", "too_large")
    return value


def _flag(name: str) -> bool:
    return request.args.get(name, "0").strip().lower() in ("1", "true", "yes", "on")


def _requested_layout() -> LayoutResult:
    cfg = current_app.config
    width = _dimension("width", cfg["LAYOUT_DEFAULT_WIDTH"], cfg["LAYOUT_MAX_WIDTH"])
    height = _dimension("height", cfg["LAYOUT_DEFAULT_HEIGHT"], cfg["LAYOUT_MAX_HEIGHT"])
    seed = _coerce_seed(request.args.get("seed"))
    return get_cached_layout(seed, width, height, enable_metrics=cfg.get("LAYOUT_ENABLE_METRICS", True))


@bp_layout.route("/api/layout")
def layout():
    """
    Return a generated layout.
    Query: width, height, seed (int or string), compact (run-length layers).
    Response: { seed, width, height, compact, layers: {...}, rooms: [...], metrics: {...} }
    """
    result = _requested_layout()
    return jsonify(to_json(result, compact=_flag("compact")))


@bp_layout.route("/api/layout/tiled")
def layout_tiled():
    result = _requested_layout()
    return jsonify(to_tiled(result.layers))


@bp_layout.route("/api/layout/ascii")
def layout_ascii():
    result = _requested_layout()
    return Response(to_ascii(result.layers.walls) + "\n", mimetype="text/plain")


@bp_layout.route("/api/tileset")
def tileset():
    return jsonify(tileset_vocabulary())


@bp_layout.route("/healthz")
def healthz():
    from tilegen import __version__

    return jsonify({"status": "ok", "version": __version__})
