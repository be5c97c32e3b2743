"""
project: Roomwalk
module: layout_api.py
License: MIT

Layout generation API routes.

Generates room layouts on demand and serves cached layouts by seed. Layout
generation is deterministic for a (seed, bounds) pair, so finished layouts
are cached in-process.
"""

import hashlib
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from roomwalk import __version__
from roomwalk.layout import ConfigurationError, GenerationAborted, Layout, LayoutConfig
from roomwalk.layout.render import render_rows
from roomwalk.validation import GENERATE_LAYOUT, validate

bp_layout = Blueprint("layout", __name__)

SEED_MAX = 9223372036854775807

# Simple in-process cache (seed, bounds)->Layout. Locked because the dev server may serve threads concurrently.
_layout_cache = {}
_layout_cache_lock = threading.Lock()
_LAYOUT_CACHE_MAX = 8  # small LRU-ish manual cap


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded 64-bit int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    s = payload_seed.strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _cache_key(config: LayoutConfig):
    return (config.seed, config.move_amount, config.min_y, config.max_y, config.max_x, config.start_x)


def get_cached_layout(config: LayoutConfig) -> Layout:
    if current_app.config.get("LAYOUT_DISABLE_CACHE"):
        return Layout(config)
    key = _cache_key(config)
    with _layout_cache_lock:
        layout = _layout_cache.get(key)
        if layout is not None:
            return layout
    layout = Layout(config)
    with _layout_cache_lock:
        _layout_cache[key] = layout
        if len(_layout_cache) > _LAYOUT_CACHE_MAX:
            first_key = next(iter(_layout_cache.keys()))
            if first_key != key:
                _layout_cache.pop(first_key, None)
    return layout


def _layout_response(layout: Layout):
    data = layout.to_dict()
    if not current_app.config.get("LAYOUT_ENABLE_METRICS", True):
        data["metrics"] = {}
    data["ascii"] = render_rows(layout)
    return jsonify(data)


def _build(config: LayoutConfig):
    try:
        layout = get_cached_layout(config.validate())
    except ConfigurationError as exc:
        return jsonify(exc.to_dict()), 400
    except GenerationAborted as exc:
        return jsonify(exc.to_dict()), 500
    return _layout_response(layout)


@bp_layout.route("/api/layout/health")
def layout_health():
    return jsonify({"status": "ok", "version": __version__})


@bp_layout.route("/api/layout/generate", methods=["POST"])
def generate():
    """Generate (or fetch from cache) a layout.

    Body JSON (all optional):
      { "seed": <int|str>, "move_amount": int, "min_y": int, "max_y": int,
        "max_x": int, "start_x": int }
    Missing bounds fall back to ROOMWALK_* environment settings, then defaults.

    Response: { seed, config, start, steps, rooms: [...], metrics, ascii }
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    ok, data = validate(payload, GENERATE_LAYOUT)
    if not ok:
        return jsonify(data), 400
    seed = _coerce_seed(data.pop("seed", None))
    try:
        config = LayoutConfig.from_env(**data)
    except ConfigurationError as exc:
        return jsonify(exc.to_dict()), 400
    config.seed = seed
    return _build(config)


@bp_layout.route("/api/layout/<int:seed>")
def layout_for_seed(seed: int):
    """Return the layout for ``seed`` under the environment/default bounds."""
    try:
        config = LayoutConfig.from_env()
    except ConfigurationError as exc:
        return jsonify(exc.to_dict()), 400
    config.seed = _coerce_seed(seed)
    return _build(config)
