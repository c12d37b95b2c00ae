from functools import wraps

from flask import current_app, jsonify, request

from parlay_club.models import Game
from parlay_club.routes.debug import bp
from parlay_club.utils.clock import parse_override


def add_no_cache_headers(f):
    """Debug responses depend on the clock and must never be cached"""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        response = f(*args, **kwargs)
        if isinstance(response, tuple):
            response = current_app.make_response(response)
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        return response

    return decorated_function


def _pool():
    return current_app.extensions["parlay_club"]


def _clock_state():
    pool = _pool()
    override = pool.clock.override
    return {
        "now": pool.clock.now().isoformat(),
        "override": override.isoformat() if override else None,
        "is_overridden": override is not None,
        "timezone": pool.zone.zone_name,
        "degraded": pool.zone.degraded,
    }


@bp.route("/clock", methods=["GET"])
@add_no_cache_headers
def get_clock():
    """Current effective time and override state"""
    return jsonify(_clock_state())


@bp.route("/clock", methods=["POST"])
@add_no_cache_headers
def set_clock():
    """Pin the clock to a datetime for rehearsing reveal times"""
    data = request.get_json(silent=True) or {}

    try:
        instant = parse_override(data.get("datetime"), _pool().zone)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    _pool().clock.set_override(instant)
    current_app.logger.info(f"Debug clock override set via API: {instant.isoformat()}")
    return jsonify({"success": True, **_clock_state()})


@bp.route("/clock", methods=["DELETE"])
@add_no_cache_headers
def clear_clock():
    """Return to real time"""
    _pool().clock.clear_override()
    return jsonify({"success": True, **_clock_state()})


@bp.route("/visibility", methods=["POST"])
@add_no_cache_headers
def visibility():
    """Visibility of the posted games at the current effective time"""
    data = request.get_json(silent=True) or {}
    raw_games = data.get("games")
    if not isinstance(raw_games, list):
        return jsonify({"error": "Expected a 'games' list"}), 400

    try:
        games = [Game.from_dict(item) for item in raw_games]
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"error": f"Invalid game data: {e}"}), 400

    engine = _pool().engine
    statuses = engine.visibility_status(games)
    next_change = engine.next_visibility_change(games)

    return jsonify(
        {
            "now": engine.now().isoformat(),
            "games": [statuses[game.id].to_dict() for game in games],
            "next_visibility_change": next_change.isoformat() if next_change else None,
        }
    )
