import logging
import os

from flask import Flask, jsonify, request
from flask_socketio import SocketIO

from config import config

logger = logging.getLogger(__name__)

socketio = SocketIO()


class ParlayClub:
    """Per-app container for the zone, clock and visibility services"""

    def __init__(self, zone, clock, engine, watcher):
        self.zone = zone
        self.clock = clock
        self.engine = engine
        self.watcher = watcher


def create_app(config_name=None, game_source=None):
    """
    Create the Flask host for the visibility and scoring services.

    Args:
        config_name: Key into config.config (defaults to FLASK_CONFIG)
        game_source: Optional callable ``(season) -> list[Game]`` feeding the
            visibility watcher
    """
    app = Flask(__name__)

    # Determine configuration
    if config_name is None:
        config_name = os.environ.get("FLASK_CONFIG", "default")

    app.config.from_object(config[config_name]())

    # Setup logging
    from parlay_club.utils.logging_config import setup_logging

    setup_logging(app)

    init_services(app, game_source)

    socketio.init_app(
        app,
        cors_allowed_origins=app.config.get("SOCKETIO_CORS_ORIGINS", "*"),
        logger=app.debug,
        engineio_logger=False,
    )

    if app.config.get("DEBUG_TOOLS_ENABLED", False):
        from parlay_club.routes.debug import bp as debug_bp

        app.register_blueprint(debug_bp, url_prefix="/debug")
        logger.info("Debug tools enabled at /debug")

    register_error_handlers(app)

    return app


def init_services(app, game_source=None):
    """Build the zone provider, clock, engine and watcher for an app"""
    from parlay_club.services.demo_state import DemoGameStateGenerator
    from parlay_club.services.visibility_service import VisibilityEngine
    from parlay_club.services.visibility_watcher import VisibilityWatcher
    from parlay_club.utils.clock import OverridableClock, parse_override
    from parlay_club.utils.timezone_utils import LocalZoneProvider

    zone = LocalZoneProvider(app.config["POOL_TIMEZONE"])
    clock = OverridableClock(zone)

    debug_datetime = app.config.get("DEBUG_DATETIME")
    if debug_datetime:
        try:
            clock.set_override(parse_override(debug_datetime, zone))
        except ValueError as e:
            logger.error(f"Ignoring DEBUG_DATETIME: {e}")

    demo_states = None
    if app.config.get("DEMO_MODE", False):
        demo_states = DemoGameStateGenerator(seed=app.config.get("DEMO_STATE_SEED"))
        logger.info(f"Demo game states enabled (seed={demo_states.seed})")

    engine = VisibilityEngine(clock, zone=zone, demo_states=demo_states)

    def broadcast(event_type, payload):
        socketio.emit(event_type, payload)

    watcher = VisibilityWatcher()
    app.extensions["parlay_club"] = ParlayClub(zone, clock, engine, watcher)
    watcher.init_app(app, engine, game_source=game_source, broadcast=broadcast)

    if zone.degraded:
        logger.error(
            f"Pool timezone {app.config['POOL_TIMEZONE']} could not be loaded; "
            "reveal times use a fixed offset"
        )


def register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(400)
    def bad_request_error(error):
        app.logger.warning(
            f"400 Bad Request: {str(error)} - Path: {request.path} - Method: {request.method}"
        )
        return jsonify({"error": getattr(error, "description", "Bad request")}), 400

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"error": "Resource not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal server error"}), 500
