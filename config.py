import os
import secrets
import warnings
from datetime import datetime

from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, ".env"))


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ["true", "on", "1"]


class Config:
    # Generate a secure key if not provided (with warning)
    _secret_key = os.environ.get("SECRET_KEY")

    if not _secret_key:
        _secret_key = secrets.token_urlsafe(32)
        warnings.warn(
            "SECRET_KEY not set! Using auto-generated key. "
            "Sessions on the debug tools will reset on app restart.",
            UserWarning,
        )

    SECRET_KEY = _secret_key

    # Pool settings
    POOL_TIMEZONE = os.environ.get("POOL_TIMEZONE", "America/Los_Angeles")
    CURRENT_SEASON = int(os.environ.get("CURRENT_SEASON") or datetime.now().year)

    # Clock override applied at start-up (ISO format, local pool time if naive)
    DEBUG_DATETIME = os.environ.get("DEBUG_DATETIME")

    # Simulated in-progress game states while the clock is overridden
    DEMO_MODE = _env_flag("DEMO_MODE", "False")
    DEMO_STATE_SEED = (
        int(os.environ["DEMO_STATE_SEED"]) if os.environ.get("DEMO_STATE_SEED") else None
    )

    # Debug/demo endpoints (clock override)
    DEBUG_TOOLS_ENABLED = _env_flag("DEBUG_TOOLS_ENABLED", "True")

    # Scheduler configuration
    SCHEDULER_ENABLED = _env_flag("SCHEDULER_ENABLED", "True")
    VISIBILITY_CHECK_INTERVAL = int(os.environ.get("VISIBILITY_CHECK_INTERVAL") or 60)

    # Socket.IO
    SOCKETIO_CORS_ORIGINS = os.environ.get("SOCKETIO_CORS_ORIGINS", "*")

    # Logging configuration
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_TO_CONSOLE = _env_flag("LOG_TO_CONSOLE", "True")
    LOG_TO_FILE = _env_flag("LOG_TO_FILE", "True")
    LOG_DIR = os.environ.get("LOG_DIR", "logs")

    # Environment detection
    FLASK_ENV = os.environ.get("FLASK_ENV", "development")
    DEBUG = FLASK_ENV == "development"
    TESTING = False


class DevelopmentConfig(Config):
    """Development configuration with helpful defaults"""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration with security focus"""

    DEBUG = False
    DEBUG_TOOLS_ENABLED = _env_flag("DEBUG_TOOLS_ENABLED", "False")

    def __init__(self):
        if not os.environ.get("SECRET_KEY"):
            warnings.warn(
                "PRODUCTION WARNING: SECRET_KEY not explicitly set! "
                "Using auto-generated key is not recommended for production.",
                UserWarning,
            )
        if self.DEBUG_TOOLS_ENABLED:
            warnings.warn(
                "PRODUCTION WARNING: DEBUG_TOOLS_ENABLED exposes the clock override!",
                UserWarning,
            )


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    DEBUG_TOOLS_ENABLED = True
    SCHEDULER_ENABLED = False
    LOG_TO_CONSOLE = False
    LOG_TO_FILE = False
    DEBUG_DATETIME = None
    DEMO_MODE = False


# Configuration mapping
config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
