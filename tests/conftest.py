import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SECRET_KEY", "test")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("LOG_TO_FILE", "false")

from parlay_club.models import Game, GameState, Pick  # noqa: E402
from parlay_club.services.visibility_service import VisibilityEngine  # noqa: E402
from parlay_club.utils.clock import OverridableClock  # noqa: E402
from parlay_club.utils.timezone_utils import LocalZoneProvider  # noqa: E402


@pytest.fixture()
def zone():
    return LocalZoneProvider("America/Los_Angeles")


@pytest.fixture()
def local(zone):
    """Aware datetime for a wall-clock time in the pool zone"""

    def _local(year, month, day, hour=0, minute=0, second=0):
        return zone.localize(datetime(year, month, day, hour, minute, second))

    return _local


@pytest.fixture()
def make_game(local):
    """Game factory taking the kickoff as local pool time"""

    def _make_game(
        game_id,
        kickoff,
        season=2025,
        week=1,
        state=GameState.SCHEDULED,
    ):
        return Game(
            id=game_id,
            kickoff=local(*kickoff).astimezone(timezone.utc),
            season=season,
            week=week,
            state=state,
        )

    return _make_game


@pytest.fixture()
def make_pick():
    def _make_pick(game_id, result="pending", user_id=1, pick_type="spread"):
        return Pick(game_id=game_id, user_id=user_id, result=result, pick_type=pick_type)

    return _make_pick


@pytest.fixture()
def clock(zone):
    clock = OverridableClock(zone)
    yield clock
    clock.clear_override()


@pytest.fixture()
def engine(clock, zone):
    return VisibilityEngine(clock, zone=zone)


@pytest.fixture()
def app():
    from parlay_club import create_app

    app = create_app("testing")
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()
