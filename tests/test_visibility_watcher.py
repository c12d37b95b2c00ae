"""Tests for parlay_club/services/visibility_watcher.py."""

import threading
import time

import pytest

from parlay_club.services import visibility_watcher
from parlay_club.services.visibility_watcher import VISIBILITY_EVENT, VisibilityWatcher


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event_type, payload):
        self.events.append((event_type, payload))


@pytest.fixture()
def games(make_game):
    return [
        make_game(1, (2025, 9, 4, 17, 20), week=1),
        make_game(2, (2025, 9, 7, 13, 0), week=1),
        make_game(3, (2025, 9, 14, 13, 0), week=2),
    ]


@pytest.fixture()
def broadcast():
    return Recorder()


@pytest.fixture()
def watcher_at(engine, clock, games, broadcast):
    """Watcher whose last check happened at the given instant"""

    def _watcher_at(instant):
        clock.set_override(instant)
        return VisibilityWatcher(
            engine=engine,
            game_source=lambda season: games,
            broadcast=broadcast,
            season=2025,
            interval=60,
        )

    return _watcher_at


class TestCheckForChanges:
    def test_broadcasts_when_week_becomes_visible(self, watcher_at, clock, local, broadcast):
        watcher = watcher_at(local(2025, 9, 4, 16, 55))
        clock.set_override(local(2025, 9, 4, 17, 5))

        assert watcher.check_for_changes() == [1]

        assert len(broadcast.events) == 1
        event_type, payload = broadcast.events[0]
        assert event_type == VISIBILITY_EVENT
        assert payload["type"] == VISIBILITY_EVENT
        assert payload["season"] == 2025
        assert payload["week"] == 1
        assert isinstance(payload["timestamp"], int)

    def test_same_change_broadcast_once(self, watcher_at, clock, local, broadcast):
        watcher = watcher_at(local(2025, 9, 4, 16, 55))
        clock.set_override(local(2025, 9, 4, 17, 5))
        watcher.check_for_changes()

        clock.set_override(local(2025, 9, 4, 17, 10))
        assert watcher.check_for_changes() == []

        assert len(broadcast.events) == 1
        assert watcher.stats["total_checks"] == 2
        assert watcher.stats["broadcasts_sent"] == 1
        assert watcher.last_check == local(2025, 9, 4, 17, 10)

    def test_check_exactly_at_reveal_broadcasts_once(
        self, watcher_at, clock, local, broadcast
    ):
        watcher = watcher_at(local(2025, 9, 7, 9, 0))

        clock.set_override(local(2025, 9, 7, 10, 0))
        assert watcher.check_for_changes() == [1]

        clock.set_override(local(2025, 9, 7, 10, 5))
        assert watcher.check_for_changes() == []

        assert [payload["week"] for _, payload in broadcast.events] == [1]

    def test_multiple_weeks_in_one_check(self, watcher_at, clock, local):
        watcher = watcher_at(local(2025, 9, 4, 16, 55))
        clock.set_override(local(2025, 9, 14, 11, 0))

        assert watcher.check_for_changes() == [1, 2]

    def test_failed_check_is_recorded(self, engine, clock, local, broadcast):
        def failing_source(season):
            raise RuntimeError("schedule feed down")

        clock.set_override(local(2025, 9, 4, 16, 55))
        watcher = VisibilityWatcher(engine, failing_source, broadcast, season=2025)
        clock.set_override(local(2025, 9, 4, 17, 5))

        assert watcher.check_for_changes() == []
        assert watcher.stats["failed_checks"] == 1
        assert watcher.stats["last_error"] == "schedule feed down"
        assert watcher.get_status()["total_checks"] == 0
        assert watcher.last_check == local(2025, 9, 4, 16, 55)
        assert broadcast.events == []

    def test_missing_broadcaster_is_tolerated(self, engine, clock, local, games):
        clock.set_override(local(2025, 9, 4, 16, 55))
        watcher = VisibilityWatcher(engine, lambda season: games, None, season=2025)
        clock.set_override(local(2025, 9, 4, 17, 5))

        assert watcher.check_for_changes() == [1]
        assert watcher.stats["broadcasts_sent"] == 0


class TestUpcomingChanges:
    def test_next_scheduled_update(self, watcher_at, local):
        watcher = watcher_at(local(2025, 9, 4, 12, 0))
        assert watcher.next_scheduled_update() == local(2025, 9, 4, 17, 0)
        assert watcher.log_upcoming_changes() == local(2025, 9, 4, 17, 0)

    def test_nothing_upcoming(self, watcher_at, local):
        watcher = watcher_at(local(2025, 12, 1, 12, 0))
        assert watcher.next_scheduled_update() is None
        assert watcher.log_upcoming_changes() is None


class TestLifecycle:
    def test_start_and_stop(self, watcher_at, local):
        watcher = watcher_at(local(2025, 9, 4, 12, 0))
        watcher.start()
        try:
            assert watcher.is_running
            assert watcher.scheduler.get_job("check_pick_visibility") is not None
        finally:
            watcher.stop()
        assert not watcher.is_running

    def test_concurrent_start_creates_one_scheduler(self, watcher_at, local, monkeypatch):
        created = []

        class SlowScheduler:
            def __init__(self, **kwargs):
                created.append(self)

            def add_job(self, **kwargs):
                pass

            def start(self):
                time.sleep(0.01)

            def shutdown(self, wait=True):
                pass

        monkeypatch.setattr(visibility_watcher, "BackgroundScheduler", SlowScheduler)
        watcher = watcher_at(local(2025, 9, 4, 12, 0))

        threads = [threading.Thread(target=watcher.start) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(created) == 1
        assert watcher.get_status()["is_running"] is True
        watcher.stop()
        assert watcher.get_status()["is_running"] is False

    def test_scheduler_disabled_in_testing(self, app):
        watcher = app.extensions["parlay_club"].watcher
        assert not watcher.is_running
        assert watcher.season == app.config["CURRENT_SEASON"]
