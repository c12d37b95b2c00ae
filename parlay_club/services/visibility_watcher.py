"""
Pick Visibility Watcher

Periodically checks whether any game's picks became visible since the last
check and announces it through an injected broadcaster, so connected clients
can refresh their pick sheets.
"""

import atexit
import logging
import threading
import time
from collections import defaultdict

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from parlay_club.utils.calendar_math import REGULAR_SEASON_WEEKS, resolve_week

logger = logging.getLogger(__name__)

VISIBILITY_EVENT = "visibility-change"


class VisibilityWatcher:
    """Watches reveal instants for the current season.

    Args:
        engine: VisibilityEngine used for all visibility decisions
        game_source: Callable ``(season) -> list[Game]``
        broadcast: Callable ``(event_type, payload)``
        season: Season to watch
        interval: Seconds between checks
    """

    def __init__(
        self, engine=None, game_source=None, broadcast=None, season=None, interval=60
    ):
        self.engine = engine
        self.game_source = game_source
        self.broadcast = broadcast
        self.season = season
        self.interval = interval
        self.scheduler = None
        self._running = False
        self._lock = threading.Lock()
        self._last_check = engine.now() if engine else None
        self.stats = {
            "last_check": None,
            "total_checks": 0,
            "broadcasts_sent": 0,
            "failed_checks": 0,
            "last_error": None,
        }

    def init_app(self, app, engine, game_source=None, broadcast=None):
        """Configure from a Flask app and start if the scheduler is enabled"""
        self.engine = engine
        self.game_source = game_source or self.game_source
        self.broadcast = broadcast or self.broadcast
        self.season = app.config.get("CURRENT_SEASON", self.season)
        self.interval = app.config.get("VISIBILITY_CHECK_INTERVAL", self.interval)
        with self._lock:
            self._last_check = engine.now()

        if app.config.get("SCHEDULER_ENABLED", True) and self.game_source is not None:
            atexit.register(self.shutdown)
            self.start()

    @property
    def last_check(self):
        with self._lock:
            return self._last_check

    @property
    def is_running(self):
        with self._lock:
            return self._running

    def get_status(self):
        """Snapshot of the running flag and check statistics"""
        with self._lock:
            return {"is_running": self._running, "season": self.season, **self.stats}

    def start(self):
        """Start checking for visibility changes"""
        with self._lock:
            if self._running:
                logger.info("Visibility watcher already running")
                return

            self.scheduler = BackgroundScheduler(daemon=True, timezone="UTC")
            self.scheduler.add_job(
                func=self.check_for_changes,
                trigger=IntervalTrigger(seconds=self.interval),
                id="check_pick_visibility",
                name="Check Pick Visibility",
                max_instances=1,
                coalesce=True,
                misfire_grace_time=30,
            )
            self.scheduler.start()
            self._running = True

        logger.info(
            f"Visibility watcher started for season {self.season} "
            f"(every {self.interval}s)"
        )

    def stop(self):
        """Stop checking for visibility changes"""
        with self._lock:
            if not self._running:
                return

            try:
                self.scheduler.shutdown(wait=False)
                self._running = False
            except Exception as e:
                logger.error(f"Error stopping visibility watcher: {e}")
                return

        logger.info("Visibility watcher stopped")

    def shutdown(self):
        """Graceful shutdown"""
        self.stop()

    def _games_by_week(self):
        games_by_week = defaultdict(list)
        for game in self.game_source(self.season):
            games_by_week[resolve_week(game, self.engine.zone)].append(game)
        return games_by_week

    def check_for_changes(self):
        """Broadcast an update for every week whose picks became visible"""
        last_check = self.last_check
        current_time = self.engine.now()
        changed_weeks = []

        try:
            games_by_week = self._games_by_week()

            for week in range(1, REGULAR_SEASON_WEEKS + 1):
                games = games_by_week.get(week)
                if not games:
                    continue

                if self.engine.should_trigger_update(games, last_check):
                    logger.info(f"Visibility changed for week {week}, triggering update")
                    self.trigger_update(week)
                    changed_weeks.append(week)

        except Exception as e:
            with self._lock:
                self.stats["failed_checks"] += 1
                self.stats["last_error"] = str(e)
            logger.error(f"Error checking pick visibility: {e}")
            return changed_weeks

        with self._lock:
            self._last_check = current_time
            self.stats["total_checks"] += 1
            self.stats["last_check"] = current_time.isoformat()

        return changed_weeks

    def trigger_update(self, week):
        """Send a visibility-change event for a week"""
        if self.broadcast is None:
            logger.warning("No broadcast handler configured for visibility updates")
            return

        payload = {
            "type": VISIBILITY_EVENT,
            "season": self.season,
            "week": week,
            "message": "Pick visibility has changed, refreshing picks",
            "timestamp": int(time.time() * 1000),
        }
        self.broadcast(VISIBILITY_EVENT, payload)
        with self._lock:
            self.stats["broadcasts_sent"] += 1
        logger.info(f"Sent visibility change event for week {week}")

    def next_scheduled_update(self):
        """Earliest upcoming reveal instant across the season (None if none)"""
        next_update = None

        for week, games in self._games_by_week().items():
            week_next = self.engine.next_visibility_change(games)
            if week_next is not None and (next_update is None or week_next < next_update):
                next_update = week_next

        return next_update

    def log_upcoming_changes(self):
        """Log when the next visibility change will happen"""
        next_update = self.next_scheduled_update()
        if next_update is None:
            logger.info("No upcoming visibility changes scheduled")
            return None

        time_until = next_update - self.engine.now()
        minutes = int(time_until.total_seconds() // 60)
        logger.info(
            f"Next visibility change at {next_update.strftime('%Y-%m-%d %H:%M:%S %Z')} "
            f"(in {minutes // 60}h{minutes % 60:02d}m)"
        )
        return next_update
