"""
Pick Visibility Service

Decides when a game's picks are revealed to participants other than the pick
owner. Reveal instants are evaluated in the pool's canonical local zone and
compared against an injected clock.
"""

import logging
from datetime import timedelta

from parlay_club.models.pick_visibility import PickVisibility, VisibilityRule
from parlay_club.utils.calendar_math import (
    is_modern_season,
    resolve_season,
    resolve_week,
)
from parlay_club.utils.categorizer import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    categorize,
    is_holiday_week,
)
from parlay_club.utils.timezone_utils import get_zone_provider

logger = logging.getLogger(__name__)

WEEKEND_REVEAL_HOUR = 10
THANKSGIVING_REVEAL_HOUR = 10
THURSDAY_REVEAL_HOUR = 17

# Reveal instant reported for live and final games
ALWAYS_VISIBLE_OFFSET = timedelta(hours=24)

MODERN_HIDDEN_DAYS = ["Thursday", "Friday", "Saturday", "Sunday", "Monday"]
LEGACY_HIDDEN_DAYS = ["Thursday", "Friday", "Saturday", "Sunday/Monday"]

DAY_NAMES = {
    THURSDAY: "Thursday",
    FRIDAY: "Friday",
    SATURDAY: "Saturday",
    SUNDAY: "Sunday",
    MONDAY: "Monday",
}


def _game_map(games):
    return {game.id: game for game in games}


class VisibilityEngine:
    """Computes pick visibility for games against a clock.

    Args:
        clock: Object with ``now()`` (and ``is_overridden``)
        zone: LocalZoneProvider, defaults to the app's canonical zone
        demo_states: Optional DemoGameStateGenerator consulted while the
            clock is overridden
    """

    def __init__(self, clock, zone=None, demo_states=None):
        self.clock = clock
        self.zone = zone or get_zone_provider()
        self.demo_states = demo_states

    def now(self):
        return self.clock.now()

    def _effective_game(self, game, now):
        if self.demo_states is None or not getattr(self.clock, "is_overridden", False):
            return game
        if not self.demo_states.applies_to(game, now):
            return game
        return self.demo_states.simulate(game, now)

    def _reveal_instant(self, kickoff_local, season, is_holiday):
        """Weekday rule for a game that has not started"""
        zone = self.zone
        game_day = kickoff_local.date()
        weekday = game_day.weekday()

        if weekday == THURSDAY and is_holiday:
            return (
                zone.at_local_time(game_day, THANKSGIVING_REVEAL_HOUR),
                VisibilityRule.THANKSGIVING_10AM,
            )

        if weekday == THURSDAY:
            return (
                zone.at_local_time(game_day, THURSDAY_REVEAL_HOUR),
                VisibilityRule.THURSDAY_5PM,
            )

        if weekday == FRIDAY:
            # Friday picks stay hidden until Saturday morning
            saturday = game_day + timedelta(days=1)
            return (
                zone.at_local_time(saturday, WEEKEND_REVEAL_HOUR),
                VisibilityRule.WEEKEND_10AM,
            )

        if weekday in (SATURDAY, SUNDAY):
            return (
                zone.at_local_time(game_day, WEEKEND_REVEAL_HOUR),
                VisibilityRule.WEEKEND_10AM,
            )

        if weekday == MONDAY:
            if is_modern_season(season):
                return kickoff_local, VisibilityRule.MONDAY_KICKOFF
            sunday = game_day - timedelta(days=1)
            return (
                zone.at_local_time(sunday, WEEKEND_REVEAL_HOUR),
                VisibilityRule.WEEKEND_10AM,
            )

        # Tuesday/Wednesday: most recent Saturday strictly before the game day
        days_back = (weekday - SATURDAY) % 7 or 7
        saturday = game_day - timedelta(days=days_back)
        return (
            zone.at_local_time(saturday, WEEKEND_REVEAL_HOUR),
            VisibilityRule.WEEKEND_10AM,
        )

    def compute_visibility(self, game):
        """
        Determine when a game's picks become visible.

        Live and completed games are always visible. Other games follow the
        weekday rules; every game produces a reveal instant.

        Returns:
            PickVisibility
        """
        zone = self.zone
        now = self.now()
        season = resolve_season(game, zone)
        week = resolve_week(game, zone)

        kickoff_local = zone.to_local(game.kickoff)
        holiday = kickoff_local.weekday() == THURSDAY and is_holiday_week(week, season)
        category = categorize(game.kickoff, season, week, zone)

        effective = self._effective_game(game, now)

        if effective.is_live or effective.is_final:
            rule = (
                VisibilityRule.GAME_IN_PROGRESS
                if effective.is_live
                else VisibilityRule.GAME_COMPLETED
            )
            return PickVisibility(
                game_id=game.id,
                game_date=kickoff_local,
                game_state=effective.state,
                category=category,
                is_holiday=holiday,
                visible_at=kickoff_local - ALWAYS_VISIBLE_OFFSET,
                is_visible=True,
                rule=rule,
            )

        visible_at, rule = self._reveal_instant(kickoff_local, season, holiday)

        return PickVisibility(
            game_id=game.id,
            game_date=kickoff_local,
            game_state=effective.state,
            category=category,
            is_holiday=holiday,
            visible_at=visible_at,
            is_visible=now >= visible_at,
            rule=rule,
        )

    def is_pick_visible_to_user(self, pick, game, viewing_user_id):
        """Check if a pick should be shown to a specific user"""
        if pick.user_id == viewing_user_id:
            return True

        return self.compute_visibility(game).is_visible

    def filter_visible_picks(self, picks, games, viewing_user_id):
        """
        Filter picks down to what the viewing user may see.

        Own picks are always kept. Picks of other users are kept once their
        game is visible; picks whose game cannot be found are dropped.
        """
        game_map = _game_map(games)
        visibility_cache = {}
        visible_picks = []

        for pick in picks:
            if pick.user_id == viewing_user_id:
                visible_picks.append(pick)
                continue

            game = game_map.get(pick.game_id)
            if game is None:
                logger.warning(
                    f"Dropping pick of user {pick.user_id}: unknown game {pick.game_id}"
                )
                continue

            if game.id not in visibility_cache:
                visibility_cache[game.id] = self.compute_visibility(game)

            if visibility_cache[game.id].is_visible:
                visible_picks.append(pick)

        return visible_picks

    def hidden_pick_counts(self, picks, games, viewing_user_id):
        """
        Count other users' hidden picks by local game day.

        Modern seasons count Sunday and Monday separately; legacy seasons
        report them together as "Sunday/Monday".
        """
        game_map = _game_map(games)
        is_modern = bool(games) and is_modern_season(resolve_season(games[0], self.zone))
        counts = dict.fromkeys(MODERN_HIDDEN_DAYS if is_modern else LEGACY_HIDDEN_DAYS, 0)

        for pick in picks:
            if pick.user_id == viewing_user_id:
                continue

            game = game_map.get(pick.game_id)
            if game is None:
                continue

            visibility = self.compute_visibility(game)
            if visibility.is_visible:
                continue

            day_name = DAY_NAMES.get(visibility.weekday)
            if day_name is None:
                continue
            if not is_modern and day_name in ("Sunday", "Monday"):
                day_name = "Sunday/Monday"
            counts[day_name] += 1

        return counts

    def visibility_status(self, games, week=None):
        """Visibility for every game (optionally one week), keyed by game id"""
        return {
            game.id: self.compute_visibility(game)
            for game in games
            if week is None or resolve_week(game, self.zone) == week
        }

    def next_visibility_change(self, games, week=None):
        """Earliest future reveal instant among hidden games (None if none)"""
        now = self.now()
        pending = [
            visibility.visible_at
            for visibility in self.visibility_status(games, week).values()
            if not visibility.is_visible
        ]

        if not pending:
            return None

        next_change = min(pending)
        if next_change < now:
            return None
        return next_change

    def should_trigger_update(self, games, last_check, week=None):
        """Check if any game became visible since the last check"""
        now = self.now()
        for visibility in self.visibility_status(games, week).values():
            if last_check < visibility.visible_at <= now:
                return True
        return False
