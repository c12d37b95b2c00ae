"""
Calendar helpers for the pool's season and week model
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta

from parlay_club.utils.timezone_utils import get_zone_provider

logger = logging.getLogger(__name__)

# First season scored per calendar day instead of per weekly category
MODERN_SEASON_CUTOVER = 2025

REGULAR_SEASON_WEEKS = 18

# A game within this window of "now" marks its week as current
ACTIVE_GAME_WINDOW = timedelta(hours=4)

MONDAY = 0
THURSDAY = 3


def _first_weekday_on_or_after(day, weekday):
    return day + timedelta(days=(weekday - day.weekday()) % 7)


def holiday_date(season):
    """Thanksgiving: the fourth Thursday of November"""
    first_thursday = _first_weekday_on_or_after(date(season, 11, 1), THURSDAY)
    return first_thursday + timedelta(weeks=3)


def week_one_start(season):
    """Thursday after Labor Day (first Monday on/after September 1)"""
    labor_day = _first_weekday_on_or_after(date(season, 9, 1), MONDAY)
    return labor_day + timedelta(days=3)


def week_number(moment, season, zone=None):
    """
    Estimate the pool week for a date or kickoff.

    Only used when a game arrives without a week number. Datetimes are
    converted to the canonical local date first.
    """
    if isinstance(moment, datetime):
        zone = zone or get_zone_provider()
        moment = zone.local_date(moment)

    days_since_start = (moment - week_one_start(season)).days
    return max(1, days_since_start // 7 + 1)


def is_modern_season(season):
    """Check if a season uses daily parlay grouping"""
    return season >= MODERN_SEASON_CUTOVER


def resolve_season(game, zone=None):
    """Season of a game, derived from its kickoff when missing"""
    if game.season is not None:
        return game.season

    zone = zone or get_zone_provider()
    local_day = zone.local_date(game.kickoff)
    # January/February games belong to the season that started the prior fall
    season = local_day.year - 1 if local_day.month <= 2 else local_day.year
    logger.debug(f"Game {game.id} has no season, derived {season} from kickoff")
    return season


def resolve_week(game, zone=None):
    """Week of a game, estimated from its kickoff when missing"""
    if game.week is not None:
        return game.week

    zone = zone or get_zone_provider()
    week = week_number(game.kickoff, resolve_season(game, zone), zone)
    logger.debug(f"Game {game.id} has no week, estimated week {week}")
    return week


def current_week(games, now):
    """Determine the week to display by default from game timing"""
    if not games:
        return 1

    week_games = defaultdict(list)
    for game in games:
        week_games[game.week].append(game)

    for week in range(1, REGULAR_SEASON_WEEKS + 1):
        games_this_week = week_games.get(week)
        if not games_this_week:
            continue

        has_recent_activity = any(
            abs(now - game.kickoff_utc) <= ACTIVE_GAME_WINDOW
            for game in games_this_week
        )
        all_completed = all(game.is_final for game in games_this_week)

        if has_recent_activity or not all_completed:
            logger.debug(f"Determined current week as {week} based on game activity")
            return week

    logger.info("Using fallback current week: 1")
    return 1
