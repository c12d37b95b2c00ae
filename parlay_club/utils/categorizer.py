"""
Day categorization shared by pick visibility and parlay scoring

Bonus days are the Thursday (and, in later seasons, Friday) games of the
opening week and of Thanksgiving week. Visibility and scoring must agree on
these rules, so both call the functions in this module.
"""

import logging
from enum import Enum

from parlay_club.utils.calendar_math import (
    holiday_date,
    is_modern_season,
    resolve_season,
    resolve_week,
    week_number,
)
from parlay_club.utils.timezone_utils import get_zone_provider

logger = logging.getLogger(__name__)

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

OPENING_WEEK = 1


class Category(str, Enum):
    ORDINARY = "regular"
    BONUS_A = "bonus_thursday"
    BONUS_B = "bonus_friday"


def holiday_week(season):
    """Week number containing Thanksgiving for a season"""
    return week_number(holiday_date(season), season)


def is_holiday_week(week, season):
    return week == holiday_week(season)


def is_bonus_week(week, season):
    """Opening week and Thanksgiving week carry bonus days"""
    return week == OPENING_WEEK or is_holiday_week(week, season)


def categorize(kickoff, season, week, zone=None):
    """
    Determine the parlay category of a game from its kickoff.

    Args:
        kickoff: Kickoff instant (naive is read as UTC)
        season: Season year
        week: Week number within the season
        zone: LocalZoneProvider (defaults to the app's canonical zone)

    Returns:
        Category
    """
    zone = zone or get_zone_provider()
    weekday = zone.local_weekday(kickoff)

    if weekday == THURSDAY:
        if is_bonus_week(week, season):
            return Category.BONUS_A
        return Category.ORDINARY

    if weekday == FRIDAY:
        if is_modern_season(season):
            eligible = is_bonus_week(week, season)
        else:
            # Before the cutover only Thanksgiving week had a Friday bonus
            eligible = is_holiday_week(week, season)
        return Category.BONUS_B if eligible else Category.ORDINARY

    if weekday in (SATURDAY, SUNDAY, MONDAY, TUESDAY):
        return Category.ORDINARY

    # No games are scheduled on Wednesdays
    logger.warning(
        f"Categorizing a Wednesday kickoff ({kickoff.isoformat()}, season {season}, "
        f"week {week}) as {Category.ORDINARY.value}"
    )
    return Category.ORDINARY


def categorize_game(game, zone=None):
    """Categorize a game, estimating season/week when they are missing"""
    zone = zone or get_zone_provider()
    season = resolve_season(game, zone)
    return categorize(game.kickoff, season, resolve_week(game, zone), zone)
