"""
Scoring Engine for the Parlay Club

A parlay is a group of picks that must all be non-losing to score. Legacy
seasons group a week's picks by bonus category; modern seasons group them by
local calendar day. Both use the same group rule, score_group().
"""

import logging
from collections import defaultdict

from parlay_club.models.parlay_score import PickRecord, SeasonRecord, WeekScore
from parlay_club.models.pick import PickResult
from parlay_club.utils.calendar_math import is_modern_season, resolve_week
from parlay_club.utils.categorizer import Category, categorize_game
from parlay_club.utils.timezone_utils import get_zone_provider

logger = logging.getLogger(__name__)

# A parlay needs at least this many non-losing legs
MIN_PARLAY_LEGS = 2


def score_group(picks):
    """
    Calculate parlay points for one group of picks.

    Returns:
        0 if any pick lost or is still pending, or if fewer than two legs
        won or pushed. Otherwise the number of wins (pushes score nothing
        but do not break the parlay).

    Callers that need to tell "not yet determined" from a real zero must check
    the picks for pending results themselves.
    """
    wins = 0
    pushes = 0

    for pick in picks:
        if pick.result == PickResult.LOSS:
            return 0
        if pick.result == PickResult.PENDING:
            return 0
        if pick.result == PickResult.WIN:
            wins += 1
        elif pick.result == PickResult.PUSH:
            pushes += 1

    if wins + pushes < MIN_PARLAY_LEGS:
        return 0

    return wins


def _resolve_games(picks, games):
    """Pair picks with their games, dropping picks for unknown games"""
    game_map = {game.id: game for game in games}

    for pick in picks:
        game = game_map.get(pick.game_id)
        if game is None:
            logger.warning(
                f"Pick of user {pick.user_id} references unknown game {pick.game_id}, "
                "skipping"
            )
            continue
        yield pick, game


def group_by_day(picks, games, zone=None):
    """
    Group picks by the local calendar date of their game.

    Returns:
        dict mapping "YYYY-MM-DD" to picks, keys in ascending order
    """
    zone = zone or get_zone_provider()
    groups = defaultdict(list)

    for pick, game in _resolve_games(picks, games):
        groups[zone.local_date_key(game.kickoff)].append(pick)

    return {day: groups[day] for day in sorted(groups)}


def group_by_category(picks, games, zone=None):
    """Group picks by the bonus category of their game"""
    zone = zone or get_zone_provider()
    groups = {category: [] for category in Category}

    for pick, game in _resolve_games(picks, games):
        groups[categorize_game(game, zone)].append(pick)

    return groups


class CategoryGrouping:
    """Legacy seasons: one parlay per category (regular, Thursday, Friday)"""

    name = "category"

    def group(self, picks, games, zone=None):
        return group_by_category(picks, games, zone)


class DailyGrouping:
    """Modern seasons: one parlay per local calendar day"""

    name = "daily"

    def group(self, picks, games, zone=None):
        return group_by_day(picks, games, zone)


def grouping_for_season(season):
    """Select the grouping strategy for a season's era"""
    if is_modern_season(season):
        return DailyGrouping()
    return CategoryGrouping()


def score_week(user_id, picks, games, season, week, zone=None):
    """
    Score one user's picks for a week.

    Args:
        user_id: User the picks belong to
        picks: The user's picks for the week
        games: Games the picks may reference
        season: Season year (selects the grouping strategy)
        week: Week number

    Returns:
        WeekScore
    """
    grouping = grouping_for_season(season)
    groups = grouping.group(picks, games, zone)

    week_score = WeekScore(user_id=user_id, season=season, week=week)
    week_score.pending_picks = sum(
        1 for group in groups.values() for pick in group if not pick.is_completed
    )

    for key, group in groups.items():
        if not group:
            continue
        points = score_group(group)
        if isinstance(grouping, DailyGrouping):
            week_score.daily_points[key] = points
        else:
            week_score.category_points[key] = points

    week_score.calculate_total()

    logger.debug(
        f"Scored user {user_id} season {season} week {week} ({grouping.name}): "
        f"{week_score.total_points} points"
    )
    return week_score


def score_all_users(picks, games, season, week, zone=None):
    """Score every user who has picks in the list"""
    user_picks = defaultdict(list)
    for pick in picks:
        user_picks[pick.user_id].append(pick)

    return {
        user_id: score_week(user_id, picks_for_user, games, season, week, zone)
        for user_id, picks_for_user in user_picks.items()
    }


def score_season(user_id, picks, games, season, zone=None):
    """
    Score a user's whole season week by week.

    Picks are assigned to the week of their game; picks for unknown games
    are skipped.

    Returns:
        SeasonRecord with one WeekScore per week that has picks
    """
    zone = zone or get_zone_provider()
    week_picks = defaultdict(list)
    for pick, game in _resolve_games(picks, games):
        week_picks[resolve_week(game, zone)].append(pick)

    record = SeasonRecord(user_id=user_id, season=season)
    for week in sorted(week_picks):
        record.record_week(score_week(user_id, week_picks[week], games, season, week, zone))

    logger.info(
        f"Season {season} for user {user_id}: {record.total_points} points "
        f"over {len(record.week_scores)} weeks"
    )
    return record


def pick_record(picks):
    """Win-loss-push record for a list of picks (pending picks are ignored)"""
    record = PickRecord()
    for pick in picks:
        if pick.result == PickResult.WIN:
            record.wins += 1
        elif pick.result == PickResult.LOSS:
            record.losses += 1
        elif pick.result == PickResult.PUSH:
            record.pushes += 1
    return record
