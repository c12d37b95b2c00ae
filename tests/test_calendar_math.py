"""Tests for parlay_club/utils/calendar_math.py."""

from datetime import date, datetime, timedelta, timezone

import pytest

from parlay_club.models import Game, GameState
from parlay_club.utils.calendar_math import (
    current_week,
    holiday_date,
    is_modern_season,
    resolve_season,
    resolve_week,
    week_number,
    week_one_start,
)


class TestHolidayDate:
    @pytest.mark.parametrize(
        "season, expected",
        [
            (2020, date(2020, 11, 26)),
            (2022, date(2022, 11, 24)),
            (2023, date(2023, 11, 23)),
            (2024, date(2024, 11, 28)),
            (2025, date(2025, 11, 27)),
        ],
    )
    def test_known_thanksgivings(self, season, expected):
        assert holiday_date(season) == expected

    def test_always_fourth_thursday_of_november(self):
        for season in range(1990, 2061):
            day = holiday_date(season)
            assert day.month == 11
            assert day.weekday() == 3
            assert 22 <= day.day <= 28

    def test_holiday_week_is_stable(self):
        for season in range(2000, 2041):
            first = week_number(holiday_date(season), season)
            assert week_number(holiday_date(season), season) == first


class TestWeekNumber:
    def test_week_one_starts_thursday_after_labor_day(self):
        assert week_one_start(2023) == date(2023, 9, 7)
        assert week_one_start(2024) == date(2024, 9, 5)
        assert week_one_start(2025) == date(2025, 9, 4)

    @pytest.mark.parametrize(
        "season, expected", [(2023, 12), (2024, 13), (2025, 13)]
    )
    def test_thanksgiving_week(self, season, expected):
        assert week_number(holiday_date(season), season) == expected

    def test_floored_at_one_before_season(self):
        assert week_number(date(2025, 8, 1), 2025) == 1

    def test_days_before_next_thursday_stay_in_week(self):
        assert week_number(date(2025, 9, 10), 2025) == 1
        assert week_number(date(2025, 9, 11), 2025) == 2

    def test_datetime_uses_local_date(self, zone):
        # 2025-09-11 05:30 UTC is still Wednesday evening in Los Angeles
        kickoff = datetime(2025, 9, 11, 5, 30, tzinfo=timezone.utc)
        assert week_number(kickoff, 2025, zone) == 1


class TestSeasonEra:
    @pytest.mark.parametrize(
        "season, expected",
        [(2023, False), (2024, False), (2025, True), (2026, True)],
    )
    def test_is_modern_season(self, season, expected):
        assert is_modern_season(season) is expected


class TestResolveFallbacks:
    def test_uses_assigned_values(self, make_game):
        game = make_game(1, (2025, 9, 4, 17, 20), season=2025, week=7)
        assert resolve_season(game) == 2025
        assert resolve_week(game) == 7

    def test_january_game_belongs_to_previous_season(self, zone):
        game = Game(id=1, kickoff=datetime(2026, 1, 4, 21, 0), season=None, week=None)
        assert resolve_season(game, zone) == 2025
        assert resolve_week(game, zone) == 18

    def test_missing_week_estimated_from_kickoff(self, make_game, zone):
        game = make_game(1, (2025, 9, 14, 13, 5), week=None)
        assert resolve_week(game, zone) == 2


class TestCurrentWeek:
    def test_no_games_defaults_to_week_one(self):
        assert current_week([], datetime.now(timezone.utc)) == 1

    def test_first_week_with_unfinished_games(self, make_game, local):
        games = [
            make_game(1, (2025, 9, 7, 13, 5), week=1, state=GameState.COMPLETED),
            make_game(2, (2025, 9, 14, 13, 5), week=2),
            make_game(3, (2025, 9, 21, 13, 5), week=3),
        ]
        assert current_week(games, local(2025, 9, 10, 12)) == 2

    def test_recent_activity_keeps_week_current(self, make_game, local):
        games = [
            make_game(1, (2025, 9, 7, 13, 5), week=1, state=GameState.COMPLETED),
            make_game(2, (2025, 9, 14, 13, 5), week=2),
        ]
        assert current_week(games, local(2025, 9, 7, 15)) == 1

    def test_all_completed_falls_back_to_week_one(self, make_game, local):
        games = [
            make_game(1, (2025, 9, 7, 13, 5), week=1, state=GameState.COMPLETED),
            make_game(2, (2025, 9, 14, 13, 5), week=2, state=GameState.COMPLETED),
        ]
        now = local(2025, 9, 14, 13, 5) + timedelta(days=30)
        assert current_week(games, now) == 1
