class WeekScore:
    """Parlay points for one user and one week.

    Legacy seasons fill ``category_points``, modern seasons ``daily_points``.
    ``pending_picks`` counts picks that were not yet graded, so callers can
    tell an undecided zero from a final zero.
    """

    def __init__(self, user_id, season, week):
        self.user_id = user_id
        self.season = season
        self.week = week
        self.category_points = {}
        self.daily_points = {}
        self.pending_picks = 0
        self.total_points = 0

    def __repr__(self):
        return (
            f"<WeekScore user_id={self.user_id} season={self.season} "
            f"week={self.week} total={self.total_points}>"
        )

    @property
    def is_final(self):
        return self.pending_picks == 0

    def calculate_total(self):
        """Update the total from the category or daily breakdown"""
        self.total_points = sum(self.category_points.values()) + sum(
            self.daily_points.values()
        )
        return self.total_points

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "season": self.season,
            "week": self.week,
            "category_points": {
                category.value: points
                for category, points in self.category_points.items()
            },
            "daily_points": dict(self.daily_points),
            "pending_picks": self.pending_picks,
            "is_final": self.is_final,
            "total_points": self.total_points,
        }


class SeasonRecord:
    """A user's parlay points across a season (running sum of weeks)"""

    def __init__(self, user_id, season):
        self.user_id = user_id
        self.season = season
        self.week_scores = {}
        self.total_points = 0

    def __repr__(self):
        return f"<SeasonRecord user_id={self.user_id} season={self.season} total={self.total_points}>"

    def record_week(self, week_score):
        """Store (or replace) a week's score and refresh the season total"""
        if week_score.user_id != self.user_id or week_score.season != self.season:
            raise ValueError(
                f"Week score for user {week_score.user_id} season {week_score.season} "
                f"does not belong to {self!r}"
            )

        self.week_scores[week_score.week] = week_score
        self.recalculate_totals()

    def recalculate_totals(self):
        self.total_points = sum(score.total_points for score in self.week_scores.values())
        return self.total_points

    def cumulative_through(self, week):
        """Season points up to and including a week"""
        return sum(
            score.total_points
            for week_number, score in self.week_scores.items()
            if week_number <= week
        )

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "season": self.season,
            "total_points": self.total_points,
            "weeks": {
                week: score.to_dict() for week, score in sorted(self.week_scores.items())
            },
        }


class PickRecord:
    """Win-loss-push record with parlay points for display"""

    def __init__(self, wins=0, losses=0, pushes=0, parlay_points=0, weekly_points=0):
        self.wins = wins
        self.losses = losses
        self.pushes = pushes
        self.parlay_points = parlay_points
        self.weekly_points = weekly_points

    def __str__(self):
        if self.weekly_points > 0:
            return f"{self.parlay_points} (+{self.weekly_points})"
        return f"{self.parlay_points}"

    def legacy_string(self):
        return f"{self.wins}-{self.losses}-{self.pushes}"

    @property
    def win_percentage(self):
        """Win percentage with pushes counted as half a win"""
        total = self.wins + self.losses + self.pushes
        if total == 0:
            return 0.0
        return (self.wins + self.pushes * 0.5) / total
