from datetime import datetime, timezone
from enum import Enum


class GameState(str, Enum):
    SCHEDULED = "scheduled"
    IN_PLAY = "in_play"
    COMPLETED = "completed"
    POSTPONED = "postponed"


class GameStatus:
    """Live game details (clock, possession, down and distance)"""

    def __init__(
        self,
        display_clock="",
        quarter=None,
        home_timeouts=3,
        away_timeouts=3,
        is_red_zone=False,
        possession=None,
        down=None,
        distance=None,
        yard_line=None,
    ):
        self.display_clock = display_clock
        self.quarter = quarter
        self.home_timeouts = home_timeouts
        self.away_timeouts = away_timeouts
        self.is_red_zone = is_red_zone
        self.possession = possession
        self.down = down
        self.distance = distance
        self.yard_line = yard_line

    @property
    def down_distance_text(self):
        """e.g. '3rd & 7' (None without down info)"""
        if not self.down or self.distance is None:
            return None
        ordinal = ["1st", "2nd", "3rd", "4th"][self.down - 1]
        return f"{ordinal} & {self.distance}"

    def to_dict(self):
        return {
            "display_clock": self.display_clock,
            "quarter": self.quarter,
            "home_timeouts": self.home_timeouts,
            "away_timeouts": self.away_timeouts,
            "is_red_zone": self.is_red_zone,
            "possession": self.possession,
            "down": self.down,
            "distance": self.distance,
            "yard_line": self.yard_line,
            "down_distance_text": self.down_distance_text,
        }


class Game:
    """
    A scheduled game as delivered by the game-data collaborator.

    Read-only to this package. ``kickoff`` is stored in UTC; a naive value is
    read as UTC. ``season`` and ``week`` come from the upstream schedule and
    may be missing.
    """

    def __init__(
        self,
        id,
        kickoff,
        season=None,
        week=None,
        state=GameState.SCHEDULED,
        away="",
        home="",
        away_score=None,
        home_score=None,
        status=None,
    ):
        self.id = id
        self.kickoff = kickoff
        self.season = season
        self.week = week
        self.state = GameState(state)
        self.away = away
        self.home = home
        self.away_score = away_score
        self.home_score = home_score
        self.status = status

    def __repr__(self):
        return (
            f"<Game {self.id} {self.away or 'TBD'} @ {self.home or 'TBD'} "
            f"Season {self.season} Week {self.week}>"
        )

    @property
    def kickoff_utc(self):
        """Kickoff as an aware UTC datetime"""
        if self.kickoff.tzinfo is None:
            return self.kickoff.replace(tzinfo=timezone.utc)
        return self.kickoff.astimezone(timezone.utc)

    @property
    def is_live(self):
        return self.state == GameState.IN_PLAY

    @property
    def is_final(self):
        return self.state == GameState.COMPLETED

    @classmethod
    def from_dict(cls, data):
        """Build a game from the upstream JSON shape"""
        kickoff = data["kickoff"]
        if isinstance(kickoff, str):
            kickoff = datetime.fromisoformat(kickoff.replace("Z", "+00:00"))
        elif not isinstance(kickoff, datetime):
            raise ValueError(f"Kickoff must be an ISO string or datetime, got {kickoff!r}")

        return cls(
            id=data["id"],
            kickoff=kickoff,
            season=data.get("season"),
            week=data.get("week"),
            state=data.get("state", GameState.SCHEDULED),
            away=data.get("away", ""),
            home=data.get("home", ""),
            away_score=data.get("away_score"),
            home_score=data.get("home_score"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "kickoff": self.kickoff_utc.isoformat(),
            "season": self.season,
            "week": self.week,
            "state": self.state.value,
            "away": self.away,
            "home": self.home,
            "away_score": self.away_score,
            "home_score": self.home_score,
            "status": self.status.to_dict() if self.status else None,
        }
