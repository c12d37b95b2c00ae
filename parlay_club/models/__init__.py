from .game import Game, GameState, GameStatus
from .parlay_score import PickRecord, SeasonRecord, WeekScore
from .pick import Pick, PickResult, PickType
from .pick_visibility import PickVisibility, VisibilityRule

__all__ = [
    "Game",
    "GameState",
    "GameStatus",
    "Pick",
    "PickResult",
    "PickType",
    "PickVisibility",
    "VisibilityRule",
    "WeekScore",
    "SeasonRecord",
    "PickRecord",
]
