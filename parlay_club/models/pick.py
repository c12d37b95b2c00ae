from enum import Enum


class PickResult(str, Enum):
    PENDING = "pending"
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"


class PickType(str, Enum):
    SPREAD = "spread"
    OVER_UNDER = "over_under"
    MONEYLINE = "moneyline"


class Pick:
    """A participant's prediction against one game.

    The result is set upstream once the game is graded and never mutated
    here. The scoring/visibility category is derived from the game.
    """

    def __init__(
        self,
        game_id,
        user_id,
        result=PickResult.PENDING,
        pick_type=PickType.SPREAD,
        id=None,
        team_id=None,
    ):
        self.id = id
        self.game_id = game_id
        self.user_id = user_id
        self.result = PickResult(result)
        self.pick_type = PickType(pick_type)
        self.team_id = team_id

    def __repr__(self):
        return (
            f"<Pick user_id={self.user_id} game_id={self.game_id} "
            f"{self.pick_type.value} {self.result.value}>"
        )

    @property
    def is_completed(self):
        """Check if the pick has a final result"""
        return self.result != PickResult.PENDING

    @classmethod
    def from_dict(cls, data):
        return cls(
            game_id=data["game_id"],
            user_id=data["user_id"],
            result=data.get("result", PickResult.PENDING),
            pick_type=data.get("pick_type", PickType.SPREAD),
            id=data.get("id"),
            team_id=data.get("team_id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "game_id": self.game_id,
            "user_id": self.user_id,
            "team_id": self.team_id,
            "pick_type": self.pick_type.value,
            "result": self.result.value,
        }
