import calendar


class VisibilityRule:
    """Names of the rules that produce a reveal instant"""

    THURSDAY_5PM = "thursday_5pm_pt"
    THANKSGIVING_10AM = "thanksgiving_10am_pt"
    WEEKEND_10AM = "weekend_10am_pt"
    MONDAY_KICKOFF = "monday_kickoff"
    GAME_IN_PROGRESS = "game_in_progress"
    GAME_COMPLETED = "game_completed"


class PickVisibility:
    """When a game's picks become visible to other participants.

    Computed fresh for every query and never persisted.
    """

    def __init__(
        self,
        game_id,
        game_date,
        game_state,
        category,
        is_holiday,
        visible_at,
        is_visible,
        rule,
    ):
        self.game_id = game_id
        self.game_date = game_date
        self.game_state = game_state
        self.category = category
        self.is_holiday = is_holiday
        self.visible_at = visible_at
        self.is_visible = is_visible
        self.rule = rule

    def __repr__(self):
        state = "visible" if self.is_visible else "hidden"
        return (
            f"<PickVisibility game_id={self.game_id} {state} "
            f"at={self.visible_at.isoformat()} rule={self.rule}>"
        )

    @property
    def weekday(self):
        """Local weekday of the kickoff (Monday=0 ... Sunday=6)"""
        return self.game_date.weekday()

    @property
    def weekday_name(self):
        return calendar.day_name[self.weekday]

    def to_dict(self):
        return {
            "game_id": self.game_id,
            "game_date": self.game_date.isoformat(),
            "game_state": self.game_state.value,
            "weekday": self.weekday_name,
            "category": self.category.value,
            "is_holiday": self.is_holiday,
            "visible_at": self.visible_at.isoformat(),
            "is_visible": self.is_visible,
            "visibility_rule": self.rule,
        }
