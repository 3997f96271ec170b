class GoalBoardError(Exception):
    """Base exception for Goal Board application."""

    status_code = 500


class GoalNotFoundError(GoalBoardError):
    """Raised when a macro or micro goal does not exist."""

    status_code = 404

    def __init__(self, kind: str, goal_id):
        self.kind = kind
        self.goal_id = goal_id
        super().__init__(f"{kind.capitalize()} goal not found")


class GoalValidationError(GoalBoardError):
    """Raised when a write would break a goal invariant (e.g. hours goal without a target)."""

    status_code = 422
