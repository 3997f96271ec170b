"""Re-export all models so Base.metadata sees them."""

from goalboard.db.models.macro_goal import MacroGoal
from goalboard.db.models.micro_goal import MicroGoal
from goalboard.db.models.progress_entry import ProgressEntry

__all__ = [
    "MacroGoal",
    "MicroGoal",
    "ProgressEntry",
]
