"""Goal entities shared by the domain functions.

Plain immutable records. The domain functions only read attributes, so
ORM rows with the same attribute names can be passed in their place.
"""

from dataclasses import dataclass
from enum import StrEnum


class GoalType(StrEnum):
    """How a macro goal measures progress."""

    PERCENTAGE = "percentage"
    HOURS = "hours"


@dataclass(frozen=True)
class MacroGoal:
    id: str
    name: str
    type: str = GoalType.PERCENTAGE
    total_hours: float | None = None
    description: str = ""
    icon: str = ""


@dataclass(frozen=True)
class MicroGoal:
    id: str
    macro_goal_id: str
    name: str
    completion: float = 0
    hours: float = 0
