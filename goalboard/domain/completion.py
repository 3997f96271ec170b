"""Deterministic completion computation for macro goals.

Pure functions with no external dependencies. Every dashboard figure
(progress bars, status charts, badges) is derived from these.
"""

from collections.abc import Iterable, Sequence

from goalboard.domain.goals import GoalType


def micro_goals_for(macro_goal, micro_goals: Iterable) -> list:
    """Return the micro goals owned by macro_goal.

    Identifiers are compared by string form so UUID rows and string ids mix.
    """
    macro_id = str(macro_goal.id)
    return [m for m in micro_goals if str(m.macro_goal_id) == macro_id]


def macro_completion(macro_goal, micro_goals: Iterable) -> float:
    """Compute a macro goal's completion percentage from its micro goals.

    Args:
        macro_goal: Object with id, type and total_hours attributes
        micro_goals: Any collection of micro goals; only those whose
            macro_goal_id matches macro_goal.id are considered

    Returns:
        Percentage, normally 0-100. Hours goals are not clamped, so logged
        hours above total_hours give a value above 100.

    Pure function -- deterministic, no side effects, order-independent.
    """
    related = micro_goals_for(macro_goal, micro_goals)
    if not related:
        return 0

    if macro_goal.type == GoalType.HOURS:
        completed_hours = sum(m.hours for m in related)
        total_hours = macro_goal.total_hours or 0
        if total_hours > 0:
            return (completed_hours / total_hours) * 100
        # Misconfigured hours goal: report 0 rather than divide by zero
        return 0

    return sum(m.completion for m in related) / len(related)


def overall_completion(macro_goals: Sequence, micro_goals: Iterable) -> float:
    """Compute overall completion as the unweighted mean of macro completions.

    A macro goal with one micro goal counts the same as one with fifty.
    """
    if not macro_goals:
        return 0

    micro_goals = list(micro_goals)
    return sum(macro_completion(g, micro_goals) for g in macro_goals) / len(macro_goals)


def micro_completion(micro_goal, macro_goal) -> float:
    """Progress of a single task toward its parent's target.

    Hours tasks are measured against the parent's total_hours (a missing
    target counts as 1 hour); percentage tasks report their own completion.
    """
    if macro_goal.type == GoalType.HOURS:
        return (micro_goal.hours / (macro_goal.total_hours or 1)) * 100
    return micro_goal.completion
