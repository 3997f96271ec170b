"""Dashboard statistics derived from goal completion.

Pure functions with no external dependencies.
"""

from collections.abc import Iterable, Sequence
from datetime import date

from goalboard.domain.completion import macro_completion, micro_completion
from goalboard.domain.goals import GoalType

STATUS_COMPLETED = "completed"
STATUS_IN_PROGRESS = "in_progress"
STATUS_NOT_STARTED = "not_started"

MILESTONE_TARGETS = (25, 50, 75, 100)

# (minimum overall completion, rank title, icon, quote), highest first
RANKS = [
    (90, "Legendary Warrior", "👑", "You've reached the pinnacle of power. The warrior's path is complete."),
    (75, "Elite Hunter", "⭐", "Your strength grows with each challenge. Keep pushing forward."),
    (50, "Skilled Fighter", "🗡️", "The path to greatness requires persistence. You are on the right track."),
    (25, "Novice Warrior", "🛡️", "Every master was once a beginner. Your journey has just begun."),
    (0, "Awakening", "🌱", "The first step is always the hardest. Begin your awakening now."),
]


def goal_status(completion: float) -> str:
    """Classify a completion percentage.

    Overshooting hours goals (> 100) count as completed.
    """
    if completion >= 100:
        return STATUS_COMPLETED
    if completion > 0:
        return STATUS_IN_PROGRESS
    return STATUS_NOT_STARTED


def status_breakdown(completions: Iterable[float]) -> dict[str, int]:
    """Count goals per status. All three keys are always present."""
    counts = {STATUS_COMPLETED: 0, STATUS_IN_PROGRESS: 0, STATUS_NOT_STARTED: 0}
    for completion in completions:
        counts[goal_status(completion)] += 1
    return counts


def type_breakdown(macro_goals: Iterable) -> dict[str, int]:
    counts = {GoalType.PERCENTAGE.value: 0, GoalType.HOURS.value: 0}
    for goal in macro_goals:
        key = GoalType.HOURS.value if goal.type == GoalType.HOURS else GoalType.PERCENTAGE.value
        counts[key] += 1
    return counts


def micro_goal_stats(macro_goals: Sequence, micro_goals: Sequence) -> dict[str, int]:
    """Summarize micro goals across all macro goals.

    Returns:
        {"total": int, "completed": int, "average_completion": int}

    A micro goal is completed when its own progress toward the parent's
    target reaches 100. Micro goals whose parent is missing are judged on
    their completion field alone.
    """
    parents = {str(g.id): g for g in macro_goals}
    completed = 0
    for micro in micro_goals:
        parent = parents.get(str(micro.macro_goal_id))
        progress = micro_completion(micro, parent) if parent is not None else micro.completion
        if progress >= 100:
            completed += 1

    average = round(sum(m.completion for m in micro_goals) / len(micro_goals)) if micro_goals else 0
    return {"total": len(micro_goals), "completed": completed, "average_completion": average}


def goal_progress_rows(macro_goals: Sequence, micro_goals: Sequence) -> list[dict]:
    """Chart rows: one per macro goal with its rounded completion."""
    return [
        {
            "id": str(goal.id),
            "name": goal.name,
            "icon": goal.icon or "",
            "completion": round(macro_completion(goal, micro_goals)),
        }
        for goal in macro_goals
    ]


def rank_for(overall: float) -> dict[str, str]:
    """Return the rank title, icon and quote for an overall completion."""
    for minimum, title, icon, quote in RANKS:
        if overall >= minimum:
            return {"title": title, "icon": icon, "quote": quote}
    _, title, icon, quote = RANKS[-1]
    return {"title": title, "icon": icon, "quote": quote}


def compute_milestones(completion: float, history: Sequence[tuple[date, float]] = ()) -> list[dict]:
    """Milestones at 25/50/75/100 percent for a single goal.

    Args:
        completion: The goal's current completion
        history: (recorded_on, value) pairs from the progress log, any order

    Returns:
        [{"target": int, "achieved": bool, "achieved_on": date | None}]

    achieved_on is the first logged day the value reached the target.
    """
    ordered = sorted(history, key=lambda entry: entry[0])
    milestones = []
    for target in MILESTONE_TARGETS:
        achieved_on = next((day for day, value in ordered if value >= target), None)
        milestones.append({
            "target": target,
            "achieved": completion >= target,
            "achieved_on": achieved_on if completion >= target else None,
        })
    return milestones


def order_micro_goals(micro_goals: Iterable, macro_goal) -> list:
    """Display order: incomplete tasks first, otherwise insertion order."""
    return sorted(micro_goals, key=lambda m: micro_completion(m, macro_goal) >= 100)
