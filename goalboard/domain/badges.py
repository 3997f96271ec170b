"""Achievement badges.

Pure functions: every input is a precomputed figure, so badge rules can be
tested without goal records.
"""

from collections.abc import Iterable
from datetime import date

TASK_CRUSHER_TARGET = 10
CONSISTENCY_STREAK_DAYS = 7
SPEEDRUN_DAYS = 7

# (id, name, icon, description, minimum overall completion)
COMPLETION_BADGES = [
    ("awakening", "Awakening", "🌱", "Start your journey", 0),
    ("novice", "Novice Warrior", "🛡️", "Reach 25% completion", 25),
    ("skilled", "Skilled Fighter", "🗡️", "Reach 50% completion", 50),
    ("elite", "Elite Hunter", "⭐", "Reach 75% completion", 75),
    ("legendary", "Legendary Warrior", "👑", "Reach 90% completion", 90),
    ("king", "King of War", "⚡", "Reach 100% completion", 100),
]


def is_speedrun(created_on: date, history: Iterable[tuple[date, float]]) -> bool:
    """True if the progress log shows 100% within SPEEDRUN_DAYS of created_on."""
    return any(
        value >= 100 and 0 <= (day - created_on).days <= SPEEDRUN_DAYS
        for day, value in history
    )


def evaluate_badges(
    overall: float,
    completed_goals: int,
    total_goals: int,
    completed_micro_goals: int,
    longest_streak: int,
    speedrun_achieved: bool,
) -> list[dict]:
    """Evaluate every badge.

    Args:
        overall: Overall completion (0-100)
        completed_goals: Macro goals at or above 100%
        total_goals: Number of macro goals
        completed_micro_goals: Micro goals at or above 100%
        longest_streak: Longest run of consecutive active days
        speedrun_achieved: Whether any goal hit 100% within SPEEDRUN_DAYS of creation

    Returns:
        List of {"id", "name", "icon", "description", "requirement", "unlocked"}
        in display order.
    """
    badges = [
        {
            "id": badge_id,
            "name": name,
            "icon": icon,
            "description": description,
            "requirement": f"{minimum}% completion",
            "unlocked": overall >= minimum,
        }
        for badge_id, name, icon, description, minimum in COMPLETION_BADGES
    ]

    badges.append({
        "id": "goal-master",
        "name": "Goal Master",
        "icon": "🎯",
        "description": "Complete all macro goals",
        "requirement": f"{completed_goals}/{total_goals} goals",
        "unlocked": total_goals > 0 and completed_goals == total_goals,
    })
    badges.append({
        "id": "task-crusher",
        "name": "Task Crusher",
        "icon": "💪",
        "description": f"Complete {TASK_CRUSHER_TARGET} micro goals",
        "requirement": f"{min(completed_micro_goals, TASK_CRUSHER_TARGET)}/{TASK_CRUSHER_TARGET} tasks",
        "unlocked": completed_micro_goals >= TASK_CRUSHER_TARGET,
    })
    badges.append({
        "id": "consistency",
        "name": "Consistency King",
        "icon": "🔥",
        "description": f"Maintain a {CONSISTENCY_STREAK_DAYS}-day streak",
        "requirement": f"{CONSISTENCY_STREAK_DAYS}-day streak",
        "unlocked": longest_streak >= CONSISTENCY_STREAK_DAYS,
    })
    badges.append({
        "id": "speedrunner",
        "name": "Speedrunner",
        "icon": "⚡",
        "description": "Complete a goal in 1 week",
        "requirement": "1 week completion",
        "unlocked": speedrun_achieved,
    })
    return badges


def summarize_badges(badges: list[dict]) -> dict:
    """Unlocked count, achievement percentage and the next badge to chase."""
    unlocked = [b for b in badges if b["unlocked"]]
    locked = [b for b in badges if not b["unlocked"]]
    return {
        "unlocked_count": len(unlocked),
        "total_count": len(badges),
        "achievement_percent": round(len(unlocked) / len(badges) * 100) if badges else 0,
        "next_badge": locked[0] if locked else None,
    }
