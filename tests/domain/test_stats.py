"""Tests for dashboard statistics."""
from datetime import date

import pytest

from goalboard.domain.goals import GoalType, MacroGoal, MicroGoal
from goalboard.domain.stats import (
    compute_milestones,
    goal_progress_rows,
    goal_status,
    micro_goal_stats,
    order_micro_goals,
    rank_for,
    status_breakdown,
    type_breakdown,
)

pytestmark = pytest.mark.unit


PCT = MacroGoal(id="p", name="Read books", type=GoalType.PERCENTAGE, icon="📚")
HRS = MacroGoal(id="h", name="Guitar", type=GoalType.HOURS, total_hours=10)


class TestGoalStatus:
    @pytest.mark.parametrize(
        "completion, expected",
        [
            (0, "not_started"),
            (0.5, "in_progress"),
            (99.9, "in_progress"),
            (100, "completed"),
            (150, "completed"),
        ],
    )
    def test_classification(self, completion, expected):
        assert goal_status(completion) == expected

    def test_breakdown_always_has_all_keys(self):
        assert status_breakdown([]) == {"completed": 0, "in_progress": 0, "not_started": 0}

    def test_breakdown_counts(self):
        assert status_breakdown([0, 100, 50, 0, 120]) == {
            "completed": 2,
            "in_progress": 1,
            "not_started": 2,
        }


def test_type_breakdown():
    assert type_breakdown([PCT, HRS, HRS]) == {"percentage": 1, "hours": 2}


class TestMicroGoalStats:
    def test_empty(self):
        assert micro_goal_stats([PCT], []) == {"total": 0, "completed": 0, "average_completion": 0}

    def test_completed_percentage_and_hours_tasks(self):
        micro_goals = [
            MicroGoal(id="1", macro_goal_id="p", name="a", completion=100),
            MicroGoal(id="2", macro_goal_id="p", name="b", completion=50),
            MicroGoal(id="3", macro_goal_id="h", name="c", hours=10),
            MicroGoal(id="4", macro_goal_id="h", name="d", hours=3),
        ]
        stats = micro_goal_stats([PCT, HRS], micro_goals)
        assert stats["total"] == 4
        assert stats["completed"] == 2
        # mean of completion fields: (100 + 50 + 0 + 0) / 4
        assert stats["average_completion"] == 38

    def test_orphan_micro_goal_uses_completion(self):
        micro_goals = [MicroGoal(id="1", macro_goal_id="gone", name="a", completion=100)]
        assert micro_goal_stats([PCT], micro_goals)["completed"] == 1


def test_goal_progress_rows_round_completion():
    micro_goals = [
        MicroGoal(id="1", macro_goal_id="p", name="a", completion=33),
        MicroGoal(id="2", macro_goal_id="p", name="b", completion=34),
    ]
    rows = goal_progress_rows([PCT, HRS], micro_goals)
    assert rows == [
        {"id": "p", "name": "Read books", "icon": "📚", "completion": 34},
        {"id": "h", "name": "Guitar", "icon": "", "completion": 0},
    ]


class TestRank:
    @pytest.mark.parametrize(
        "overall, title",
        [
            (0, "Awakening"),
            (24.9, "Awakening"),
            (25, "Novice Warrior"),
            (50, "Skilled Fighter"),
            (75, "Elite Hunter"),
            (90, "Legendary Warrior"),
            (100, "Legendary Warrior"),
        ],
    )
    def test_thresholds(self, overall, title):
        assert rank_for(overall)["title"] == title

    def test_quote_present(self):
        assert rank_for(0)["quote"].startswith("The first step")


class TestMilestones:
    def test_targets_and_achievement(self):
        milestones = compute_milestones(60)
        assert [m["target"] for m in milestones] == [25, 50, 75, 100]
        assert [m["achieved"] for m in milestones] == [True, True, False, False]

    def test_first_day_reaching_target(self):
        history = [
            (date(2026, 1, 20), 80),
            (date(2026, 1, 10), 30),
            (date(2026, 1, 15), 55),
        ]
        milestones = compute_milestones(80, history)
        assert milestones[0]["achieved_on"] == date(2026, 1, 10)
        assert milestones[1]["achieved_on"] == date(2026, 1, 15)
        assert milestones[2]["achieved_on"] == date(2026, 1, 20)
        assert milestones[3]["achieved_on"] is None

    def test_regressed_goal_loses_milestone(self):
        """Progress can decrease; a milestone is only achieved at the current value."""
        milestones = compute_milestones(20, [(date(2026, 1, 1), 60)])
        assert not milestones[0]["achieved"]
        assert milestones[0]["achieved_on"] is None


def test_order_micro_goals_incomplete_first():
    done = MicroGoal(id="1", macro_goal_id="p", name="done", completion=100)
    half = MicroGoal(id="2", macro_goal_id="p", name="half", completion=50)
    fresh = MicroGoal(id="3", macro_goal_id="p", name="fresh", completion=0)
    assert order_micro_goals([done, half, fresh], PCT) == [half, fresh, done]
