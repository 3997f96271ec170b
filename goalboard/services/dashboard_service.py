"""DashboardService: Aggregates goal completion, badges and streaks.

Loads a snapshot of all goals and feeds it through the domain functions.
All methods are pure orchestration - no business logic (that's in domain layer).
"""

from collections import defaultdict
from collections.abc import Callable
from datetime import date
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from goalboard.core.exceptions import GoalNotFoundError
from goalboard.db.models.macro_goal import MacroGoal
from goalboard.db.models.micro_goal import MicroGoal
from goalboard.db.models.progress_entry import ProgressEntry
from goalboard.domain.badges import evaluate_badges, is_speedrun, summarize_badges
from goalboard.domain.completion import (
    macro_completion,
    micro_completion,
    micro_goals_for,
    overall_completion,
)
from goalboard.domain.stats import (
    STATUS_COMPLETED,
    compute_milestones,
    goal_progress_rows,
    goal_status,
    micro_goal_stats,
    order_micro_goals,
    rank_for,
    status_breakdown,
    type_breakdown,
)
from goalboard.domain.streaks import compute_streak, utc_today
from goalboard.schemas.dashboard import (
    BadgeResponse,
    BadgesSummary,
    DashboardResponse,
    GoalProgressResponse,
    GoalProgressRow,
    GoalSummary,
    MicroGoalProgress,
    MicroGoalStats,
    MilestoneResponse,
    ProgressPoint,
    RankResponse,
    StatusBreakdown,
    StreakResponse,
    TypeBreakdown,
)

logger = structlog.get_logger(__name__)


class DashboardService:
    """Service layer for dashboard aggregation."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        today: Callable[[], date] = utc_today,
    ):
        self.session_factory = session_factory
        self.today = today

    async def get_dashboard(self) -> DashboardResponse:
        """Get full dashboard data across all goals.

        Aggregates:
        - Overall completion and rank
        - Status and type breakdowns (chart data)
        - Micro goal statistics
        - Per-goal summaries
        - Badges and the global activity streak
        """
        async with self.session_factory() as session:
            macro_goals = await self._load_macros(session)
            micro_goals = await self._load_micros(session)
            entries = await self._load_entries(session)

        completions = {str(g.id): macro_completion(g, micro_goals) for g in macro_goals}
        overall = overall_completion(macro_goals, micro_goals)
        micro_stats = micro_goal_stats(macro_goals, micro_goals)
        statuses = status_breakdown(completions.values())
        streak = compute_streak((e.recorded_on for e in entries), today=self.today())

        history_by_goal: dict[str, list[tuple[date, float]]] = defaultdict(list)
        for entry in entries:
            history_by_goal[str(entry.goal_id)].append((entry.recorded_on, entry.value))
        speedrun = any(
            is_speedrun(g.created_on, history_by_goal[str(g.id)]) for g in macro_goals
        )

        badges = evaluate_badges(
            overall=overall,
            completed_goals=statuses[STATUS_COMPLETED],
            total_goals=len(macro_goals),
            completed_micro_goals=micro_stats["completed"],
            longest_streak=streak["longest_streak"],
            speedrun_achieved=speedrun,
        )
        badge_summary = summarize_badges(badges)

        goals = [
            GoalSummary(
                id=str(g.id),
                name=g.name,
                type=g.type,
                icon=g.icon or "",
                completion=completions[str(g.id)],
                status=goal_status(completions[str(g.id)]),
                micro_goal_count=len(micro_goals_for(g, micro_goals)),
            )
            for g in macro_goals
        ]

        logger.debug("dashboard_computed", goals=len(macro_goals), overall_completion=overall)

        return DashboardResponse(
            overall_completion=overall,
            rank=RankResponse(**rank_for(overall)),
            total_goals=len(macro_goals),
            status_breakdown=StatusBreakdown(**statuses),
            type_breakdown=TypeBreakdown(**type_breakdown(macro_goals)),
            micro_goal_stats=MicroGoalStats(**micro_stats),
            goal_progress=[GoalProgressRow(**row) for row in goal_progress_rows(macro_goals, micro_goals)],
            goals=goals,
            badges=BadgesSummary(
                unlocked_count=badge_summary["unlocked_count"],
                total_count=badge_summary["total_count"],
                achievement_percent=badge_summary["achievement_percent"],
                next_badge=BadgeResponse(**badge_summary["next_badge"]) if badge_summary["next_badge"] else None,
                badges=[BadgeResponse(**b) for b in badges],
            ),
            streak=StreakResponse(**streak),
        )

    async def get_goal_progress(self, macro_goal_id: UUID) -> GoalProgressResponse:
        """Get the progress tracker view for one macro goal.

        Raises:
            GoalNotFoundError: Macro goal does not exist
        """
        async with self.session_factory() as session:
            goal = await session.get(MacroGoal, macro_goal_id)
            if goal is None:
                raise GoalNotFoundError("macro", macro_goal_id)

            result = await session.execute(
                select(MicroGoal).where(MicroGoal.macro_goal_id == goal.id).order_by(MicroGoal.created_at.asc())
            )
            micro_goals = list(result.scalars().all())

            result = await session.execute(
                select(ProgressEntry)
                .where(ProgressEntry.goal_id == goal.id)
                .order_by(ProgressEntry.recorded_on.asc(), ProgressEntry.created_at.asc())
            )
            entries = list(result.scalars().all())

        completion = macro_completion(goal, micro_goals)
        history = [(e.recorded_on, e.value) for e in entries]

        micro_progress = []
        for micro in order_micro_goals(micro_goals, goal):
            progress = micro_completion(micro, goal)
            micro_progress.append(
                MicroGoalProgress(
                    id=str(micro.id),
                    name=micro.name,
                    completion=micro.completion,
                    hours=micro.hours,
                    progress=progress,
                    is_complete=progress >= 100,
                )
            )

        return GoalProgressResponse(
            id=str(goal.id),
            name=goal.name,
            type=goal.type,
            total_hours=goal.total_hours,
            completion=completion,
            status=goal_status(completion),
            micro_goals=micro_progress,
            milestones=[MilestoneResponse(**m) for m in compute_milestones(completion, history)],
            streak=StreakResponse(**compute_streak((day for day, _ in history), today=self.today())),
            history=[ProgressPoint(recorded_on=day, value=value) for day, value in history],
        )

    async def _load_macros(self, session: AsyncSession) -> list[MacroGoal]:
        result = await session.execute(select(MacroGoal).order_by(MacroGoal.created_at.desc()))
        return list(result.scalars().all())

    async def _load_micros(self, session: AsyncSession) -> list[MicroGoal]:
        result = await session.execute(select(MicroGoal).order_by(MicroGoal.created_at.asc()))
        return list(result.scalars().all())

    async def _load_entries(self, session: AsyncSession) -> list[ProgressEntry]:
        result = await session.execute(select(ProgressEntry).order_by(ProgressEntry.recorded_on.asc()))
        return list(result.scalars().all())
