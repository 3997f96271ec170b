"""GoalService: CRUD for macro and micro goals.

Owns the write-side rules the completion calculator relies on:
- cascade delete of micro goals and progress entries with their macro goal
- hours clamped to the macro goal's target on every micro goal write, and
  re-clamped when the macro goal's type or target changes
- a macro progress entry appended after every change that can move completion
"""

from collections.abc import Callable
from datetime import date
from uuid import UUID

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from goalboard.core.exceptions import GoalNotFoundError, GoalValidationError
from goalboard.db.models.macro_goal import MacroGoal
from goalboard.db.models.micro_goal import MicroGoal
from goalboard.db.models.progress_entry import ProgressEntry
from goalboard.domain.completion import macro_completion, micro_goals_for
from goalboard.domain.goals import GoalType
from goalboard.domain.streaks import utc_today
from goalboard.schemas.goals import (
    MacroGoalCreate,
    MacroGoalResponse,
    MacroGoalUpdate,
    MicroGoalCreate,
    MicroGoalResponse,
    MicroGoalUpdate,
)

logger = structlog.get_logger(__name__)


def clamp_hours(hours: float, macro_goal: MacroGoal) -> float:
    """Clamp logged hours into [0, total_hours] for hours goals.

    Percentage goals keep hours as given (they do not count toward completion).
    """
    hours = max(hours, 0)
    if macro_goal.type == GoalType.HOURS and macro_goal.total_hours:
        return min(hours, macro_goal.total_hours)
    return hours


def to_macro_response(goal: MacroGoal, micro_goals: list[MicroGoal]) -> MacroGoalResponse:
    related = micro_goals_for(goal, micro_goals)
    return MacroGoalResponse(
        id=str(goal.id),
        name=goal.name,
        description=goal.description or "",
        type=goal.type,
        total_hours=goal.total_hours,
        icon=goal.icon or "",
        created_at=goal.created_at,
        completion=macro_completion(goal, related),
        micro_goal_count=len(related),
    )


def to_micro_response(micro: MicroGoal) -> MicroGoalResponse:
    return MicroGoalResponse(
        id=str(micro.id),
        macro_goal_id=str(micro.macro_goal_id),
        name=micro.name,
        completion=micro.completion,
        hours=micro.hours,
        created_at=micro.created_at,
    )


class GoalService:
    """Service layer for goal CRUD.

    Each public method opens its own session and commits before returning.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        today: Callable[[], date] = utc_today,
    ):
        """Initialize with dependency injection.

        Args:
            session_factory: SQLAlchemy async session factory
            today: Clock used to date progress entries (injectable for testing)
        """
        self.session_factory = session_factory
        self.today = today

    # ==================== MACRO GOALS ====================

    async def list_macro_goals(self) -> list[MacroGoalResponse]:
        """List macro goals, newest first, with their current completion."""
        async with self.session_factory() as session:
            result = await session.execute(select(MacroGoal).order_by(MacroGoal.created_at.desc()))
            goals = result.scalars().all()
            result = await session.execute(select(MicroGoal))
            micro_goals = list(result.scalars().all())
            return [to_macro_response(goal, micro_goals) for goal in goals]

    async def get_macro_goal(self, macro_goal_id: UUID) -> MacroGoalResponse:
        async with self.session_factory() as session:
            goal = await self._load_macro(session, macro_goal_id)
            micro_goals = await self._load_micros(session, goal.id)
            return to_macro_response(goal, micro_goals)

    async def create_macro_goal(self, request: MacroGoalCreate) -> MacroGoalResponse:
        async with self.session_factory() as session:
            goal = MacroGoal(
                name=request.name,
                description=request.description,
                type=request.type.value,
                total_hours=request.total_hours if request.type == GoalType.HOURS else None,
                icon=request.icon,
                created_on=self.today(),
            )
            session.add(goal)
            await session.commit()
            await session.refresh(goal)

            logger.info("macro_goal_created", macro_goal_id=str(goal.id), type=goal.type)
            return to_macro_response(goal, [])

    async def update_macro_goal(self, macro_goal_id: UUID, request: MacroGoalUpdate) -> MacroGoalResponse:
        """Apply a partial update.

        Raises:
            GoalNotFoundError: Macro goal does not exist
            GoalValidationError: Result would be an hours goal without a positive target
        """
        changes = request.model_dump(exclude_unset=True)

        async with self.session_factory() as session:
            goal = await self._load_macro(session, macro_goal_id)

            new_type = changes.get("type") or goal.type
            if new_type == GoalType.HOURS:
                total_hours = changes["total_hours"] if "total_hours" in changes else goal.total_hours
                if not total_hours or total_hours <= 0:
                    raise GoalValidationError("total_hours must be a positive number for hours goals")
                goal.total_hours = total_hours
            else:
                goal.total_hours = None
            goal.type = GoalType(new_type).value

            for field in ("name", "description", "icon"):
                if changes.get(field) is not None:
                    setattr(goal, field, changes[field])

            # Type or target changes move completion without touching a micro goal
            scoring_changed = "type" in changes or "total_hours" in changes
            if scoring_changed:
                for micro in await self._load_micros(session, goal.id):
                    micro.hours = clamp_hours(micro.hours, goal)
                await session.flush()
                await self._record_progress(session, goal)

            await session.commit()
            await session.refresh(goal)

            logger.info(
                "macro_goal_updated", macro_goal_id=str(goal.id), fields=sorted(changes), rescored=scoring_changed
            )
            micro_goals = await self._load_micros(session, goal.id)
            return to_macro_response(goal, micro_goals)

    async def delete_macro_goal(self, macro_goal_id: UUID) -> None:
        """Delete a macro goal together with its micro goals and progress log."""
        async with self.session_factory() as session:
            goal = await self._load_macro(session, macro_goal_id)

            result = await session.execute(delete(MicroGoal).where(MicroGoal.macro_goal_id == goal.id))
            await session.execute(delete(ProgressEntry).where(ProgressEntry.goal_id == goal.id))
            await session.delete(goal)
            await session.commit()

            logger.info("macro_goal_deleted", macro_goal_id=str(macro_goal_id), micro_goals_deleted=result.rowcount)

    # ==================== MICRO GOALS ====================

    async def list_micro_goals(self, macro_goal_id: UUID | None = None) -> list[MicroGoalResponse]:
        """List micro goals, newest first, optionally for one macro goal."""
        async with self.session_factory() as session:
            query = select(MicroGoal).order_by(MicroGoal.created_at.desc())
            if macro_goal_id is not None:
                query = query.where(MicroGoal.macro_goal_id == macro_goal_id)
            result = await session.execute(query)
            return [to_micro_response(m) for m in result.scalars().all()]

    async def create_micro_goal(self, request: MicroGoalCreate) -> MicroGoalResponse:
        """Create a micro goal.

        Raises:
            GoalNotFoundError: Parent macro goal does not exist
        """
        async with self.session_factory() as session:
            parent = await self._load_macro(session, request.macro_goal_id)

            micro = MicroGoal(
                macro_goal_id=parent.id,
                name=request.name,
                completion=request.completion,
                hours=clamp_hours(request.hours, parent),
            )
            session.add(micro)
            await session.flush()
            await self._record_progress(session, parent)
            await session.commit()
            await session.refresh(micro)

            logger.info("micro_goal_created", micro_goal_id=str(micro.id), macro_goal_id=str(parent.id))
            return to_micro_response(micro)

    async def update_micro_goal(self, micro_goal_id: UUID, request: MicroGoalUpdate) -> MicroGoalResponse:
        changes = request.model_dump(exclude_unset=True)

        async with self.session_factory() as session:
            micro = await self._load_micro(session, micro_goal_id)
            parent = await self._load_macro(session, micro.macro_goal_id)

            if changes.get("name") is not None:
                micro.name = changes["name"]
            if changes.get("completion") is not None:
                micro.completion = changes["completion"]
            if changes.get("hours") is not None:
                micro.hours = clamp_hours(changes["hours"], parent)

            await session.flush()
            await self._record_progress(session, parent)
            await session.commit()
            await session.refresh(micro)

            logger.info("micro_goal_updated", micro_goal_id=str(micro.id), fields=sorted(changes))
            return to_micro_response(micro)

    async def delete_micro_goal(self, micro_goal_id: UUID) -> None:
        async with self.session_factory() as session:
            micro = await self._load_micro(session, micro_goal_id)
            parent = await session.get(MacroGoal, micro.macro_goal_id)

            await session.delete(micro)
            await session.flush()
            if parent is not None:
                await self._record_progress(session, parent)
            await session.commit()

            logger.info("micro_goal_deleted", micro_goal_id=str(micro_goal_id))

    # ==================== HELPERS ====================

    async def _load_macro(self, session: AsyncSession, macro_goal_id: UUID) -> MacroGoal:
        goal = await session.get(MacroGoal, macro_goal_id)
        if goal is None:
            raise GoalNotFoundError("macro", macro_goal_id)
        return goal

    async def _load_micro(self, session: AsyncSession, micro_goal_id: UUID) -> MicroGoal:
        micro = await session.get(MicroGoal, micro_goal_id)
        if micro is None:
            raise GoalNotFoundError("micro", micro_goal_id)
        return micro

    async def _load_micros(self, session: AsyncSession, macro_goal_id: UUID) -> list[MicroGoal]:
        result = await session.execute(select(MicroGoal).where(MicroGoal.macro_goal_id == macro_goal_id))
        return list(result.scalars().all())

    async def _record_progress(self, session: AsyncSession, macro_goal: MacroGoal) -> None:
        """Append the macro goal's current completion to the progress log."""
        micro_goals = await self._load_micros(session, macro_goal.id)
        session.add(
            ProgressEntry(
                goal_id=macro_goal.id,
                kind="macro",
                value=macro_completion(macro_goal, micro_goals),
                recorded_on=self.today(),
            )
        )
