"""Macro goal API routes: DB-backed."""

from uuid import UUID

from fastapi import APIRouter, Depends

from goalboard.db.base import get_session_factory
from goalboard.schemas.goals import MacroGoalCreate, MacroGoalResponse, MacroGoalUpdate
from goalboard.services.goal_service import GoalService

router = APIRouter()


def get_goal_service() -> GoalService:
    """Dependency that provides a GoalService bound to the app's session factory."""
    return GoalService(get_session_factory())


@router.get("/", response_model=list[MacroGoalResponse])
async def list_macro_goals(service: GoalService = Depends(get_goal_service)):
    """List all macro goals with their current completion."""
    return await service.list_macro_goals()


@router.post("/", response_model=MacroGoalResponse, status_code=201)
async def create_macro_goal(request: MacroGoalCreate, service: GoalService = Depends(get_goal_service)):
    """Create a new macro goal."""
    return await service.create_macro_goal(request)


@router.get("/{macro_goal_id}", response_model=MacroGoalResponse)
async def get_macro_goal(macro_goal_id: UUID, service: GoalService = Depends(get_goal_service)):
    return await service.get_macro_goal(macro_goal_id)


@router.patch("/{macro_goal_id}", response_model=MacroGoalResponse)
async def update_macro_goal(
    macro_goal_id: UUID,
    request: MacroGoalUpdate,
    service: GoalService = Depends(get_goal_service),
):
    """Partially update a macro goal."""
    return await service.update_macro_goal(macro_goal_id, request)


@router.delete("/{macro_goal_id}")
async def delete_macro_goal(macro_goal_id: UUID, service: GoalService = Depends(get_goal_service)):
    """Delete a macro goal and all of its micro goals."""
    await service.delete_macro_goal(macro_goal_id)
    return {"status": "deleted"}
