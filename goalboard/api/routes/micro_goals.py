"""Micro goal API routes: DB-backed."""

from uuid import UUID

from fastapi import APIRouter, Depends

from goalboard.api.routes.macro_goals import get_goal_service
from goalboard.schemas.goals import MicroGoalCreate, MicroGoalResponse, MicroGoalUpdate
from goalboard.services.goal_service import GoalService

router = APIRouter()


@router.get("/", response_model=list[MicroGoalResponse])
async def list_micro_goals(
    macro_goal_id: UUID | None = None,
    service: GoalService = Depends(get_goal_service),
):
    """List micro goals, optionally only those of one macro goal."""
    return await service.list_micro_goals(macro_goal_id)


@router.post("/", response_model=MicroGoalResponse, status_code=201)
async def create_micro_goal(request: MicroGoalCreate, service: GoalService = Depends(get_goal_service)):
    """Create a micro goal. Hours are clamped to the parent's target."""
    return await service.create_micro_goal(request)


@router.patch("/{micro_goal_id}", response_model=MicroGoalResponse)
async def update_micro_goal(
    micro_goal_id: UUID,
    request: MicroGoalUpdate,
    service: GoalService = Depends(get_goal_service),
):
    return await service.update_micro_goal(micro_goal_id, request)


@router.delete("/{micro_goal_id}")
async def delete_micro_goal(micro_goal_id: UUID, service: GoalService = Depends(get_goal_service)):
    await service.delete_micro_goal(micro_goal_id)
    return {"status": "deleted"}
