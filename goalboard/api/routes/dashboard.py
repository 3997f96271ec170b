"""Dashboard API endpoints.

GET /api/dashboard/ - Full dashboard aggregation
GET /api/dashboard/goals/{macro_goal_id} - Progress tracker for one goal
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from goalboard.db.base import get_session_factory
from goalboard.schemas.dashboard import DashboardResponse, GoalProgressResponse
from goalboard.services.dashboard_service import DashboardService

router = APIRouter()


def get_dashboard_service() -> DashboardService:
    return DashboardService(get_session_factory())


@router.get("/", response_model=DashboardResponse)
async def get_dashboard(service: DashboardService = Depends(get_dashboard_service)) -> DashboardResponse:
    """Get full dashboard data.

    Returns aggregated view of:
    - Overall completion and rank
    - Goal status and type breakdowns
    - Micro goal stats
    - Badges and streak
    """
    return await service.get_dashboard()


@router.get("/goals/{macro_goal_id}", response_model=GoalProgressResponse)
async def get_goal_progress(
    macro_goal_id: UUID,
    service: DashboardService = Depends(get_dashboard_service),
) -> GoalProgressResponse:
    """Get milestones, streak and progress history for one macro goal."""
    return await service.get_goal_progress(macro_goal_id)
