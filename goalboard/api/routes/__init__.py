from fastapi import APIRouter

from goalboard.api.routes import dashboard, health, macro_goals, micro_goals

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(macro_goals.router, prefix="/macro-goals", tags=["macro-goals"])
api_router.include_router(micro_goals.router, prefix="/micro-goals", tags=["micro-goals"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
