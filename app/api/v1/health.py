from fastapi import APIRouter

from app.core.config import settings
from app.services.insights_llm import insights_llm_enabled

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {
        "status": "healthy",
        "insights_llm": insights_llm_enabled(),
        "analytics": settings.analytics_enabled,
    }
