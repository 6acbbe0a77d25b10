"""Health check routes"""

from fastapi import APIRouter
import logging

from app.config import settings
from api.responses import HealthResponse

router = APIRouter(tags=["Health"])
logger = logging.getLogger("appsuite.api.health")


@router.get("/health-check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint"""
    return HealthResponse(
        status="ok", service=settings.app_name, version=settings.app_version
    )
