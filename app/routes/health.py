"""
Health check route.
"""
from fastapi import APIRouter

from app.models import HealthCheck

router = APIRouter()


@router.get("/api/healthz", response_model=HealthCheck)
async def health_check() -> HealthCheck:
    """
    Health check endpoint.
    The store is in-memory, so serving requests means healthy.
    """
    return HealthCheck(ok=True)
