"""
API v1 router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.achievements import router as achievements_router

router = APIRouter()

router.include_router(achievements_router, prefix="/achievements", tags=["Achievements"])
