"""
Achievement endpoints: per-user achievement state and streak refresh.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends

from api.deps import get_achievement_service, get_authorized_user_key
from schemas.converters import streak_result_to_summary
from schemas.gamification import AchievementStateResponse, StreakRefreshResponse
from services.achievement_service import AchievementService

router = APIRouter()

logger = structlog.get_logger(__name__)


@router.get("/{user_key}", response_model=AchievementStateResponse)
async def get_achievements(
    user_key: Annotated[str, Depends(get_authorized_user_key)],
    service: Annotated[AchievementService, Depends(get_achievement_service)],
) -> AchievementStateResponse:
    """
    Get the user's achievements, XP/level and streak.

    The streak comes from the cache while it is less than an hour old. If the
    submission feed is unavailable the streak is reported as zero rather than
    failing the request.
    """
    return await service.get_achievement_state(user_key)


@router.post("/{user_key}", response_model=StreakRefreshResponse)
async def refresh_streak(
    user_key: Annotated[str, Depends(get_authorized_user_key)],
    service: Annotated[AchievementService, Depends(get_achievement_service)],
) -> StreakRefreshResponse:
    """
    Recompute the user's streak from the submission feed now.

    Unlike the GET, failures are reported: 404 when the user has no linked
    LeetCode account, 500 when the feed call fails.
    """
    result = await service.refresh_streak(user_key)
    logger.info("streak_refresh_requested", current_streak=result.current_streak)
    return StreakRefreshResponse(
        success=True,
        message="Streak data refreshed successfully",
        streak_data=streak_result_to_summary(result),
    )
