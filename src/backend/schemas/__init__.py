"""Schemas module initialization."""

from schemas.gamification import (
    AchievementProgressResponse,
    AchievementStateResponse,
    StreakData,
    StreakRefreshResponse,
    StreakSummary,
    UserStats,
)

__all__ = [
    "AchievementProgressResponse",
    "AchievementStateResponse",
    "StreakData",
    "StreakRefreshResponse",
    "StreakSummary",
    "UserStats",
]
