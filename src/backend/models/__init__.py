"""Domain and document models."""

from models.achievement import (
    AchievementCategory,
    AchievementDefinition,
    AchievementEvaluation,
    AchievementProgress,
    AchievementRarity,
    AchievementTier,
    AggregateProgress,
    StatMetric,
    UserStatsSnapshot,
)
from models.streak import CachedStreak, StreakResult, SubmissionEvent

__all__ = [
    "AchievementCategory",
    "AchievementDefinition",
    "AchievementEvaluation",
    "AchievementProgress",
    "AchievementRarity",
    "AchievementTier",
    "AggregateProgress",
    "StatMetric",
    "UserStatsSnapshot",
    "CachedStreak",
    "StreakResult",
    "SubmissionEvent",
]
