"""
Schema converter functions.

Centralized helpers for converting domain models to Pydantic schemas.
These are the single source of truth for model-to-schema conversions.
"""

from models.achievement import AchievementEvaluation, AchievementProgress, UserStatsSnapshot
from models.streak import StreakResult
from schemas.gamification import (
    AchievementProgressResponse,
    AchievementStateResponse,
    StreakData,
    StreakSummary,
    UserStats,
)


def achievement_progress_to_schema(progress: AchievementProgress) -> AchievementProgressResponse:
    """Flatten a definition and its progress into one response entry."""
    definition = progress.definition
    return AchievementProgressResponse(
        id=definition.id,
        name=definition.name,
        description=definition.description,
        icon=definition.icon,
        category=definition.category.value,
        tier=definition.tier.value,
        requirement=definition.requirement,
        rarity=definition.rarity.value,
        xp_reward=definition.xp_reward,
        current_progress=progress.current_progress,
        is_unlocked=progress.is_unlocked,
        unlocked_at=progress.unlocked_at,
    )


def streak_result_to_summary(result: StreakResult) -> StreakSummary:
    return StreakSummary(
        current_streak=result.current_streak,
        longest_streak=result.longest_streak,
        last_submission_date=result.last_activity_date,
    )


def stats_to_schema(stats: UserStatsSnapshot) -> UserStats:
    return UserStats(
        total_problems=stats.total_solved,
        easy_problems=stats.easy_solved,
        medium_problems=stats.medium_solved,
        hard_problems=stats.hard_solved,
        parties_joined=stats.parties_joined,
        parties_created=stats.parties_created,
    )


def evaluation_to_state_schema(
    evaluation: AchievementEvaluation,
    streak_data: StreakData,
    stats: UserStatsSnapshot,
) -> AchievementStateResponse:
    """Assemble the full achievements response."""
    return AchievementStateResponse(
        achievements=[achievement_progress_to_schema(a) for a in evaluation.achievements],
        total_xp=evaluation.aggregate.total_xp,
        level=evaluation.aggregate.level,
        next_level_xp=evaluation.aggregate.next_level_xp,
        streak_data=streak_data,
        stats=stats_to_schema(stats),
    )
