"""
Achievement evaluation.

Maps a user's cumulative statistics and current streak onto the achievement
catalog. Pure: the caller supplies the evaluation time and any previously
recorded unlock times.
"""

from datetime import datetime
from typing import Callable, Mapping, Optional, Sequence

from models.achievement import (
    AchievementDefinition,
    AchievementEvaluation,
    AchievementProgress,
    AggregateProgress,
    StatMetric,
    UserStatsSnapshot,
)
from models.streak import StreakResult

XP_PER_LEVEL = 1000

_METRIC_READERS: dict[StatMetric, Callable[[UserStatsSnapshot, StreakResult], int]] = {
    StatMetric.CURRENT_STREAK: lambda stats, streak: streak.current_streak,
    StatMetric.EASY_SOLVED: lambda stats, streak: stats.easy_solved,
    StatMetric.MEDIUM_SOLVED: lambda stats, streak: stats.medium_solved,
    StatMetric.HARD_SOLVED: lambda stats, streak: stats.hard_solved,
    StatMetric.PARTIES_CREATED: lambda stats, streak: stats.parties_created,
    StatMetric.PARTIES_JOINED: lambda stats, streak: stats.parties_joined,
    StatMetric.TOTAL_SOLVED: lambda stats, streak: stats.total_solved,
}


def resolve_metric(metric: StatMetric, stats: UserStatsSnapshot, streak: StreakResult) -> int:
    """Raw (unclamped) value of a metric for this user."""
    return _METRIC_READERS[metric](stats, streak)


def level_for_xp(total_xp: int) -> int:
    """Level reached with ``total_xp`` experience (level 1 at 0 XP)."""
    return max(total_xp, 0) // XP_PER_LEVEL + 1


def compute_aggregate(achievements: Sequence[AchievementProgress]) -> AggregateProgress:
    """Sum XP over unlocked achievements and derive the level."""
    total_xp = sum(a.definition.xp_reward for a in achievements if a.is_unlocked)
    level = level_for_xp(total_xp)
    return AggregateProgress(
        total_xp=total_xp,
        level=level,
        next_level_xp=level * XP_PER_LEVEL,
    )


def evaluate_achievement(
    definition: AchievementDefinition,
    stats: UserStatsSnapshot,
    streak: StreakResult,
    evaluated_at: datetime,
    first_unlocked_at: Optional[datetime] = None,
) -> AchievementProgress:
    """Calculate progress and unlock status for a single achievement."""
    raw = resolve_metric(definition.metric, stats, streak)
    is_unlocked = raw >= definition.requirement

    return AchievementProgress(
        definition=definition,
        current_progress=min(max(raw, 0), definition.requirement),
        is_unlocked=is_unlocked,
        unlocked_at=(first_unlocked_at or evaluated_at) if is_unlocked else None,
    )


def evaluate_achievements(
    stats: UserStatsSnapshot,
    streak: StreakResult,
    catalog: Sequence[AchievementDefinition],
    evaluated_at: datetime,
    unlock_history: Optional[Mapping[str, datetime]] = None,
) -> AchievementEvaluation:
    """
    Evaluate every catalog entry for one user.

    Args:
        stats: Cumulative solve and party counts
        streak: Current streak (feeds every streak-category achievement)
        catalog: Achievement definitions, in display order
        evaluated_at: Timestamp used as unlocked_at for unlocks with no recorded history
        unlock_history: achievement_id -> first time it was seen unlocked

    Returns:
        Per-achievement progress in catalog order plus the XP/level aggregate.
    """
    history = unlock_history or {}
    achievements = [
        evaluate_achievement(definition, stats, streak, evaluated_at, history.get(definition.id))
        for definition in catalog
    ]
    return AchievementEvaluation(
        achievements=achievements,
        aggregate=compute_aggregate(achievements),
    )
