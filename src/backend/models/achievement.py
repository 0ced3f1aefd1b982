"""
Achievement and gamification models.

Definitions are immutable and shared process-wide; progress objects are
recomputed on every request.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class AchievementCategory(str, Enum):
    """Achievement categories."""

    STREAK = "streak"
    DIFFICULTY = "difficulty"
    SOCIAL = "social"
    MILESTONE = "milestone"


class AchievementTier(str, Enum):
    """Achievement tier levels."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
    DIAMOND = "diamond"


class AchievementRarity(str, Enum):
    """How rare an achievement is."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class StatMetric(str, Enum):
    """The user statistic that feeds an achievement's progress."""

    CURRENT_STREAK = "current_streak"
    EASY_SOLVED = "easy_solved"
    MEDIUM_SOLVED = "medium_solved"
    HARD_SOLVED = "hard_solved"
    PARTIES_CREATED = "parties_created"
    PARTIES_JOINED = "parties_joined"
    TOTAL_SOLVED = "total_solved"


# Metrics each category is allowed to draw from
CATEGORY_METRICS: dict[AchievementCategory, frozenset[StatMetric]] = {
    AchievementCategory.STREAK: frozenset({StatMetric.CURRENT_STREAK}),
    AchievementCategory.DIFFICULTY: frozenset(
        {StatMetric.EASY_SOLVED, StatMetric.MEDIUM_SOLVED, StatMetric.HARD_SOLVED}
    ),
    AchievementCategory.SOCIAL: frozenset({StatMetric.PARTIES_CREATED, StatMetric.PARTIES_JOINED}),
    AchievementCategory.MILESTONE: frozenset({StatMetric.TOTAL_SOLVED}),
}


@dataclass(frozen=True)
class AchievementDefinition:
    """
    Achievement/badge definition.
    """

    id: str
    name: str
    description: str
    icon: str
    category: AchievementCategory
    tier: AchievementTier
    requirement: int
    rarity: AchievementRarity
    xp_reward: int
    metric: StatMetric

    def __post_init__(self) -> None:
        if self.requirement < 1:
            raise ValueError(f"Achievement {self.id} must have a positive requirement")
        if self.xp_reward < 0:
            raise ValueError(f"Achievement {self.id} cannot have a negative xp reward")
        if self.metric not in CATEGORY_METRICS[self.category]:
            raise ValueError(
                f"Achievement {self.id}: metric {self.metric.value} "
                f"does not belong to category {self.category.value}"
            )


@dataclass(frozen=True)
class UserStatsSnapshot:
    """Cumulative statistics for a user, read from the profile and party stores."""

    easy_solved: int = 0
    medium_solved: int = 0
    hard_solved: int = 0
    total_solved: int = 0
    parties_created: int = 0
    parties_joined: int = 0


@dataclass(frozen=True)
class AchievementProgress:
    """A definition joined with the user's progress towards it."""

    definition: AchievementDefinition
    current_progress: int
    is_unlocked: bool
    unlocked_at: Optional[datetime] = None


@dataclass(frozen=True)
class AggregateProgress:
    """Experience and level derived from unlocked achievements."""

    total_xp: int
    level: int
    next_level_xp: int


@dataclass(frozen=True)
class AchievementEvaluation:
    """Full evaluation output: per-achievement progress plus the aggregate."""

    achievements: list[AchievementProgress]
    aggregate: AggregateProgress

    @property
    def unlocked_ids(self) -> list[str]:
        """Ids of unlocked achievements, in catalog order."""
        return [a.definition.id for a in self.achievements if a.is_unlocked]
