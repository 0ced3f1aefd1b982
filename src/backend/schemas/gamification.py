"""
Gamification-related Pydantic schemas.

The achievements API speaks camelCase on the wire; fields are declared in
snake_case and aliased.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AchievementProgressResponse(CamelModel):
    """An achievement definition with the user's progress towards it."""

    id: str
    name: str
    description: str
    icon: str
    category: str  # streak, difficulty, social, milestone
    tier: str  # bronze, silver, gold, platinum, diamond
    requirement: int
    rarity: str  # common, rare, epic, legendary
    xp_reward: int
    current_progress: int
    is_unlocked: bool
    unlocked_at: Optional[datetime] = None


class StreakSummary(CamelModel):
    """Streak values without cache bookkeeping."""

    current_streak: int
    longest_streak: int
    last_submission_date: Optional[date] = None


class StreakData(StreakSummary):
    """Streak values plus when they were computed."""

    last_updated: Optional[datetime] = None
    cache_age: Optional[int] = None  # seconds; None if never cached


class UserStats(CamelModel):
    """Raw user statistics that feed the achievements."""

    total_problems: int
    easy_problems: int
    medium_problems: int
    hard_problems: int
    parties_joined: int
    parties_created: int


class AchievementStateResponse(CamelModel):
    """Full achievement state for one user."""

    achievements: list[AchievementProgressResponse]
    total_xp: int = Field(alias="totalXP")
    level: int
    next_level_xp: int = Field(alias="nextLevelXP")
    streak_data: StreakData
    stats: UserStats


class StreakRefreshResponse(CamelModel):
    """Response from a user-triggered streak refresh."""

    success: bool = True
    message: str
    streak_data: StreakSummary
