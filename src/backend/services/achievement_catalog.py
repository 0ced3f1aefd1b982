"""
Achievement catalog.

The fixed, ordered list of achievement definitions. Built once at startup and
shared read-only by every request; order here is the order achievements are
returned in.
"""

from functools import lru_cache
from typing import Iterable

from models.achievement import (
    AchievementCategory,
    AchievementDefinition,
    AchievementRarity,
    AchievementTier,
    StatMetric,
)

CATALOG_VERSION = "2025.06"

Catalog = tuple[AchievementDefinition, ...]

_STREAK = AchievementCategory.STREAK
_DIFFICULTY = AchievementCategory.DIFFICULTY
_SOCIAL = AchievementCategory.SOCIAL
_MILESTONE = AchievementCategory.MILESTONE

_BRONZE = AchievementTier.BRONZE
_SILVER = AchievementTier.SILVER
_GOLD = AchievementTier.GOLD
_PLATINUM = AchievementTier.PLATINUM
_DIAMOND = AchievementTier.DIAMOND

_COMMON = AchievementRarity.COMMON
_RARE = AchievementRarity.RARE
_EPIC = AchievementRarity.EPIC
_LEGENDARY = AchievementRarity.LEGENDARY


# (id, name, description, icon, category, tier, requirement, rarity, xp_reward, metric)
_DEFINITIONS = [
    # Streak
    ("streak_3", "Getting Started", "Solve problems for 3 consecutive days",
     "flame", _STREAK, _BRONZE, 3, _COMMON, 50, StatMetric.CURRENT_STREAK),
    ("streak_7", "Week Warrior", "Solve problems for 7 consecutive days",
     "flame", _STREAK, _BRONZE, 7, _COMMON, 100, StatMetric.CURRENT_STREAK),
    ("streak_30", "Monthly Master", "Solve problems for 30 consecutive days",
     "flame", _STREAK, _GOLD, 30, _RARE, 500, StatMetric.CURRENT_STREAK),
    ("consistency_king", "Consistency King", "Solve at least 1 problem every day for 50 days",
     "calendar-check", _STREAK, _DIAMOND, 50, _LEGENDARY, 1000, StatMetric.CURRENT_STREAK),
    ("streak_100", "Century Solver", "Solve problems for 100 consecutive days",
     "crown", _STREAK, _DIAMOND, 100, _LEGENDARY, 2000, StatMetric.CURRENT_STREAK),
    ("streak_365", "Year Long Dedication", "Solve problems for 365 consecutive days",
     "crown", _STREAK, _DIAMOND, 365, _LEGENDARY, 5000, StatMetric.CURRENT_STREAK),

    # Difficulty mastery
    ("easy_master_10", "Easy Starter", "Solve 10 easy problems",
     "check-circle", _DIFFICULTY, _BRONZE, 10, _COMMON, 50, StatMetric.EASY_SOLVED),
    ("easy_master_50", "Easy Enthusiast", "Solve 50 easy problems",
     "target", _DIFFICULTY, _BRONZE, 50, _COMMON, 150, StatMetric.EASY_SOLVED),
    ("easy_master_100", "Easy Expert", "Solve 100 easy problems",
     "award", _DIFFICULTY, _SILVER, 100, _RARE, 250, StatMetric.EASY_SOLVED),
    ("medium_master_10", "Medium Beginner", "Solve 10 medium problems",
     "target", _DIFFICULTY, _BRONZE, 10, _COMMON, 100, StatMetric.MEDIUM_SOLVED),
    ("medium_master_50", "Medium Maverick", "Solve 50 medium problems",
     "target", _DIFFICULTY, _SILVER, 50, _RARE, 300, StatMetric.MEDIUM_SOLVED),
    ("medium_master_100", "Medium Master", "Solve 100 medium problems",
     "trophy", _DIFFICULTY, _GOLD, 100, _EPIC, 600, StatMetric.MEDIUM_SOLVED),
    ("hard_master_5", "Hard Starter", "Solve 5 hard problems",
     "zap", _DIFFICULTY, _SILVER, 5, _RARE, 200, StatMetric.HARD_SOLVED),
    ("hard_master_25", "Hard Hero", "Solve 25 hard problems",
     "crown", _DIFFICULTY, _GOLD, 25, _EPIC, 750, StatMetric.HARD_SOLVED),
    ("hard_master_50", "Hard Legend", "Solve 50 hard problems",
     "crown", _DIFFICULTY, _DIAMOND, 50, _LEGENDARY, 1200, StatMetric.HARD_SOLVED),

    # Social
    ("party_creator", "Party Starter", "Create your first coding party",
     "users", _SOCIAL, _BRONZE, 1, _COMMON, 50, StatMetric.PARTIES_CREATED),
    ("party_host", "Party Host", "Create 3 coding parties",
     "users", _SOCIAL, _SILVER, 3, _RARE, 150, StatMetric.PARTIES_CREATED),
    ("mentor", "Mentor", "Help others by creating 5 coding parties",
     "heart", _SOCIAL, _PLATINUM, 5, _LEGENDARY, 750, StatMetric.PARTIES_CREATED),
    ("social_butterfly", "Social Butterfly", "Join 5 different parties",
     "heart", _SOCIAL, _SILVER, 5, _RARE, 200, StatMetric.PARTIES_JOINED),
    ("community_leader", "Community Leader", "Join 10 different parties",
     "star", _SOCIAL, _GOLD, 10, _EPIC, 400, StatMetric.PARTIES_JOINED),

    # Milestones
    ("first_solve", "First Steps", "Solve your first problem",
     "play", _MILESTONE, _BRONZE, 1, _COMMON, 25, StatMetric.TOTAL_SOLVED),
    ("dozen_problems", "Baker's Dozen", "Solve 12 total problems",
     "gift", _MILESTONE, _BRONZE, 12, _COMMON, 75, StatMetric.TOTAL_SOLVED),
    ("half_century", "Half Century", "Solve 50 total problems",
     "medal", _MILESTONE, _SILVER, 50, _RARE, 200, StatMetric.TOTAL_SOLVED),
    ("century_club", "Century Club", "Solve 100 total problems",
     "trophy", _MILESTONE, _SILVER, 100, _RARE, 400, StatMetric.TOTAL_SOLVED),
    ("triple_digits", "Triple Digits", "Solve 200 total problems",
     "award", _MILESTONE, _GOLD, 200, _EPIC, 600, StatMetric.TOTAL_SOLVED),
    ("problem_solver_500", "Problem Crusher", "Solve 500 total problems",
     "crown", _MILESTONE, _PLATINUM, 500, _EPIC, 1500, StatMetric.TOTAL_SOLVED),
    ("problem_solver_1000", "Thousand Problems", "Solve 1000 total problems",
     "crown", _MILESTONE, _DIAMOND, 1000, _LEGENDARY, 3000, StatMetric.TOTAL_SOLVED),
]


def build_catalog(definitions: Iterable[AchievementDefinition]) -> Catalog:
    """Freeze definitions into a catalog, rejecting duplicate ids."""
    catalog = tuple(definitions)
    seen: set[str] = set()
    for definition in catalog:
        if definition.id in seen:
            raise ValueError(f"Duplicate achievement id in catalog: {definition.id}")
        seen.add(definition.id)
    return catalog


@lru_cache
def get_catalog() -> Catalog:
    """Get the process-wide achievement catalog (built on first use)."""
    return build_catalog(AchievementDefinition(*row) for row in _DEFINITIONS)
