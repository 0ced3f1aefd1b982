"""
Cosmos DB document models for StreakForge.

These Pydantic models define the document structure stored in Cosmos DB.
The engine only reads profile and party documents; the streak cache and the
unlock ledger are the only fields it writes.

Container Strategy:
- users: User profiles, solve stats and the cached streak (partition: /id)
- email-lookup: Secondary index {id: email, user_id} (partition: /id)
- parties: Coding parties {created_by, members: [{email}]} (partition: /id)
"""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from models.streak import CachedStreak

# ============================================================================
# Base Document Model
# ============================================================================


class CosmosDocument(BaseModel):
    """
    Base class for Cosmos DB documents.

    All documents have:
    - id: Unique identifier (also used as partition key)
    - _ts: Timestamp (managed by Cosmos DB)
    - _etag: ETag for optimistic concurrency (managed by Cosmos DB)
    """

    id: str = Field(default_factory=lambda: str(uuid4()))

    class Config:
        # Allow extra fields for Cosmos DB system properties (_ts, _etag, etc.)
        extra = "allow"
        use_enum_values = True


# ============================================================================
# User Documents
# ============================================================================


class CurrentStatsDocument(BaseModel):
    """Solved-problem counters, refreshed by the stats sync job."""

    easy: int = 0
    medium: int = 0
    hard: int = 0
    total: int = 0

    @field_validator("easy", "medium", "hard", "total", mode="before")
    @classmethod
    def null_counter_is_zero(cls, v: Optional[int]) -> int:
        """Older documents store null for counters that were never synced."""
        return 0 if v is None else v


class UserDocument(CosmosDocument):
    """
    User document stored in the 'users' container.

    Partition key: /id
    """

    email: str  # Unique, indexed via email-lookup container
    name: Optional[str] = None

    # Linked submission-feed identity
    leetcode_username: Optional[str] = None

    current_stats: CurrentStatsDocument = Field(default_factory=CurrentStatsDocument)

    # Streak cache (kept in sync: last_streak_update == cached_streak_data.computed_at)
    cached_streak_data: Optional[dict[str, Any]] = None
    last_streak_update: Optional[datetime] = None

    # achievement_id -> first time the achievement was seen unlocked
    unlocked_achievements: dict[str, datetime] = Field(default_factory=dict)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("current_stats", mode="before")
    @classmethod
    def null_stats_is_empty(cls, v: Any) -> Any:
        return CurrentStatsDocument() if v is None else v

    @field_validator("unlocked_achievements", mode="before")
    @classmethod
    def null_ledger_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def has_feed_identity(self) -> bool:
        return bool(self.leetcode_username and self.leetcode_username.strip())

    def get_cached_streak(self) -> Optional[CachedStreak]:
        """Parse the cached streak, ignoring entries that cannot be read."""
        if not self.cached_streak_data or not self.cached_streak_data.get("computed_at"):
            return None
        try:
            return CachedStreak.from_dict(self.cached_streak_data)
        except (KeyError, TypeError, ValueError):
            return None
