"""
Streak domain models.

Day-level, UTC only, no direct DB concerns. The Cosmos document shape for the
cached value lives in models.cosmos_documents.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional


def ensure_utc(moment: datetime) -> datetime:
    """Return an aware UTC datetime (naive values are assumed to already be UTC)."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class SubmissionEvent:
    """A single accepted submission reported by the submission feed."""

    problem_id: str
    occurred_at: datetime

    @property
    def activity_day(self) -> date:
        """Calendar day (UTC) this submission counts towards."""
        return ensure_utc(self.occurred_at).date()


@dataclass(frozen=True)
class StreakResult:
    """Derived streak state for one user."""

    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: Optional[date] = None

    @classmethod
    def empty(cls) -> "StreakResult":
        return cls(current_streak=0, longest_streak=0, last_activity_date=None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_activity_date": self.last_activity_date.isoformat() if self.last_activity_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StreakResult":
        """Create from dictionary."""
        last = data.get("last_activity_date")
        return cls(
            current_streak=int(data.get("current_streak") or 0),
            longest_streak=int(data.get("longest_streak") or 0),
            last_activity_date=date.fromisoformat(last) if last else None,
        )


@dataclass(frozen=True)
class CachedStreak:
    """A computed streak plus the moment it was computed."""

    result: StreakResult
    computed_at: datetime

    def age(self, now: datetime) -> timedelta:
        """How old the cached value is at ``now`` (never negative)."""
        delta = ensure_utc(now) - ensure_utc(self.computed_at)
        return max(delta, timedelta(0))

    def is_stale(self, now: datetime, ttl: timedelta) -> bool:
        """Check if the cached streak must be recomputed."""
        return self.age(now) >= ttl

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.result.to_dict(),
            "computed_at": ensure_utc(self.computed_at).isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CachedStreak":
        """Create from dictionary."""
        return cls(
            result=StreakResult.from_dict(data),
            computed_at=ensure_utc(datetime.fromisoformat(data["computed_at"])),
        )
