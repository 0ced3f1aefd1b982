"""
Streak service with a time-boxed cache.

Answers "what is this user's streak right now" from the cached value on the
user document while it is fresh, and recomputes it from the submission feed
once it goes stale.

Refresh policy:
- get_streak degrades gracefully: if the feed is down (or the user never
  linked a LeetCode account) it reports a zero streak and leaves the cache
  untouched, so the next request retries.
- force_refresh always hits the feed and raises on failure.

A refresh runs as its own task, awaited through asyncio.shield: if the
request that triggered it is cancelled, the fetch still completes and warms
the cache for the next request.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import structlog

from core.config import settings
from core.exceptions import ExternalIdentityMissing, UpstreamUnavailable
from models.cosmos_documents import UserDocument
from models.streak import CachedStreak, StreakResult
from repositories.provider import UserRepositoryProtocol
from services.streak_calculator import compute_streak_from_events
from services.submission_feed import SubmissionFeed

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StreakLookup:
    """Streak as reported to callers, with cache bookkeeping."""

    result: StreakResult
    cache_age_seconds: Optional[int]  # None when nothing has ever been cached
    last_updated: Optional[datetime]
    from_cache: bool = False


class StreakService:
    """Service for reading and refreshing cached user streaks."""

    def __init__(
        self,
        feed: SubmissionFeed,
        user_repo: UserRepositoryProtocol,
        cache_ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize streak service.

        Args:
            feed: Source of accepted submissions
            user_repo: Store holding the cached streak on the user document
            cache_ttl: How long a cached streak stays fresh (default: STREAK_CACHE_TTL_SECONDS)
            clock: Returns the current aware UTC time
        """
        self.feed = feed
        self.user_repo = user_repo
        self.cache_ttl = cache_ttl or timedelta(seconds=settings.STREAK_CACHE_TTL_SECONDS)
        self.clock = clock
        # Strong references so in-flight refreshes are not garbage collected
        self._pending: set[asyncio.Task] = set()

    async def get_streak(self, user: UserDocument) -> StreakLookup:
        """Get the user's streak, using the cache if it is fresh."""
        if not user.has_feed_identity:
            # A leftover cache from a previously linked account is not reported
            logger.info("streak_unavailable", user_id=user.id, reason="no_feed_identity")
            return StreakLookup(result=StreakResult.empty(), cache_age_seconds=None, last_updated=None)

        now = self.clock()
        cached = user.get_cached_streak()
        cache_age = int(cached.age(now).total_seconds()) if cached else None

        if cached and not cached.is_stale(now, self.cache_ttl):
            return StreakLookup(
                result=cached.result,
                cache_age_seconds=cache_age,
                last_updated=user.last_streak_update or cached.computed_at,
                from_cache=True,
            )

        try:
            fresh = await self._refresh(user)
        except UpstreamUnavailable as e:
            logger.warning("streak_refresh_degraded", user_id=user.id, error=e.message)
            return StreakLookup(
                result=StreakResult.empty(),
                cache_age_seconds=cache_age,
                last_updated=user.last_streak_update,
            )

        return StreakLookup(
            result=fresh.result,
            cache_age_seconds=0,
            last_updated=fresh.computed_at,
        )

    async def force_refresh(self, user: UserDocument) -> StreakResult:
        """
        Recompute the user's streak from the feed regardless of cache age.

        Raises:
            ExternalIdentityMissing: the user has no linked LeetCode username
            UpstreamUnavailable: the feed call failed or timed out
        """
        if not user.has_feed_identity:
            raise ExternalIdentityMissing()

        fresh = await self._refresh(user)
        logger.info(
            "streak_force_refreshed",
            user_id=user.id,
            current_streak=fresh.result.current_streak,
            longest_streak=fresh.result.longest_streak,
        )
        return fresh.result

    async def drain(self) -> None:
        """Wait for in-flight refreshes (called on shutdown)."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _refresh(self, user: UserDocument) -> CachedStreak:
        task = asyncio.create_task(self._fetch_and_store(user.id, user.leetcode_username or ""))
        self._pending.add(task)
        task.add_done_callback(self._on_refresh_done)
        return await asyncio.shield(task)

    async def _fetch_and_store(self, user_id: str, username: str) -> CachedStreak:
        events = await self.feed.fetch_submissions(username.strip())
        now = self.clock()
        cached = CachedStreak(
            result=compute_streak_from_events(events, now),
            computed_at=now,
        )
        await self.user_repo.save_cached_streak(user_id, cached)
        return cached

    def _on_refresh_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        # Retrieve the exception so an abandoned refresh does not warn at GC time
        if not task.cancelled() and task.exception() is not None:
            logger.debug("streak_refresh_failed", error=str(task.exception()))
