"""
Achievement service.

Answers "what is this user's full achievement state right now": streak (via
StreakService), solve and party statistics, per-achievement progress and the
XP/level aggregate.
"""

import asyncio
from datetime import datetime
from typing import Callable, Sequence

import structlog

from core.exceptions import UserNotFound
from models.achievement import AchievementDefinition, AchievementEvaluation, UserStatsSnapshot
from models.cosmos_documents import UserDocument
from models.streak import StreakResult
from repositories.provider import PartyRepositoryProtocol, UserRepositoryProtocol
from schemas.converters import evaluation_to_state_schema
from schemas.gamification import AchievementStateResponse, StreakData
from services.achievement_evaluator import evaluate_achievements
from services.streak_service import StreakService, utc_now

logger = structlog.get_logger(__name__)


class AchievementService:
    """Service for evaluating a user's achievements."""

    def __init__(
        self,
        user_repo: UserRepositoryProtocol,
        party_repo: PartyRepositoryProtocol,
        streak_service: StreakService,
        catalog: Sequence[AchievementDefinition],
        clock: Callable[[], datetime] = utc_now,
    ):
        self.user_repo = user_repo
        self.party_repo = party_repo
        self.streak_service = streak_service
        self.catalog = catalog
        self.clock = clock

    async def get_achievement_state(self, user_key: str) -> AchievementStateResponse:
        """
        Evaluate every achievement for the user identified by ``user_key`` (email).

        Raises:
            UserNotFound: no profile exists for the email
        """
        user = await self._get_user(user_key)

        lookup = await self.streak_service.get_streak(user)
        stats = await self.collect_stats(user)

        evaluated_at = self.clock()
        evaluation = evaluate_achievements(
            stats,
            lookup.result,
            self.catalog,
            evaluated_at,
            unlock_history=user.unlocked_achievements,
        )
        await self._record_first_unlocks(user, evaluation, evaluated_at)

        streak_data = StreakData(
            current_streak=lookup.result.current_streak,
            longest_streak=lookup.result.longest_streak,
            last_submission_date=lookup.result.last_activity_date,
            last_updated=lookup.last_updated,
            cache_age=lookup.cache_age_seconds,
        )

        logger.debug(
            "achievements_evaluated",
            user_id=user.id,
            unlocked=len(evaluation.unlocked_ids),
            total_xp=evaluation.aggregate.total_xp,
            streak_from_cache=lookup.from_cache,
        )
        return evaluation_to_state_schema(evaluation, streak_data, stats)

    async def refresh_streak(self, user_key: str) -> StreakResult:
        """
        Force a streak refresh for the user identified by ``user_key``.

        Raises:
            UserNotFound: no profile exists for the email
            ExternalIdentityMissing: the user has no linked LeetCode username
            UpstreamUnavailable: the submission feed call failed
        """
        user = await self._get_user(user_key)
        return await self.streak_service.force_refresh(user)

    async def collect_stats(self, user: UserDocument) -> UserStatsSnapshot:
        """Gather solve counters from the profile and party counts from the party store."""
        parties_created, parties_joined = await asyncio.gather(
            self.party_repo.count_created_by(user.email),
            self.party_repo.count_joined_by(user.email),
        )
        current = user.current_stats
        return UserStatsSnapshot(
            easy_solved=current.easy,
            medium_solved=current.medium,
            hard_solved=current.hard,
            total_solved=current.total,
            parties_created=parties_created,
            parties_joined=parties_joined,
        )

    async def _get_user(self, user_key: str) -> UserDocument:
        user = await self.user_repo.get_by_email(user_key)
        if user is None:
            raise UserNotFound()
        return user

    async def _record_first_unlocks(
        self,
        user: UserDocument,
        evaluation: AchievementEvaluation,
        evaluated_at: datetime,
    ) -> None:
        """Persist unlock times for achievements seen unlocked for the first time."""
        new_ids = [a for a in evaluation.unlocked_ids if a not in user.unlocked_achievements]
        if not new_ids:
            return

        ledger = dict(user.unlocked_achievements)
        ledger.update({achievement_id: evaluated_at for achievement_id in new_ids})
        await self.user_repo.save_unlock_ledger(user.id, ledger)
        logger.info("achievements_unlocked", user_id=user.id, achievement_ids=new_ids)
