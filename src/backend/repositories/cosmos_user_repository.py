"""
Cosmos DB User repository.

Reads user profiles (by id or by email through the email-lookup index) and
owns the two fields the engine writes back: the cached streak and the
first-unlock ledger.
"""

import logging
from datetime import datetime
from typing import Mapping, Optional

from pydantic import ValidationError

from core.exceptions import InternalFault
from db.cosmos_session import (
    EMAIL_LOOKUP_CONTAINER,
    USERS_CONTAINER,
    patch_item,
    read_item,
)
from models.cosmos_documents import UserDocument
from models.streak import CachedStreak, ensure_utc

logger = logging.getLogger(__name__)


class CosmosUserRepository:
    """Repository for user operations using Cosmos DB."""

    # ========================================================================
    # Read Operations
    # ========================================================================

    async def get_by_id(self, user_id: str) -> Optional[UserDocument]:
        """Get a user by ID (direct point read)."""
        data = await read_item(USERS_CONTAINER, user_id, partition_key=user_id)
        if data is None:
            return None
        try:
            return UserDocument(**data)
        except ValidationError as e:
            logger.error(f"Stored profile for user {user_id} is unreadable: {e.error_count()} errors")
            raise InternalFault("Stored user profile could not be read") from e

    async def get_by_email(self, email: str) -> Optional[UserDocument]:
        """
        Get a user by email using secondary index lookup.

        Two-step process:
        1. Look up user_id from email-lookup container
        2. Point read user from users container
        """
        email_lower = email.strip().lower()

        lookup_data = await read_item(
            EMAIL_LOOKUP_CONTAINER,
            email_lower,  # email is the ID in lookup container
            partition_key=email_lower,
        )
        if lookup_data is None:
            return None

        user_id = lookup_data.get("user_id")
        if not user_id:
            return None

        return await self.get_by_id(user_id)

    # ========================================================================
    # Write Operations
    # ========================================================================

    async def save_cached_streak(self, user_id: str, cached: CachedStreak) -> None:
        """
        Overwrite the user's cached streak.

        Writes cached_streak_data and last_streak_update in one patch so the
        two never drift apart. Safe to retry.
        """
        await patch_item(
            USERS_CONTAINER,
            user_id,
            partition_key=user_id,
            fields={
                "cached_streak_data": cached.to_dict(),
                "last_streak_update": ensure_utc(cached.computed_at).isoformat(),
            },
        )
        logger.debug(f"Cached streak for user {user_id} (current={cached.result.current_streak})")

    async def save_unlock_ledger(self, user_id: str, ledger: Mapping[str, datetime]) -> None:
        """Overwrite the achievement_id -> first-unlock-time ledger."""
        await patch_item(
            USERS_CONTAINER,
            user_id,
            partition_key=user_id,
            fields={
                "unlocked_achievements": {
                    achievement_id: ensure_utc(unlocked_at).isoformat()
                    for achievement_id, unlocked_at in ledger.items()
                },
            },
        )
        logger.info(f"Saved achievement unlock ledger for user {user_id} ({len(ledger)} entries)")
