"""
Cosmos DB Party repository.

Read-only view of the parties container: the engine only needs to know how
many parties a user has created and how many they belong to.
"""

import logging

from db.cosmos_session import PARTIES_CONTAINER, query_count

logger = logging.getLogger(__name__)

CREATED_BY_QUERY = "SELECT VALUE COUNT(1) FROM c WHERE LOWER(c.created_by) = @email"
JOINED_BY_QUERY = (
    "SELECT VALUE COUNT(1) FROM c WHERE EXISTS("
    "SELECT VALUE m FROM m IN c.members WHERE LOWER(m.email) = @email)"
)


class CosmosPartyRepository:
    """Repository for party statistics using Cosmos DB."""

    async def count_created_by(self, email: str) -> int:
        """Count parties created by the given user."""
        count = await query_count(PARTIES_CONTAINER, CREATED_BY_QUERY, parameters=_email_param(email))
        logger.debug(f"User {email} created {count} parties")
        return count

    async def count_joined_by(self, email: str) -> int:
        """Count parties the given user is a member of."""
        count = await query_count(PARTIES_CONTAINER, JOINED_BY_QUERY, parameters=_email_param(email))
        logger.debug(f"User {email} is a member of {count} parties")
        return count


def _email_param(email: str) -> list[dict[str, str]]:
    return [{"name": "@email", "value": email.strip().lower()}]
