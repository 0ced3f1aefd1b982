"""
Repository provider for dependency injection.

This module provides a unified interface for accessing repositories
using Cosmos DB as the data store.

Usage:
    from repositories.provider import get_user_repository, get_party_repository

    user_repo = get_user_repository()
    user = await user_repo.get_by_email(email)
"""

from datetime import datetime
from typing import Mapping, Optional, Protocol, runtime_checkable

from db.cosmos_session import is_cosmos_configured
from models.cosmos_documents import UserDocument
from models.streak import CachedStreak


# =============================================================================
# Repository Protocols (Interfaces)
# =============================================================================


@runtime_checkable
class UserRepositoryProtocol(Protocol):
    """Protocol defining user repository operations."""

    async def get_by_id(self, user_id: str) -> Optional[UserDocument]: ...
    async def get_by_email(self, email: str) -> Optional[UserDocument]: ...
    async def save_cached_streak(self, user_id: str, cached: CachedStreak) -> None: ...
    async def save_unlock_ledger(self, user_id: str, ledger: Mapping[str, datetime]) -> None: ...


@runtime_checkable
class PartyRepositoryProtocol(Protocol):
    """Protocol defining party repository operations."""

    async def count_created_by(self, email: str) -> int: ...
    async def count_joined_by(self, email: str) -> int: ...


# =============================================================================
# Repository Factory Functions
# =============================================================================


def get_user_repository() -> UserRepositoryProtocol:
    """Get the user repository for the configured store."""
    if not is_cosmos_configured():
        raise NotImplementedError(
            "No user store configured. Please configure AZURE_COSMOS_ENDPOINT to use Cosmos DB."
        )
    from repositories.cosmos_user_repository import CosmosUserRepository

    return CosmosUserRepository()


def get_party_repository() -> PartyRepositoryProtocol:
    """Get the party repository for the configured store."""
    if not is_cosmos_configured():
        raise NotImplementedError(
            "No party store configured. Please configure AZURE_COSMOS_ENDPOINT to use Cosmos DB."
        )
    from repositories.cosmos_party_repository import CosmosPartyRepository

    return CosmosPartyRepository()
