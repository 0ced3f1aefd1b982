"""Repository modules for database access."""

from repositories.cosmos_party_repository import CosmosPartyRepository
from repositories.cosmos_user_repository import CosmosUserRepository

__all__ = [
    "CosmosPartyRepository",
    "CosmosUserRepository",
]
