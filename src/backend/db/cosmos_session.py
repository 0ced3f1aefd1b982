"""
Azure Cosmos DB session management for document storage.

Uses async Cosmos DB SDK with DefaultAzureCredential for RBAC authentication.
This module provides a unified client for all Cosmos DB operations.
"""

import logging
from typing import Any

from azure.cosmos.aio import ContainerProxy, CosmosClient, DatabaseProxy
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError
from azure.identity.aio import DefaultAzureCredential

from core.config import settings
from core.exceptions import InternalFault

logger = logging.getLogger(__name__)

# Container names
USERS_CONTAINER = "users"
EMAIL_LOOKUP_CONTAINER = "email-lookup"
PARTIES_CONTAINER = "parties"

# Global client instances (lazy-initialized)
_cosmos_client: CosmosClient | None = None
_database: DatabaseProxy | None = None
_credential: DefaultAzureCredential | None = None


def is_cosmos_configured() -> bool:
    """Check if Cosmos DB is configured."""
    return bool(settings.AZURE_COSMOS_ENDPOINT or settings.AZURE_COSMOS_CONNECTION_STRING)


async def get_cosmos_client() -> CosmosClient:
    """
    Get or create the Cosmos DB client.

    Supports two authentication modes:
    1. Connection string (for local development with Cosmos DB Emulator)
    2. DefaultAzureCredential/RBAC (for Azure deployment)

    The client is singleton and reused across requests.
    """
    global _cosmos_client, _credential

    if _cosmos_client is None:
        if settings.AZURE_COSMOS_CONNECTION_STRING:
            # Format: AccountEndpoint=https://...;AccountKey=...;
            conn_parts = dict(
                part.split("=", 1) for part in settings.AZURE_COSMOS_CONNECTION_STRING.split(";") if "=" in part
            )
            endpoint = conn_parts.get("AccountEndpoint", "")
            key = conn_parts.get("AccountKey", "")

            if not endpoint or not key:
                raise ValueError("AZURE_COSMOS_CONNECTION_STRING must contain AccountEndpoint and AccountKey")

            # Emulator uses a self-signed cert
            _cosmos_client = CosmosClient(
                url=endpoint,
                credential=key,
                connection_verify=not settings.AZURE_COSMOS_DISABLE_SSL,
            )
            logger.info(f"Initialized Cosmos DB client for {endpoint} (connection string mode)")
        else:
            if not settings.AZURE_COSMOS_ENDPOINT:
                raise ValueError("Either AZURE_COSMOS_ENDPOINT or AZURE_COSMOS_CONNECTION_STRING must be set")

            _credential = DefaultAzureCredential()
            _cosmos_client = CosmosClient(
                url=settings.AZURE_COSMOS_ENDPOINT,
                credential=_credential,
            )
            logger.info(f"Initialized Cosmos DB client for {settings.AZURE_COSMOS_ENDPOINT} (RBAC mode)")

    return _cosmos_client


async def get_database() -> DatabaseProxy:
    """Get the Cosmos DB database proxy."""
    global _database

    if _database is None:
        client = await get_cosmos_client()
        _database = client.get_database_client(settings.AZURE_COSMOS_DATABASE)
        logger.info(f"Connected to database: {settings.AZURE_COSMOS_DATABASE}")

    return _database


async def get_container(container_name: str) -> ContainerProxy:
    """Get a container proxy for the specified container."""
    database = await get_database()
    return database.get_container_client(container_name)


async def close_cosmos() -> None:
    """
    Close Cosmos DB connections.

    Should be called during application shutdown.
    """
    global _cosmos_client, _database, _credential

    if _cosmos_client is not None:
        await _cosmos_client.close()
        _cosmos_client = None
        _database = None
        logger.info("Closed Cosmos DB client")

    if _credential is not None:
        await _credential.close()
        _credential = None


# ============================================================================
# Utility Functions for Common Operations
# ============================================================================


async def read_item(
    container_name: str,
    item_id: str,
    partition_key: str,
) -> dict[str, Any] | None:
    """
    Read an item by ID and partition key.

    Returns:
        Item data or None if not found
    """
    container = await get_container(container_name)
    try:
        return await container.read_item(item=item_id, partition_key=partition_key)
    except CosmosResourceNotFoundError:
        return None
    except CosmosHttpResponseError as e:
        logger.error(f"Failed to read {item_id} from {container_name}: {e.status_code}")
        raise InternalFault("Storage read failed") from e


async def patch_item(
    container_name: str,
    item_id: str,
    partition_key: str,
    fields: dict[str, Any],
) -> dict[str, Any]:
    """
    Set top-level (or slash-separated nested) fields on an existing item.

    A single round trip: every field is sent as a ``set`` patch operation.

    Example:
        await patch_item('users', user_id, user_id, {'last_streak_update': '2025-06-12T10:00:00+00:00'})
    """
    container = await get_container(container_name)
    operations = [{"op": "set", "path": f"/{path.lstrip('/')}", "value": value} for path, value in fields.items()]
    try:
        return await container.patch_item(
            item=item_id,
            partition_key=partition_key,
            patch_operations=operations,
        )
    except CosmosHttpResponseError as e:
        logger.error(f"Failed to patch {item_id} in {container_name}: {e.status_code}")
        raise InternalFault("Storage write failed") from e


async def query_items(
    container_name: str,
    query: str,
    parameters: list[dict[str, Any]] | None = None,
) -> list[Any]:
    """
    Run a cross-partition SQL query and collect every result.

    Example:
        results = await query_items(
            'parties',
            'SELECT VALUE COUNT(1) FROM c WHERE LOWER(c.created_by) = @email',
            parameters=[{'name': '@email', 'value': 'user@example.com'}]
        )
    """
    container = await get_container(container_name)
    try:
        return [item async for item in container.query_items(query=query, parameters=parameters or None)]
    except CosmosHttpResponseError as e:
        logger.error(f"Query against {container_name} failed: {e.status_code}")
        raise InternalFault("Storage query failed") from e


async def query_count(
    container_name: str,
    query: str,
    parameters: list[dict[str, Any]] | None = None,
) -> int:
    """
    Execute a ``SELECT VALUE COUNT(1)`` query and return the integer result.

    Cross-partition aggregates come back as one partial count per partition,
    so the partial results are summed.
    """
    results = await query_items(container_name, query, parameters)
    return sum(int(r) for r in results if isinstance(r, (int, float)))
