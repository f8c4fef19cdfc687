"""Cosmos DB store adapter with explicit lifecycle management.

This module wraps the async Azure Cosmos DB client behind the handful of
operations the MCP tools need. One CosmosStore is constructed at startup and
handed to the tools and the dispatcher, so nothing reaches for a global client.

Key Features:
    - Explicit construction (from settings or arguments) and injection
    - connect()/close() tied to the server lifespan
    - Point reads report a missing item as None instead of raising
    - Query results are drained eagerly into lists

Example:
    >>> store = CosmosStore.from_settings(settings)
    >>> await store.connect()
    >>> item = await store.read_item("tasks", "42")
    >>> await store.close()
"""

import logging
from typing import Any

from azure.cosmos.aio import ContainerProxy, CosmosClient, DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from cosmosdb_mcp.config.settings import Settings

from ..exceptions import StoreNotConnectedError

logger = logging.getLogger(__name__)


class CosmosStore:
    """Async access to one Cosmos DB database.

    Attributes:
        endpoint: Account endpoint URI
        database_name: Database every operation runs against
    """

    def __init__(self, endpoint: str, key: str, database_name: str) -> None:
        self.endpoint = endpoint
        self.database_name = database_name
        self._key = key
        self._client: CosmosClient | None = None
        self._database: DatabaseProxy | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CosmosStore":
        """Build a store from validated application settings."""
        return cls(
            endpoint=settings.cosmosdb_uri,
            key=settings.cosmosdb_key,
            database_name=settings.cosmosdb_database,
        )

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    async def connect(self) -> None:
        """Create the async client and database proxy.

        No request is sent here; the first tool call opens the connection.
        """
        if self._client is not None:
            logger.debug("Cosmos DB client already created")
            return

        logger.info(f"Creating Cosmos DB client for database: {self.database_name}")
        self._client = CosmosClient(self.endpoint, credential=self._key)
        self._database = self._client.get_database_client(self.database_name)
        logger.info(f"✓ Cosmos DB client ready ({self.endpoint})")

    async def close(self) -> None:
        """Close the client and release its HTTP session."""
        if self._client is None:
            return

        logger.info("Closing Cosmos DB client...")
        await self._client.close()
        self._client = None
        self._database = None
        logger.info("✓ Cosmos DB client closed")

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def __aenter__(self) -> "CosmosStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ========================================================================
    # ACCESS
    # ========================================================================

    def get_database(self) -> DatabaseProxy:
        """Get the database proxy.

        Raises:
            StoreNotConnectedError: If connect() has not been called
        """
        if self._database is None:
            raise StoreNotConnectedError(
                message="Cosmos DB client not connected. Call connect() at startup.",
                details={"database": self.database_name},
            )
        return self._database

    def get_container(self, container_name: str) -> ContainerProxy:
        return self.get_database().get_container_client(container_name)

    # ========================================================================
    # OPERATIONS
    # ========================================================================

    async def read_item(
        self, container_name: str, item_id: str, partition_key: Any = None
    ) -> dict[str, Any] | None:
        """Point-read an item, returning None when it does not exist.

        Args:
            container_name: Container to read from
            item_id: The item's ``id``
            partition_key: Partition key value; defaults to ``item_id``
        """
        container = self.get_container(container_name)
        if partition_key is None:
            partition_key = item_id
        try:
            return await container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.debug(f"Item {item_id} not found in container {container_name}")
            return None

    async def upsert_item(self, container_name: str, item: dict[str, Any]) -> dict[str, Any]:
        container = self.get_container(container_name)
        return await container.upsert_item(body=item)

    async def replace_item(
        self, container_name: str, item_id: str, item: dict[str, Any]
    ) -> dict[str, Any]:
        container = self.get_container(container_name)
        return await container.replace_item(item=item_id, body=item)

    async def query_items(
        self,
        container_name: str,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Run a parameterized SQL query and collect every page of results."""
        container = self.get_container(container_name)
        pager = container.query_items(query=query, parameters=parameters or [])
        return [item async for item in pager]

    async def list_containers(self) -> list[str]:
        """Return the ids of every container in the database."""
        database = self.get_database()
        return [properties["id"] async for properties in database.list_containers()]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(endpoint='{self.endpoint}', database='{self.database_name}')"
