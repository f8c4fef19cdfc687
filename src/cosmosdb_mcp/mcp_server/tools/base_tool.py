"""Base tool class for async Cosmos DB access.

This module provides a minimal base class for all MCP tool classes with access
to the store adapter constructed at startup.

Example:
    >>> from cosmosdb_mcp.mcp_server.tools.base_tool import BaseTool
    >>> class MyTool(BaseTool):
    ...     async def my_operation(self):
    ...         return await self.store.query_items("tasks", "SELECT * FROM c")
"""

import logging

from ..database.connection import CosmosStore

logger = logging.getLogger(__name__)


class BaseTool:
    """Base class for all MCP tool classes.

    Holds the injected CosmosStore. The store's lifecycle is owned by the
    server, not by the tools.
    """

    def __init__(self, store: CosmosStore) -> None:
        self.store = store
        logger.debug(f"Initialized {self.__class__.__name__}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(store={self.store!r})"
