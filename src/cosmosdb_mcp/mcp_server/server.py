"""Cosmos DB MCP Server using FastMCP.

This module implements a Model Context Protocol (MCP) server exposing an Azure
Cosmos DB database over stdio. The tools let an agent read, write, update and
query documents without holding database credentials itself.

Key Features:
    - FastMCP-based server implementation over stdio
    - Six tools served from a static catalog by the ToolDispatcher
    - Store client created on server start and closed on shutdown
    - Uniform ``{success, message, ...}`` JSON results

Architecture:
    - Item Tools: put_item, get_item, update_item
    - Container Tools: query_container, list_containers, sample_item

Usage:
    Set COSMOSDB_URI and COSMOSDB_KEY, run ``cosmosdb-mcp-server`` and connect an
    MCP client (Claude Desktop, MCP Inspector, etc.).
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from pydantic import Field

from cosmosdb_mcp.config.settings import Settings, settings

from .database.connection import CosmosStore
from .dispatcher import ToolDispatcher
from .exceptions import ConfigurationError

SERVER_INSTRUCTIONS = (
    "You have access to an Azure Cosmos DB database. Use list_containers to discover "
    "containers and sample_item to learn the shape of their documents before writing "
    "queries. Every tool result is JSON with a 'success' flag and a 'message'; check "
    "'success' before using the payload."
)

# Configure logging (stderr only: stdout carries the protocol)
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


class DispatchedTool(Tool):
    """FastMCP tool whose calls are forwarded to the ToolDispatcher.

    The advertised input schema is the catalog's schema, verbatim.
    """

    dispatcher: Any = Field(default=None, exclude=True)

    @classmethod
    def from_listing(
        cls, listing: dict[str, Any], dispatcher: ToolDispatcher
    ) -> "DispatchedTool":
        """Build a tool from one entry of ``ToolDispatcher.list_tools()``."""
        return cls(
            name=listing["name"],
            description=listing["description"],
            parameters=listing["inputSchema"],
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        response = await self.dispatcher.call_tool(self.name, arguments)
        if response.is_error:
            raise ToolError(response.first_text)
        return ToolResult(content=response.first_text)


def build_tools(dispatcher: ToolDispatcher) -> list[DispatchedTool]:
    """Create one FastMCP tool per catalog entry, in catalog order."""
    return [DispatchedTool.from_listing(listing, dispatcher) for listing in dispatcher.list_tools()]


def create_server(
    app_settings: Settings | None = None, store: CosmosStore | None = None
) -> FastMCP:
    """Create and configure the FastMCP server with all Cosmos DB tools.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded settings)
        store: Store adapter to use (defaults to one built from the settings)

    Returns:
        Configured FastMCP server instance

    Raises:
        ConfigurationError: If the settings are incomplete or invalid
    """
    app_settings = app_settings or settings

    if store is None:
        app_settings.validate_configuration()
        store = CosmosStore.from_settings(app_settings)

    dispatcher = ToolDispatcher(store)

    @asynccontextmanager
    async def store_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
        await store.connect()
        try:
            yield {"store": store}
        finally:
            await store.close()

    server = FastMCP(
        name=app_settings.mcp_server_name,
        instructions=SERVER_INSTRUCTIONS,
        lifespan=store_lifespan,
    )

    for tool in build_tools(dispatcher):
        server.add_tool(tool)

    logger.info(f"Registered tools: {', '.join(dispatcher.tool_names)}")
    return server


def main() -> None:
    """Main entry point for the MCP server."""
    try:
        logger.info("Starting Cosmos DB MCP Server...")
        settings.log_config()

        server = create_server()

        logger.info("Azure Cosmos DB Server running on stdio")
        server.run()

    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error running server: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
