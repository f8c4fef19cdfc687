"""Cosmos DB MCP Tools Package.

Available Tool Classes:
    - ItemTools: get_item, put_item, update_item
    - ContainerTools: query_container, list_containers, sample_item

All tools share the injected CosmosStore and the same error handling pattern.
"""

from .catalog import TOOL_CATALOG
from .container_tools import ContainerTools
from .item_tools import ItemTools

__all__ = ["TOOL_CATALOG", "ContainerTools", "ItemTools"]
