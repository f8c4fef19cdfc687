"""Static catalog of the tools advertised to MCP clients.

The input schemas are advisory metadata for the caller. Arguments are checked
against the request models in ``models.py`` when a tool is called.
"""

from .models import ToolDescriptor

PARTITION_KEY_PROPERTY = {
    "type": ["string", "number", "boolean"],
    "description": "Partition key value of the item (defaults to the item ID)",
}

PUT_ITEM_TOOL = ToolDescriptor(
    name="put_item",
    description="Inserts or replaces an item in a Azure Cosmos DB container",
    input_schema={
        "type": "object",
        "properties": {
            "containerName": {"type": "string", "description": "Name of the container"},
            "item": {"type": "object", "description": "Item to insert into the container"},
        },
        "required": ["containerName", "item"],
    },
)

GET_ITEM_TOOL = ToolDescriptor(
    name="get_item",
    description="Retrieves an item from a Azure Cosmos DB container by its ID",
    input_schema={
        "type": "object",
        "properties": {
            "containerName": {"type": "string", "description": "Name of the container"},
            "id": {"type": "string", "description": "ID of the item to retrieve"},
            "partitionKey": PARTITION_KEY_PROPERTY,
        },
        "required": ["containerName", "id"],
    },
)

QUERY_CONTAINER_TOOL = ToolDescriptor(
    name="query_container",
    description="Queries a Azure Cosmos DB container using SQL-like syntax",
    input_schema={
        "type": "object",
        "properties": {
            "containerName": {"type": "string", "description": "Name of the container"},
            "query": {"type": "string", "description": "SQL query string"},
            "parameters": {
                "type": "array",
                "description": "Query parameters, e.g. [{\"name\": \"@id\", \"value\": \"42\"}]",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "value": {},
                    },
                    "required": ["name"],
                },
            },
        },
        "required": ["containerName", "query"],
    },
)

UPDATE_ITEM_TOOL = ToolDescriptor(
    name="update_item",
    description="Updates specific attributes of an item in a Azure Cosmos DB container",
    input_schema={
        "type": "object",
        "properties": {
            "containerName": {"type": "string", "description": "Name of the container"},
            "id": {"type": "string", "description": "ID of the item to update"},
            "updates": {"type": "object", "description": "The updated attributes of the item"},
            "partitionKey": PARTITION_KEY_PROPERTY,
        },
        "required": ["containerName", "id", "updates"],
    },
)

LIST_CONTAINERS_TOOL = ToolDescriptor(
    name="list_containers",
    description="Lists all available containers in the database",
    input_schema={
        "type": "object",
        "properties": {},
        "required": [],
    },
)

SAMPLE_ITEM_TOOL = ToolDescriptor(
    name="sample_item",
    description="Returns the most recent item from a specified container to understand its schema",
    input_schema={
        "type": "object",
        "properties": {
            "containerName": {"type": "string", "description": "Name of the container to sample"},
            "limit": {
                "type": "number",
                "description": "Maximum number of items to return (default: 1)",
            },
        },
        "required": ["containerName"],
    },
)

TOOL_CATALOG: tuple[ToolDescriptor, ...] = (
    PUT_ITEM_TOOL,
    GET_ITEM_TOOL,
    QUERY_CONTAINER_TOOL,
    UPDATE_ITEM_TOOL,
    LIST_CONTAINERS_TOOL,
    SAMPLE_ITEM_TOOL,
)
