"""Container-level MCP tools: SQL queries, container listing and sampling.

Key Tools:
    - query_container: Run a parameterized SQL query and return every match
    - list_containers: List the containers of the configured database
    - sample_item: Preview the most recently written items and their fields

Design Philosophy:
    - Results are fetched eagerly; there is no paging beyond the store cursor
    - sample_item shortens long strings so previews stay small, and derives
      a field schema from the newest item
"""

import logging

from .base_tool import BaseTool
from .models import (
    ListContainersRequest,
    OperationResult,
    QueryContainerRequest,
    SampleItemRequest,
)
from .utils import build_field_schema, handle_store_errors, truncate_item

logger = logging.getLogger(__name__)

# Newest first by the server-maintained write timestamp
SAMPLE_QUERY = "SELECT * FROM c ORDER BY c._ts DESC OFFSET 0 LIMIT @limit"


class ContainerTools(BaseTool):
    """Tools operating on whole containers or the database."""

    @handle_store_errors("query container")
    async def query_container(self, request: QueryContainerRequest) -> OperationResult:
        """Execute a SQL query against a container.

        Args:
            request: Container name, query text and ``@name`` parameters

        Returns:
            OperationResult with ``items`` holding every matching document
        """
        parameters = [parameter.model_dump() for parameter in request.parameters]
        logger.debug(f"Query on {request.container_name}: {request.query} {parameters}")

        resources = await self.store.query_items(
            request.container_name, request.query, parameters
        )

        return OperationResult(
            success=True,
            message=f"Query executed successfully on container {request.container_name}",
            items=resources,
        )

    @handle_store_errors("list containers")
    async def list_containers(self, request: ListContainersRequest) -> OperationResult:
        container_ids = await self.store.list_containers()

        return OperationResult(
            success=True,
            message="Containers retrieved successfully",
            containers=container_ids,
        )

    @handle_store_errors("sample container")
    async def sample_item(self, request: SampleItemRequest) -> OperationResult:
        """Return the most recently written items of a container.

        String fields longer than 100 characters are cut to their first ten
        words. The schema describes the newest item, typed by its raw values.
        """
        resources = await self.store.query_items(
            request.container_name,
            SAMPLE_QUERY,
            [{"name": "@limit", "value": request.limit}],
        )

        truncated_resources = [truncate_item(resource) for resource in resources]
        field_schema = build_field_schema(resources[0]) if resources else []

        return OperationResult(
            success=True,
            message=(
                f"Retrieved {len(resources)} sample item(s) "
                f"from container {request.container_name}"
            ),
            items=truncated_resources,
            field_schema=field_schema,
        )
