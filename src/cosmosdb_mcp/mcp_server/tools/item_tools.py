"""Item-level MCP tools: point reads, upserts and partial updates.

Key Tools:
    - get_item: Read one item by id
    - put_item: Insert or replace an item
    - update_item: Merge a set of attributes into an existing item

All methods return an OperationResult; store failures are caught by
handle_store_errors and reported as ``success: false`` results.
"""

import logging

from ..exceptions import ItemNotFoundError
from .base_tool import BaseTool
from .models import GetItemRequest, OperationResult, PutItemRequest, UpdateItemRequest
from .utils import handle_store_errors

logger = logging.getLogger(__name__)


class ItemTools(BaseTool):
    """Tools operating on a single item of a container."""

    @handle_store_errors("get item")
    async def get_item(self, request: GetItemRequest) -> OperationResult:
        """Retrieve an item by id.

        A missing item is not an error: the result is successful and carries
        no ``item`` key.
        """
        resource = await self.store.read_item(
            request.container_name, request.id, request.partition_key
        )

        if resource is None:
            return OperationResult(
                success=True,
                message=f"No item with id {request.id} found in container {request.container_name}",
            )

        return OperationResult(
            success=True,
            message=f"Item retrieved successfully from container {request.container_name}",
            item=resource,
        )

    @handle_store_errors("put item")
    async def put_item(self, request: PutItemRequest) -> OperationResult:
        """Insert the item, or replace the stored item with the same id."""
        resource = await self.store.upsert_item(request.container_name, request.item)

        return OperationResult(
            success=True,
            message=f"Item added successfully to container {request.container_name}",
            item=resource,
        )

    @handle_store_errors("update item")
    async def update_item(self, request: UpdateItemRequest) -> OperationResult:
        """Read the item, shallow-merge ``updates`` over it and replace it.

        The replace is only attempted when the read found the item. Keys not
        present in ``updates`` keep their stored values.
        """
        resource = await self.store.read_item(
            request.container_name, request.id, request.partition_key
        )
        if resource is None:
            raise ItemNotFoundError(
                message="Item not found",
                details={"container": request.container_name, "id": request.id},
            )

        updated_item = {**resource, **request.updates}
        logger.debug(
            f"Replacing item {request.id} in {request.container_name} "
            f"(fields updated: {sorted(request.updates)})"
        )
        updated_resource = await self.store.replace_item(
            request.container_name, request.id, updated_item
        )

        return OperationResult(
            success=True,
            message=f"Item updated successfully in container {request.container_name}",
            item=updated_resource,
        )
