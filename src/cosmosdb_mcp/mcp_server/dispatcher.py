"""Tool dispatcher: routes tool calls to their handlers.

The dispatcher owns the static tool catalog and a routing table from tool name
to (request model, handler, verb). A call goes through three steps:

1. Look up the name. Unknown names produce an ``isError`` response with the
   text ``Unknown tool: <name>``.
2. Validate the arguments with the tool's request model. Invalid arguments
   produce a ``success: false`` result with ``errorKind: invalid_argument``
   and the store is never called.
3. Await the handler and serialize its OperationResult as pretty-printed JSON.
   An exception escaping the handler produces an ``isError`` response with
   the text ``Error occurred: <error>``.

Example:
    >>> dispatcher = ToolDispatcher(store)
    >>> response = await dispatcher.call_tool("get_item", {"containerName": "tasks", "id": "1"})
    >>> response.first_text
    '{\\n  "success": true, ...'
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .database.connection import CosmosStore
from .exceptions import ConfigurationError, invalid_arguments_error
from .tools.catalog import TOOL_CATALOG
from .tools.container_tools import ContainerTools
from .tools.item_tools import ItemTools
from .tools.models import (
    GetItemRequest,
    ListContainersRequest,
    OperationResult,
    PutItemRequest,
    QueryContainerRequest,
    SampleItemRequest,
    ToolDescriptor,
    ToolRequest,
    ToolResponse,
    UpdateItemRequest,
)
from .tools.utils import serialize_result

logger = logging.getLogger(__name__)

Handler = Callable[[ToolRequest], Awaitable[OperationResult]]


@dataclass(frozen=True)
class ToolRoute:
    """How one tool name is served."""

    request_model: type[ToolRequest]
    handler: Handler
    verb: str


class ToolDispatcher:
    """Single entry point for list-tools and call-tool requests.

    Args:
        store: Store adapter shared by all handlers
        catalog: Tool descriptors to advertise (defaults to TOOL_CATALOG)

    Raises:
        ConfigurationError: If the catalog and the routing table disagree
    """

    def __init__(
        self, store: CosmosStore, catalog: tuple[ToolDescriptor, ...] = TOOL_CATALOG
    ) -> None:
        self.store = store
        self.catalog = catalog

        item_tools = ItemTools(store)
        container_tools = ContainerTools(store)

        self.routes: dict[str, ToolRoute] = {
            "put_item": ToolRoute(PutItemRequest, item_tools.put_item, "put item"),
            "get_item": ToolRoute(GetItemRequest, item_tools.get_item, "get item"),
            "query_container": ToolRoute(
                QueryContainerRequest, container_tools.query_container, "query container"
            ),
            "update_item": ToolRoute(UpdateItemRequest, item_tools.update_item, "update item"),
            "list_containers": ToolRoute(
                ListContainersRequest, container_tools.list_containers, "list containers"
            ),
            "sample_item": ToolRoute(
                SampleItemRequest, container_tools.sample_item, "sample container"
            ),
        }

        self._check_routes()

    def _check_routes(self) -> None:
        names = [descriptor.name for descriptor in self.catalog]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        unrouted = sorted(set(names) - set(self.routes))
        unlisted = sorted(set(self.routes) - set(names))

        if duplicates or unrouted or unlisted:
            raise ConfigurationError(
                message="Tool catalog does not match the routing table",
                details={
                    "duplicate_names": duplicates,
                    "missing_handlers": unrouted,
                    "missing_descriptors": unlisted,
                },
            )

    @property
    def tool_names(self) -> list[str]:
        return [descriptor.name for descriptor in self.catalog]

    def list_tools(self) -> list[dict[str, Any]]:
        """Return the catalog in its fixed order."""
        return [descriptor.to_dict() for descriptor in self.catalog]

    async def invoke(self, name: str, arguments: dict[str, Any] | None) -> OperationResult:
        """Validate arguments and run the handler for a known tool name.

        Raises:
            KeyError: If no route exists for ``name``
        """
        route = self.routes[name]

        try:
            request = route.request_model.model_validate(arguments or {})
        except PydanticValidationError as e:
            error = invalid_arguments_error(e, context={"tool": name})
            logger.warning(f"Rejected arguments for {name}: {error.message}")
            return OperationResult.failure(route.verb, error)

        logger.debug(f"Dispatching {name}")
        return await route.handler(request)

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> ToolResponse:
        """Run a tool and wrap the outcome in a call-tool response.

        Never raises: unknown names and escaped exceptions become
        ``is_error`` responses.
        """
        if name not in self.routes:
            logger.warning(f"Unknown tool requested: {name}")
            return ToolResponse.text(f"Unknown tool: {name}", is_error=True)

        try:
            result = await self.invoke(name, arguments)
            return ToolResponse.text(serialize_result(result.to_payload()))
        except Exception as e:
            logger.error(f"Unhandled error in tool {name}: {e}", exc_info=True)
            return ToolResponse.text(f"Error occurred: {e}", is_error=True)
