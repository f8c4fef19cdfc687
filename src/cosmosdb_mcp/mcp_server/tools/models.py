"""Pydantic models for MCP tool requests, results and protocol envelopes.

This module defines the data models used by the Cosmos DB MCP tools.
Using Pydantic provides validation of incoming tool arguments and a single
place that decides how results are serialized.

Key Components:
    - Request models for each tool (camelCase aliases match the input schemas)
    - OperationResult, the uniform result every handler returns
    - ToolDescriptor and ToolResponse, the list-tools and call-tool envelopes

Design Principles:
    - Arguments are validated before a handler runs, never coerced across types
    - Unset result payload keys are omitted, not emitted as null
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import DocumentStoreError, ErrorKind

PartitionKeyValue = str | int | float | bool


class ToolRequest(BaseModel):
    """Base for tool request models.

    Fields are populated from the camelCase names used in the input schemas.
    Unknown arguments are ignored, matching the permissive object schemas.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ContainerRequest(ToolRequest):
    container_name: str = Field(
        ..., alias="containerName", min_length=1, description="Name of the container"
    )


# =============================================================================
# ITEM TOOLS MODELS
# =============================================================================


class GetItemRequest(ContainerRequest):
    """Request model for a point read by id."""

    id: str = Field(..., min_length=1, description="ID of the item to retrieve")
    partition_key: PartitionKeyValue | None = Field(
        None, alias="partitionKey", description="Partition key value (defaults to id)"
    )


class PutItemRequest(ContainerRequest):
    """Request model for inserting or replacing an item."""

    item: dict[str, Any] = Field(..., description="Item to insert into the container")


class UpdateItemRequest(ContainerRequest):
    """Request model for a read-merge-replace update."""

    id: str = Field(..., min_length=1, description="ID of the item to update")
    updates: dict[str, Any] = Field(..., description="The updated attributes of the item")
    partition_key: PartitionKeyValue | None = Field(
        None, alias="partitionKey", description="Partition key value (defaults to id)"
    )


# =============================================================================
# CONTAINER TOOLS MODELS
# =============================================================================


class QueryParameter(BaseModel):
    """A named SQL query parameter, e.g. ``{"name": "@status", "value": "open"}``."""

    name: str = Field(..., min_length=1)
    value: Any = None


class QueryContainerRequest(ContainerRequest):
    """Request model for a parameterized SQL query."""

    query: str = Field(..., min_length=1, description="SQL query string")
    parameters: list[QueryParameter] = Field(
        default_factory=list, description="Query parameters"
    )


class ListContainersRequest(ToolRequest):
    """list_containers takes no arguments."""


class SampleItemRequest(ContainerRequest):
    """Request model for sampling the most recent items of a container."""

    limit: int = Field(1, ge=1, description="Maximum number of items to return")


# =============================================================================
# RESULT MODELS
# =============================================================================


class SchemaField(BaseModel):
    """One field of a sampled item: its name, JSON type and a preview value."""

    field: str
    type: str
    sample: Any = None


class OperationResult(BaseModel):
    """Uniform result returned by every tool handler.

    Always carries ``success`` and ``message``; the remaining keys depend on
    the operation and are left out of the payload when unset.
    """

    success: bool
    message: str
    item: dict[str, Any] | None = None
    items: list[Any] | None = None
    containers: list[str] | None = None
    field_schema: list[SchemaField] | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def failure(cls, verb: str, error: DocumentStoreError) -> "OperationResult":
        """Build the ``Failed to <verb>: <error>`` result for a tagged error."""
        return cls(
            success=False,
            message=f"Failed to {verb}: {error.message}",
            error_kind=error.error_kind,
        )

    def to_payload(self) -> dict[str, Any]:
        """Convert to the JSON object sent back to the caller."""
        payload: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.item is not None:
            payload["item"] = self.item
        if self.items is not None:
            payload["items"] = self.items
        if self.containers is not None:
            payload["containers"] = self.containers
        if self.field_schema is not None:
            payload["schema"] = [entry.model_dump() for entry in self.field_schema]
        if self.error_kind is not None:
            payload["errorKind"] = self.error_kind.value
        return payload


# =============================================================================
# PROTOCOL MODELS
# =============================================================================


class ToolDescriptor(BaseModel):
    """Name, description and input schema of one tool, as listed to clients."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(..., alias="inputSchema")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Call-tool envelope: text content plus the protocol-level error flag."""

    content: list[TextContent]
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResponse":
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def first_text(self) -> str:
        return self.content[0].text if self.content else ""
