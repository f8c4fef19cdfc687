"""Exception hierarchy for the Cosmos DB MCP server.

Problem:
--------
The store client raises a mix of HTTP errors, transport errors and plain Python
exceptions. Stringifying them at the point of failure loses the information a
caller needs to decide what to do next (retry, fix the query, fix the key).

Solution:
---------
1. **Single Root Exception**: every server error inherits from DocumentStoreError.
2. **Tagged Kinds**: each error carries an ErrorKind (not_found, invalid_query,
   unauthorized, transient, invalid_argument, unknown) that survives all the way
   to the tool result as ``errorKind``.
3. **Original Cause**: the third-party exception is kept in
   ``original_exception`` and only turned into text at the presentation boundary.

Usage Example:
--------------
```python
try:
    item = await container.read_item(item=item_id, partition_key=item_id)
except Exception as e:
    raise convert_to_store_exception(e, context={"container": "tasks"}) from e
```
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from azure.core.exceptions import ServiceRequestError, ServiceResponseError
from azure.cosmos.exceptions import CosmosHttpResponseError
from pydantic import ValidationError as PydanticValidationError


class ErrorKind(str, Enum):
    """Machine-readable category attached to every failed operation."""

    NOT_FOUND = "not_found"
    INVALID_QUERY = "invalid_query"
    UNAUTHORIZED = "unauthorized"
    TRANSIENT = "transient"
    INVALID_ARGUMENT = "invalid_argument"
    UNKNOWN = "unknown"


# HTTP status codes the Cosmos DB service uses for retryable conditions
# (408 timeout, 429 throttled, 449 retry-with, 5xx service side).
TRANSIENT_STATUS_CODES = frozenset({408, 429, 449, 500, 502, 503, 504})


# =============================================================================
# BASE EXCEPTION CLASS
# =============================================================================


@dataclass(frozen=True)
class DocumentStoreError(Exception):
    """Base exception for all Cosmos DB MCP server errors.

    Attributes:
    -----------
    message : str
        Human-readable error description. This is the text embedded in
        ``Failed to <verb>: <message>`` tool results.
    error_kind : ErrorKind
        Category of the failure, reported to callers as ``errorKind``.
    details : dict
        Additional context (container, item id, operation).
    status_code : int | None
        HTTP status code reported by the store, when there was one.
    original_exception : Exception | None
        The underlying exception that caused this error.

    Example:
    --------
    >>> raise DocumentStoreError(
    ...     message="Conflict writing item",
    ...     details={"container": "tasks", "id": "42"},
    ...     status_code=409,
    ... )
    """

    message: str
    error_kind: ErrorKind = ErrorKind.UNKNOWN
    details: dict[str, Any] = field(default_factory=dict)
    status_code: int | None = None
    original_exception: Exception | None = None

    def __str__(self) -> str:
        """Human-readable error representation for logs."""
        error_msg = f"[{self.error_kind.value}] {self.message}"
        if self.details:
            error_msg += f" | Details: {self.details}"
        if self.original_exception:
            error_msg += f" | Caused by: {type(self.original_exception).__name__}"
        return error_msg

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"error_kind='{self.error_kind.value}', "
            f"message='{self.message}', "
            f"status_code={self.status_code}"
            f")"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a JSON-serializable dictionary."""
        error_dict = {
            "error": self.message,
            "error_kind": self.error_kind.value,
            "details": self.details,
            "status_code": self.status_code,
        }

        if self.original_exception:
            error_dict["original_error"] = {
                "type": type(self.original_exception).__name__,
                "message": str(self.original_exception),
            }

        return error_dict


# =============================================================================
# STORE EXCEPTIONS
# =============================================================================


@dataclass(frozen=True)
class ItemNotFoundError(DocumentStoreError):
    """The item, container or database does not exist.

    Example:
    --------
    >>> raise ItemNotFoundError(
    ...     message="Item not found",
    ...     details={"container": "tasks", "id": "42"},
    ... )
    """

    error_kind: ErrorKind = ErrorKind.NOT_FOUND
    status_code: int | None = 404


@dataclass(frozen=True)
class InvalidQueryError(DocumentStoreError):
    """The store rejected the request as malformed (bad SQL, bad parameters)."""

    error_kind: ErrorKind = ErrorKind.INVALID_QUERY
    status_code: int | None = 400


@dataclass(frozen=True)
class UnauthorizedError(DocumentStoreError):
    """The configured key was rejected or lacks permission."""

    error_kind: ErrorKind = ErrorKind.UNAUTHORIZED
    status_code: int | None = 401


@dataclass(frozen=True)
class TransientStoreError(DocumentStoreError):
    """Network failure, throttling or a service-side error worth retrying."""

    error_kind: ErrorKind = ErrorKind.TRANSIENT


@dataclass(frozen=True)
class StoreNotConnectedError(TransientStoreError):
    """The store adapter was used before connect() or after close()."""


# =============================================================================
# REQUEST EXCEPTIONS
# =============================================================================


@dataclass(frozen=True)
class InvalidArgumentError(DocumentStoreError):
    """Tool arguments did not match the operation's request model.

    Example:
    --------
    >>> raise InvalidArgumentError(
    ...     message="Invalid arguments: containerName: Field required",
    ...     details={"errors": [{"field": "containerName", "error": "Field required"}]},
    ... )
    """

    error_kind: ErrorKind = ErrorKind.INVALID_ARGUMENT


@dataclass(frozen=True)
class ConfigurationError(DocumentStoreError):
    """Configuration or initialization errors.

    These should crash the server at startup rather than being caught and
    turned into tool results.
    """


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def format_validation_error(error: PydanticValidationError) -> str:
    """Render pydantic validation errors as ``field: reason`` pairs.

    Example:
    --------
    >>> format_validation_error(exc)
    'Invalid arguments: containerName: Field required; limit: Input should be greater than or equal to 1'
    """
    parts = []
    for entry in error.errors():
        location = ".".join(str(part) for part in entry.get("loc", ())) or "arguments"
        parts.append(f"{location}: {entry.get('msg', 'invalid value')}")
    return "Invalid arguments: " + "; ".join(parts)


def invalid_arguments_error(
    error: PydanticValidationError, context: dict[str, Any] | None = None
) -> InvalidArgumentError:
    """Tag a failed validation of tool arguments as ``invalid_argument``."""
    return InvalidArgumentError(
        message=format_validation_error(error),
        details={**(context or {}), "errors": error.errors(include_url=False)},
        original_exception=error,
    )


def _error_for_status(
    status_code: int | None, message: str, details: dict[str, Any], exception: Exception
) -> DocumentStoreError:
    if status_code == 404:
        return ItemNotFoundError(
            message=message, details=details, status_code=status_code, original_exception=exception
        )
    if status_code == 400:
        return InvalidQueryError(
            message=message, details=details, status_code=status_code, original_exception=exception
        )
    if status_code in (401, 403):
        return UnauthorizedError(
            message=message, details=details, status_code=status_code, original_exception=exception
        )
    if status_code in TRANSIENT_STATUS_CODES:
        return TransientStoreError(
            message=message, details=details, status_code=status_code, original_exception=exception
        )
    return DocumentStoreError(
        message=message, details=details, status_code=status_code, original_exception=exception
    )


def convert_to_store_exception(
    exception: Exception,
    context: dict[str, Any] | None = None,
) -> DocumentStoreError:
    """Convert any exception to the matching DocumentStoreError.

    Used at the handler boundary so that every failure reaching a tool result
    carries an ErrorKind.

    Args:
    -----
    exception : Exception
        The original exception to convert
    context : dict, optional
        Additional context to include in error details

    Returns:
    --------
    DocumentStoreError or subclass

    Example:
    --------
    >>> try:
    ...     await container.replace_item(item=item_id, body=body)
    ... except Exception as e:
    ...     error = convert_to_store_exception(e, context={"container": "tasks"})
    """
    context = context or {}

    # Already tagged - return as-is
    if isinstance(exception, DocumentStoreError):
        return exception

    # Cosmos DB HTTP errors (404, 400, 401/403, 429, 5xx ...)
    if isinstance(exception, CosmosHttpResponseError):
        status_code = getattr(exception, "status_code", None)
        message = getattr(exception, "message", None) or str(exception)
        return _error_for_status(
            status_code, message, {**context, "status_code": status_code}, exception
        )

    # Network-level failures from the azure-core transport
    if isinstance(exception, (ServiceRequestError, ServiceResponseError)):
        return TransientStoreError(
            message=str(exception),
            details={**context, "error_type": type(exception).__name__},
            original_exception=exception,
        )

    if isinstance(exception, (asyncio.TimeoutError, TimeoutError, ConnectionError)):
        return TransientStoreError(
            message=str(exception) or type(exception).__name__,
            details={**context, "error_type": type(exception).__name__},
            original_exception=exception,
        )

    # Generic fallback, pydantic ValidationError included (tool arguments are
    # tagged by invalid_arguments_error instead)
    return DocumentStoreError(
        message=str(exception) or type(exception).__name__,
        details={**context, "error_type": type(exception).__name__},
        original_exception=exception,
    )
