"""Pytest configuration and shared fixtures for the Cosmos DB MCP server tests.

Testing Strategy:
-----------------
1. **Unit Tests**: fast, isolated, no Cosmos DB account needed
   - The store adapter is replaced with a mock whose async methods are AsyncMocks
   - The azure client is patched out when testing the adapter itself
   - Async tests run under pytest-asyncio in auto mode

2. **Integration Tests**: reserved for tests against a real account or the
   Cosmos DB emulator; selected with ``pytest -m integration``

Test Organization:
-------------------
tests/
├── unit/
│   ├── test_exceptions.py       # Tagged error hierarchy and conversion
│   ├── test_settings.py         # Environment configuration
│   ├── test_utils.py            # Truncation, type tags, serialization
│   ├── test_item_tools.py       # get_item / put_item / update_item
│   ├── test_container_tools.py  # query_container / list_containers / sample_item
│   ├── test_dispatcher.py       # Routing, validation, envelopes
│   ├── test_connection.py       # CosmosStore over a patched client
│   └── test_server.py           # FastMCP wiring and entry point
└── conftest.py                  # This file - shared fixtures
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from cosmosdb_mcp.config.settings import Settings
from cosmosdb_mcp.mcp_server.database.connection import CosmosStore
from cosmosdb_mcp.mcp_server.dispatcher import ToolDispatcher

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers.

    ```bash
    pytest -m unit              # Only unit tests (fast)
    pytest -m integration       # Only integration tests
    ```
    """
    config.addinivalue_line("markers", "unit: Fast unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Tests against a real Cosmos DB account")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory."""
    for item in items:
        test_path = Path(item.fspath)

        if "unit" in test_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in test_path.parts:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# HELPERS
# =============================================================================


class AsyncItemPager:
    """Stand-in for the azure ``AsyncItemPaged`` returned by query methods."""

    def __init__(self, items):
        self._items = list(items)

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for item in self._items:
            yield item


@pytest.fixture
def make_pager():
    """Factory for AsyncItemPager objects."""
    return AsyncItemPager


# =============================================================================
# CONFIGURATION FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Complete settings that do not depend on the environment or a .env file."""
    return Settings(
        _env_file=None,
        cosmosdb_uri="https://test-account.documents.azure.com:443/",
        cosmosdb_key="dGVzdC1hY2NvdW50LWtleQ==",
        cosmosdb_database="todos",
        cosmosdb_container="tasks",
    )


# =============================================================================
# MOCK STORE FIXTURES
# =============================================================================


@pytest.fixture
def mock_store() -> MagicMock:
    """Create a mocked CosmosStore for tool and dispatcher tests.

    Every store operation is an AsyncMock, so tests configure return values
    or side effects and then assert on the calls.

    Example:
    --------
    >>> async def test_get(mock_store):
    ...     mock_store.read_item.return_value = {"id": "1"}
    ...     result = await ItemTools(mock_store).get_item(request)
    ...     mock_store.read_item.assert_awaited_once()
    """
    store = MagicMock(spec=CosmosStore)
    store.database_name = "todos"
    store.read_item = AsyncMock(return_value=None)
    store.upsert_item = AsyncMock(side_effect=lambda container, item: dict(item))
    store.replace_item = AsyncMock(side_effect=lambda container, item_id, item: dict(item))
    store.query_items = AsyncMock(return_value=[])
    store.list_containers = AsyncMock(return_value=[])
    store.connect = AsyncMock()
    store.close = AsyncMock()
    return store


@pytest.fixture
def dispatcher(mock_store: MagicMock) -> ToolDispatcher:
    return ToolDispatcher(mock_store)


# =============================================================================
# TEST DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_task_item() -> dict:
    """A task document as Cosmos DB returns it, system properties included."""
    return {
        "id": "task-1",
        "title": "Write release notes",
        "done": False,
        "priority": 2,
        "tags": ["docs", "release"],
        "owner": {"name": "Dana", "team": "platform"},
        "_rid": "AbCdEfGhIjkBAAAAAAAAAA==",
        "_etag": "\"0000d-0000-0000-0000-000000000000\"",
        "_ts": 1718000000,
    }


@pytest.fixture
def long_description() -> str:
    """A 30-word, 209-character string (over the truncation threshold)."""
    words = [f"word{index:02d}" for index in range(30)]
    return " ".join(words)
