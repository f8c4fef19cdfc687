"""Unit tests for ContainerTools (query_container, list_containers, sample_item)."""

import pytest
from azure.cosmos.exceptions import CosmosHttpResponseError

from cosmosdb_mcp.mcp_server.exceptions import ErrorKind
from cosmosdb_mcp.mcp_server.tools.container_tools import SAMPLE_QUERY, ContainerTools
from cosmosdb_mcp.mcp_server.tools.models import (
    ListContainersRequest,
    QueryContainerRequest,
    SampleItemRequest,
)


class TestQueryContainer:
    async def test_returns_all_items(self, mock_store):
        items = [{"id": "1", "status": "open"}, {"id": "2", "status": "open"}]
        mock_store.query_items.return_value = items

        result = await ContainerTools(mock_store).query_container(
            QueryContainerRequest(
                containerName="tasks",
                query="SELECT * FROM c WHERE c.status = @status",
                parameters=[{"name": "@status", "value": "open"}],
            )
        )

        assert result.success is True
        assert result.message == "Query executed successfully on container tasks"
        assert result.items == items
        mock_store.query_items.assert_awaited_once_with(
            "tasks",
            "SELECT * FROM c WHERE c.status = @status",
            [{"name": "@status", "value": "open"}],
        )

    async def test_parameters_default_to_empty(self, mock_store):
        result = await ContainerTools(mock_store).query_container(
            QueryContainerRequest(containerName="tasks", query="SELECT * FROM c")
        )

        assert result.items == []
        mock_store.query_items.assert_awaited_once_with("tasks", "SELECT * FROM c", [])

    @pytest.mark.parametrize(
        "query, rows",
        [
            ("SELECT VALUE COUNT(1) FROM c", [3]),
            ("SELECT VALUE c.name FROM c", ["a", "b"]),
            ("SELECT VALUE c.tags FROM c", [["x"], None, True]),
        ],
    )
    async def test_value_projections_returned_as_is(self, mock_store, query, rows):
        mock_store.query_items.return_value = rows

        result = await ContainerTools(mock_store).query_container(
            QueryContainerRequest(containerName="tasks", query=query)
        )

        payload = result.to_payload()
        assert payload["success"] is True
        assert payload["items"] == rows
        assert "errorKind" not in payload

    async def test_invalid_query(self, mock_store):
        mock_store.query_items.side_effect = CosmosHttpResponseError(
            status_code=400, message="Syntax error, incorrect syntax near 'FORM'."
        )

        result = await ContainerTools(mock_store).query_container(
            QueryContainerRequest(containerName="tasks", query="SELECT * FORM c")
        )

        payload = result.to_payload()
        assert payload["success"] is False
        assert payload["message"].startswith("Failed to query container: ")
        assert "Syntax error" in payload["message"]
        assert payload["errorKind"] == "invalid_query"
        assert "items" not in payload


class TestListContainers:
    async def test_returns_names(self, mock_store):
        mock_store.list_containers.return_value = ["tasks", "users"]

        result = await ContainerTools(mock_store).list_containers(ListContainersRequest())

        assert result.to_payload() == {
            "success": True,
            "message": "Containers retrieved successfully",
            "containers": ["tasks", "users"],
        }

    async def test_empty_database(self, mock_store):
        result = await ContainerTools(mock_store).list_containers(ListContainersRequest())

        assert result.containers == []

    async def test_store_error(self, mock_store):
        mock_store.list_containers.side_effect = CosmosHttpResponseError(
            status_code=404, message="Owner resource does not exist"
        )

        result = await ContainerTools(mock_store).list_containers(ListContainersRequest())

        assert result.success is False
        assert result.message.startswith("Failed to list containers: ")
        assert result.error_kind == ErrorKind.NOT_FOUND


class TestSampleItem:
    async def test_queries_newest_items_with_limit(self, mock_store):
        await ContainerTools(mock_store).sample_item(
            SampleItemRequest(containerName="tasks", limit=3)
        )

        mock_store.query_items.assert_awaited_once_with(
            "tasks", SAMPLE_QUERY, [{"name": "@limit", "value": 3}]
        )
        assert "ORDER BY c._ts DESC" in SAMPLE_QUERY

    async def test_limit_defaults_to_one(self, mock_store):
        await ContainerTools(mock_store).sample_item(SampleItemRequest(containerName="tasks"))

        _, _, parameters = mock_store.query_items.await_args.args
        assert parameters == [{"name": "@limit", "value": 1}]

    async def test_items_truncated_and_schema_from_first_item(
        self, mock_store, sample_task_item, long_description
    ):
        newest = {**sample_task_item, "description": long_description}
        older = {"id": "task-0", "note": long_description}
        mock_store.query_items.return_value = [newest, older]

        result = await ContainerTools(mock_store).sample_item(
            SampleItemRequest(containerName="tasks", limit=2)
        )

        payload = result.to_payload()
        assert payload["success"] is True
        assert payload["message"] == "Retrieved 2 sample item(s) from container tasks"
        assert payload["items"][0]["description"].endswith("word09...")
        assert payload["items"][1]["note"].endswith("word09...")
        assert payload["items"][0]["owner"] == sample_task_item["owner"]

        schema = {entry["field"]: entry for entry in payload["schema"]}
        assert list(schema) == list(newest)
        assert "note" not in schema
        assert schema["description"]["type"] == "string"
        assert schema["done"] == {"field": "done", "type": "boolean", "sample": False}

    async def test_empty_container(self, mock_store):
        result = await ContainerTools(mock_store).sample_item(
            SampleItemRequest(containerName="tasks", limit=5)
        )

        assert result.to_payload() == {
            "success": True,
            "message": "Retrieved 0 sample item(s) from container tasks",
            "items": [],
            "schema": [],
        }

    async def test_store_error(self, mock_store):
        mock_store.query_items.side_effect = CosmosHttpResponseError(
            status_code=503, message="Service unavailable"
        )

        result = await ContainerTools(mock_store).sample_item(
            SampleItemRequest(containerName="tasks")
        )

        assert result.success is False
        assert result.message.startswith("Failed to sample container: ")
        assert result.error_kind == ErrorKind.TRANSIENT
