import pytest

from outline_mcp.mcp.tool_registry import (
    build_tool_handlers,
    get_all_tools,
    get_tool_names,
    normalize_arguments,
)

from tests._helpers import sent_body


def test_every_advertised_tool_has_a_handler(service):
    assert sorted(get_tool_names()) == sorted(build_tool_handlers(service))


def test_schemas_are_objects():
    for tool in get_all_tools():
        assert tool["inputSchema"]["type"] == "object"
        assert tool["description"]


@pytest.mark.parametrize("key", ["documentId", "id", "document_id"])
def test_document_id_aliases(key):
    assert normalize_arguments({key: "doc-1"}) == {"document_id": "doc-1"}


def test_normalize_handles_missing_arguments():
    assert normalize_arguments(None) == {}


@pytest.mark.asyncio
async def test_handlers_apply_default_limit(service, mock_http_client):
    handlers = build_tool_handlers(service)

    await handlers["search_wiki"]({"query": "handbook"})

    assert sent_body(mock_http_client) == {"query": "handbook", "limit": 20}


@pytest.mark.asyncio
async def test_handler_passes_bad_arguments_through_to_validation(service, mock_http_client):
    handlers = build_tool_handlers(service)

    result = await handlers["list_documents"]({"limit": "ten"})

    assert result == "Invalid input: Limit must be an integer"
    mock_http_client.send.assert_not_called()
