"""
MCP Tool Registry - Outline
===========================

Tool schemas advertised through ``tools/list`` and the handlers that
``tools/call`` dispatches to. Handlers take the raw ``arguments`` dict and
always return text; the service does all validation.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..services.outline import OutlineService
from ..utils.validation import DEFAULT_LIMIT, MAX_LIMIT, SORT_FIELDS

logger = logging.getLogger("outline.mcp.registry")

Handler = Callable[[Dict[str, Any]], Awaitable[str]]

_LIMIT_SCHEMA = {
    "type": "integer",
    "description": f"Maximum results (1-{MAX_LIMIT}, default: {DEFAULT_LIMIT})",
    "minimum": 1,
    "maximum": MAX_LIMIT,
    "default": DEFAULT_LIMIT,
}


# =============================================================================
# OUTLINE TOOLS (5 Tools)
# =============================================================================

OUTLINE_TOOLS: List[Dict[str, Any]] = [
    {
        "name": "search_documents",
        "description": "Search for documents in the Outline documentation system",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search terms (max 1000 characters)"},
                "limit": _LIMIT_SCHEMA,
            },
            "required": ["query"],
        },
    },
    {
        "name": "search_wiki",
        "description": "Search a Wiki for relevant information",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search terms (max 1000 characters)"},
                "limit": _LIMIT_SCHEMA,
            },
            "required": ["query"],
        },
    },
    {
        "name": "get_document",
        "description": "Get a specific document by ID",
        "inputSchema": {
            "type": "object",
            "properties": {
                "document_id": {
                    "type": "string",
                    "description": "Document ID or URL slug (letters, digits, '-' and '_')",
                },
            },
            "required": ["document_id"],
        },
    },
    {
        "name": "list_documents",
        "description": "List documents with optional filtering",
        "inputSchema": {
            "type": "object",
            "properties": {
                "limit": _LIMIT_SCHEMA,
                "sort": {
                    "type": "string",
                    "description": f"Sort field: {', '.join(SORT_FIELDS)}",
                },
                "starred": {"type": "boolean", "description": "Only starred documents"},
            },
        },
    },
    {
        "name": "list_collections",
        "description": "List all available collections",
        "inputSchema": {
            "type": "object",
            "properties": {
                "limit": _LIMIT_SCHEMA,
            },
        },
    },
]

# Accepted alternative argument spellings (camelCase clients)
ARGUMENT_ALIASES = {
    "documentId": "document_id",
    "id": "document_id",
}


def get_all_tools() -> List[Dict[str, Any]]:
    return list(OUTLINE_TOOLS)


def get_tool_names() -> List[str]:
    return [t["name"] for t in OUTLINE_TOOLS]


def normalize_arguments(arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in (arguments or {}).items():
        normalized[ARGUMENT_ALIASES.get(key, key)] = value
    return normalized


def _limit(params: Dict[str, Any]) -> Any:
    # null counts as absent, like sort and starred
    limit = params.get("limit")
    return DEFAULT_LIMIT if limit is None else limit


def build_tool_handlers(service: OutlineService) -> Dict[str, Handler]:
    """Bind each advertised tool name to a coroutine on ``service``."""

    async def handle_search_documents(params: Dict[str, Any]) -> str:
        return await service.search_documents(params.get("query"), _limit(params))

    async def handle_search_wiki(params: Dict[str, Any]) -> str:
        return await service.search_wiki(params.get("query"), _limit(params))

    async def handle_get_document(params: Dict[str, Any]) -> str:
        return await service.get_document(params.get("document_id"))

    async def handle_list_documents(params: Dict[str, Any]) -> str:
        return await service.list_documents(
            _limit(params),
            params.get("sort"),
            params.get("starred"),
        )

    async def handle_list_collections(params: Dict[str, Any]) -> str:
        return await service.list_collections(_limit(params))

    handlers: Dict[str, Handler] = {
        "search_documents": handle_search_documents,
        "search_wiki": handle_search_wiki,
        "get_document": handle_get_document,
        "list_documents": handle_list_documents,
        "list_collections": handle_list_collections,
    }
    logger.debug(f"Registered {len(handlers)} Outline tool handlers")
    return handlers
