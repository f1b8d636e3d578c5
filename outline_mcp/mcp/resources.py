"""Static and configuration resources served through ``resources/*``."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from ..utils.config_guard import OutlineConfig
from ..utils.request_builder import redact_url

MARKDOWN = "text/markdown"

API_ENDPOINTS_TEXT = """# Outline API Endpoints

The tools of this server call the following Outline API endpoints (all POST):

## Documents
- `/api/documents.search` - Search for documents (used by `search_documents` and `search_wiki`)
- `/api/documents.info` - Get document details (used by `get_document`)
- `/api/documents.list` - List documents (used by `list_documents`)

## Collections
- `/api/collections.list` - List all collections (used by `list_collections`)

For more information, refer to the official Outline API documentation.
"""

USAGE_TEXT = """# Using Outline Documentation Tools

## Search Capabilities
- Use `search_documents` for general document search across all collections
- Use `search_wiki` to search wiki content

## Viewing and Browsing Content
- Use `get_document` with a document ID to retrieve specific document content
- Use `list_documents` to browse available documents (optional `sort`: createdAt, updatedAt, title, index; optional `starred`)
- Use `list_collections` to see all available document collections

## Input Rules
- Queries: 1-1000 characters, without any of these characters: < > " ' ; & | ` $
- Document IDs: letters, digits, `-` and `_` only (max 255)
- `limit`: 1-100 (default is 20)
"""

TROUBLESHOOTING_TEXT = """# Troubleshooting Outline API

## Configuration Errors
- "Base URL is not configured": set `OUTLINE_BASE_URL`
- "API token is not configured": set `OUTLINE_API_TOKEN`
- "Base URL must use HTTPS protocol": the base URL has to start with `https://`

## Authentication Errors
- Verify that your API token is correct and not expired
- Check that the API token has appropriate permissions

## Connection Issues
- Verify the base URL is correct
- Check network connectivity to the Outline server
- Verify that the Outline server is operational

## Invalid Input
- Remove special characters from search queries
- Keep `limit` between 1 and 100

Contact your Outline administrator if issues persist after trying these solutions.
"""


def _outline_info(config: OutlineConfig) -> str:
    lines = [
        "# Outline Configuration Information",
        "",
        f"Base URL: {redact_url(config.base_url) or 'Not configured'}",
        f"API Token Configured: {'Yes' if config.api_token else 'No'}",
        "",
        "## Environment Setup",
        "The Outline API requires proper configuration to function correctly:",
        "1. `OUTLINE_BASE_URL` environment variable should point to your Outline instance (https)",
        "2. `OUTLINE_API_TOKEN` environment variable must contain a valid API token",
    ]
    return "\n".join(lines) + "\n"


RESOURCES: Dict[str, Dict[str, Any]] = {
    "outline://api-endpoints": {
        "name": "api_endpoints",
        "description": "Information about available Outline API endpoints",
        "render": lambda config: API_ENDPOINTS_TEXT,
    },
    "outline://usage": {
        "name": "usage_instructions",
        "description": "Instructions for using Outline tools",
        "render": lambda config: USAGE_TEXT,
    },
    "outline://info": {
        "name": "outline_info",
        "description": "Information about the configured Outline instance",
        "render": _outline_info,
    },
    "outline://troubleshooting": {
        "name": "troubleshooting_guide",
        "description": "Troubleshooting guide for common Outline API issues",
        "render": lambda config: TROUBLESHOOTING_TEXT,
    },
}


def list_resources() -> List[Dict[str, Any]]:
    return [
        {"uri": uri, "name": entry["name"], "description": entry["description"], "mimeType": MARKDOWN}
        for uri, entry in RESOURCES.items()
    ]


def read_resource(uri: str, config: OutlineConfig) -> Dict[str, Any]:
    entry = RESOURCES.get(uri)
    if entry is None:
        raise ValueError(f"Resource not found: {uri}")
    render: Callable[[OutlineConfig], str] = entry["render"]
    return {"contents": [{"uri": uri, "mimeType": MARKDOWN, "text": render(config)}]}
