from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from starlette.datastructures import State

from .. import __version__
from ..mcp.prompts import list_prompts, render_prompt
from ..mcp.resources import list_resources, read_resource
from ..mcp.tool_registry import get_all_tools, normalize_arguments
from ..utils.errors import is_error_message, jsonrpc_error

# Logger für MCP Routes
mcp_logger = logging.getLogger("outline.mcp.routes")

router = APIRouter()

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "outline-mcp-server"

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


# ============================================================================
# Standard MCP Protocol Methods
# ============================================================================

async def handle_initialize(params: Dict[str, Any], state: State) -> Dict[str, Any]:
    """
    MCP initialize method - returns server info and capabilities.
    Stateless: no session is created.
    """
    client_info = params.get("clientInfo") or {}
    client_name = client_info.get("name", "unknown")
    client_version = client_info.get("version", "0.0.0")
    mcp_logger.info(f"MCP_INITIALIZE | Client: {client_name} v{client_version}")

    return {
        "protocolVersion": PROTOCOL_VERSION,
        "serverInfo": {
            "name": SERVER_NAME,
            "version": __version__,
        },
        "capabilities": {
            "tools": {"listChanged": False},
            "prompts": {"listChanged": False},
            "resources": {"listChanged": False},
        },
    }


async def handle_ping(params: Dict[str, Any], state: State) -> Dict[str, Any]:
    return {}


async def handle_tools_list(params: Dict[str, Any], state: State) -> Dict[str, Any]:
    return {"tools": get_all_tools()}


async def handle_tools_call(params: Dict[str, Any], state: State) -> Dict[str, Any]:
    """MCP tools/call method - executes a tool.

    Tool failures (bad config, bad input, upstream down) are tool results
    with ``isError`` set, not JSON-RPC errors.
    """
    tool_name = params.get("name")
    if not tool_name:
        raise ValueError("'name' parameter is required for tools/call")

    handler = state.tool_handlers.get(tool_name)
    if handler is None:
        raise ValueError(f"Unknown tool: {tool_name}")

    arguments = params.get("arguments") or {}
    if not isinstance(arguments, dict):
        raise ValueError("'arguments' must be an object")

    mcp_logger.info(f"MCP_TOOL_CALL | Tool: {tool_name}")
    text = await handler(normalize_arguments(arguments))
    return {
        "content": [{"type": "text", "text": text}],
        "isError": is_error_message(text),
    }


async def handle_prompts_list(params: Dict[str, Any], state: State) -> Dict[str, Any]:
    return {"prompts": list_prompts()}


async def handle_prompts_get(params: Dict[str, Any], state: State) -> Dict[str, Any]:
    name = params.get("name")
    if not name:
        raise ValueError("'name' parameter is required for prompts/get")
    return render_prompt(name, params.get("arguments") or {})


async def handle_resources_list(params: Dict[str, Any], state: State) -> Dict[str, Any]:
    return {"resources": list_resources()}


async def handle_resources_read(params: Dict[str, Any], state: State) -> Dict[str, Any]:
    uri = params.get("uri")
    if not uri:
        raise ValueError("'uri' parameter is required")
    return read_resource(uri, state.outline_service.config)


Handler = Callable[[Dict[str, Any], State], Awaitable[Dict[str, Any]]]
MCP_HANDLERS: Dict[str, Handler] = {
    "initialize": handle_initialize,
    "ping": handle_ping,
    "tools/list": handle_tools_list,
    "tools/call": handle_tools_call,
    "prompts/list": handle_prompts_list,
    "prompts/get": handle_prompts_get,
    "resources/list": handle_resources_list,
    "resources/read": handle_resources_read,
}


# ============================================================================
# HTTP Endpoints
# ============================================================================

@router.get("/mcp/status", tags=["MCP"], summary="Health check for MCP subsystem")
async def mcp_status(request: Request) -> Dict[str, Any]:
    return {
        "status": "ok",
        "server": SERVER_NAME,
        "version": __version__,
        "protocolVersion": PROTOCOL_VERSION,
        "methods": sorted(MCP_HANDLERS),
        "tools": sorted(request.app.state.tool_handlers),
    }


@router.post("/mcp", tags=["MCP"], summary="MCP JSON-RPC endpoint")
async def mcp_endpoint(request: Request):
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(content=jsonrpc_error(PARSE_ERROR, "Parse error"), status_code=400)

    if not isinstance(body, dict):
        return JSONResponse(
            content=jsonrpc_error(INVALID_REQUEST, "Invalid Request", data="request must be a JSON object"),
            status_code=400,
        )

    req_id = body.get("id")
    is_notification = "id" not in body
    method = body.get("method")
    params = body.get("params") or {}

    if body.get("jsonrpc") != "2.0":
        return JSONResponse(
            content=jsonrpc_error(INVALID_REQUEST, "Invalid Request", req_id, data="jsonrpc field must be '2.0'"),
            status_code=400,
        )
    if not method or not isinstance(method, str):
        return JSONResponse(
            content=jsonrpc_error(INVALID_REQUEST, "Invalid Request", req_id, data="method field is required"),
            status_code=400,
        )
    if not isinstance(params, dict):
        return JSONResponse(
            content=jsonrpc_error(INVALID_PARAMS, "Invalid params", req_id, data="params must be an object"),
            status_code=400,
        )

    # Client acknowledgements (notifications/initialized, notifications/cancelled, ...)
    if method.startswith("notifications/"):
        mcp_logger.debug(f"MCP_NOTIFICATION | {method}")
        return Response(status_code=202)

    handler = MCP_HANDLERS.get(method)
    if handler is None:
        return JSONResponse(
            content=jsonrpc_error(METHOD_NOT_FOUND, "Method not found", req_id, data=f"Method '{method}' not supported"),
            status_code=404,
        )

    mcp_logger.info(f"MCP_METHOD | Method: {method}")
    try:
        result = await handler(params, request.app.state)
    except ValueError as exc:
        return JSONResponse(
            content=jsonrpc_error(INVALID_PARAMS, "Invalid params", req_id, data=str(exc)),
            status_code=400,
        )
    except Exception as exc:
        mcp_logger.error(f"MCP_ERROR | Method: {method} | {type(exc).__name__}")
        return JSONResponse(
            content=jsonrpc_error(INTERNAL_ERROR, "Internal error", req_id),
            status_code=500,
        )

    if is_notification:
        return Response(status_code=202)
    return JSONResponse(content={"jsonrpc": "2.0", "result": result, "id": req_id})
