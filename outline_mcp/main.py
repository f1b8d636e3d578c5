from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .mcp.tool_registry import build_tool_handlers
from .routes.health import router as health_router
from .routes.mcp import router as mcp_router
from .services.outline import OutlineService
from .utils.central_logging import setup_central_logging
from .utils.config_guard import validate_configuration
from .utils.http_client import HttpClient, build_http_client
from .utils.logging_middleware import LoggingMiddleware
from .utils.security_headers import SecurityHeadersMiddleware

logger = logging.getLogger("outline.main")


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[HttpClient] = None,
) -> FastAPI:
    """Build the MCP server application.

    ``settings`` and ``http_client`` default to the process settings and a
    pooled transport. The Outline configuration is frozen here and handed to
    the service; nothing reads the environment after this point.
    """
    settings = settings or get_settings()
    owns_client = http_client is None
    client = http_client or build_http_client(settings.request_timeout)

    config = settings.outline_config()
    service = OutlineService(config=config, client=client)

    problem = validate_configuration(config)
    if problem is not None:
        # Not fatal: every tool call reports it to the caller
        logger.warning(f"Outline configuration incomplete: {problem.message}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Outline MCP server ready ({len(app.state.tool_handlers)} tools)")
        yield
        if owns_client:
            await client.close()

    app = FastAPI(
        title="Outline MCP Server",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.outline_service = service
    app.state.tool_handlers = build_tool_handlers(service)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error("Request validation error on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global Unhandled Exception on {request.url.path}: {type(exc).__name__}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal Server Error",
                "error": {
                    "code": "internal_error",
                    "message": "An unexpected error occurred."
                }
            }
        )

    app.add_middleware(SecurityHeadersMiddleware, enabled=settings.security_headers_enabled)
    app.add_middleware(LoggingMiddleware)

    app.include_router(health_router)
    app.include_router(mcp_router)

    return app


def run() -> None:
    """Console entry point: serve the MCP endpoint with uvicorn."""
    import uvicorn

    settings = get_settings()
    setup_central_logging(settings.log_level, settings.log_file)
    logger.info(f"Starting Outline MCP server on http://{settings.mcp_host}:{settings.mcp_port}/mcp")
    uvicorn.run(
        "outline_mcp.main:create_app",
        factory=True,
        host=settings.mcp_host,
        port=settings.mcp_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
