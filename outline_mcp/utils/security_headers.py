from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

NO_CACHE_PREFIX = "/mcp"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds hardening headers to every response; MCP responses are never cached."""

    def __init__(self, app: ASGIApp, enabled: bool = True):
        super().__init__(app)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if not self.enabled:
            return response

        response.headers.update(SECURITY_HEADERS)
        path = request.url.path
        if path == NO_CACHE_PREFIX or path.startswith(NO_CACHE_PREFIX + "/"):
            response.headers.update(NO_CACHE_HEADERS)
        return response
