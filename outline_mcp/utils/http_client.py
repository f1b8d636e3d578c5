from __future__ import annotations
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Dict, Optional

import httpx

from .request_builder import RequestDescriptor, redact_url

logger = logging.getLogger("outline.http")

# One bounded timeout for the whole pool, not per call
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_TIMEOUT = httpx.Timeout(DEFAULT_TIMEOUT_SECONDS, connect=10.0)


class TransportError(Exception):
    """Request never produced an HTTP response (timeout, DNS, TLS, reset)."""


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class HttpClient:
    """
    Outbound transport for Outline API calls.

    Connection pools are shared per timeout so concurrent operations reuse
    sockets. The shared ``httpx.AsyncClient`` never carries credentials;
    every header travels on the request descriptor. No retries.
    """

    _shared_clients: Dict[str, httpx.AsyncClient] = {}
    _lock = Lock()

    def __init__(
        self,
        timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
        follow_redirects: bool = False,
    ) -> None:
        if not isinstance(timeout, httpx.Timeout):
            timeout = httpx.Timeout(timeout)
        self.timeout = timeout
        self.follow_redirects = follow_redirects

        key = f"{timeout.read}:{timeout.connect}:{follow_redirects}"
        with HttpClient._lock:
            shared = HttpClient._shared_clients.get(key)
            if shared is None or shared.is_closed:
                shared = httpx.AsyncClient(
                    timeout=self.timeout,
                    follow_redirects=self.follow_redirects,
                )
                HttpClient._shared_clients[key] = shared
            self._client = shared
        self._key = key

    async def close(self) -> None:
        with HttpClient._lock:
            if HttpClient._shared_clients.get(self._key) is self._client:
                del HttpClient._shared_clients[self._key]
        await self._client.aclose()

    async def send(self, descriptor: RequestDescriptor) -> TransportResponse:
        try:
            resp = await self._client.request(
                descriptor.method,
                descriptor.url,
                content=descriptor.body.encode("utf-8"),
                headers=descriptor.headers,
            )
        except httpx.TransportError as exc:
            # Only the exception type: its text can echo the URL or headers
            logger.warning("Transport failure %s url=%s", type(exc).__name__, redact_url(descriptor.url))
            raise TransportError(type(exc).__name__) from exc

        logger.debug("%s %s -> %s", descriptor.method, redact_url(descriptor.url), resp.status_code)
        return TransportResponse(status_code=resp.status_code, text=resp.text)


def build_http_client(timeout_seconds: Optional[float] = None) -> HttpClient:
    if timeout_seconds is None:
        return HttpClient()
    return HttpClient(timeout=httpx.Timeout(timeout_seconds, connect=min(10.0, timeout_seconds)))


__all__ = [
    "DEFAULT_TIMEOUT",
    "HttpClient",
    "TransportError",
    "TransportResponse",
    "build_http_client",
]
