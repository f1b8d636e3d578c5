"""Test helpers for transport mocking and request inspection."""

import asyncio
import json
from typing import Any, Dict, List

from outline_mcp.utils.http_client import TransportResponse
from outline_mcp.utils.request_builder import RequestDescriptor


def sent_descriptor(mock_http_client) -> RequestDescriptor:
    """The RequestDescriptor handed to the transport by the last call."""
    args, kwargs = mock_http_client.send.call_args
    return args[0] if args else kwargs["descriptor"]


def sent_body(mock_http_client) -> Dict[str, Any]:
    return json.loads(sent_descriptor(mock_http_client).body)


class RecordingTransport:
    """Transport double that yields to the event loop before answering.

    Lets concurrent operations interleave so tests can check that every
    request keeps its own headers.
    """

    def __init__(self, status_code: int = 200, text: str = "{}"):
        self.status_code = status_code
        self.text = text
        self.sent: List[RequestDescriptor] = []

    async def send(self, descriptor: RequestDescriptor) -> TransportResponse:
        await asyncio.sleep(0)  # Yield control to event loop
        self.sent.append(descriptor)
        return TransportResponse(status_code=self.status_code, text=self.text)
