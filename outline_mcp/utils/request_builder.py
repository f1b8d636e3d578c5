from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import httpx

HTTPS_PREFIX = "https://"


class Endpoint(str, Enum):
    DOCUMENTS_SEARCH = "documents.search"
    DOCUMENTS_INFO = "documents.info"
    DOCUMENTS_LIST = "documents.list"
    COLLECTIONS_LIST = "collections.list"


@dataclass(frozen=True)
class RequestDescriptor:
    """Ready-to-send outbound request. Built per call, never reused."""

    method: str
    url: str
    body: str = field(repr=False)
    headers: Dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def has_authorization(self) -> bool:
        return "Authorization" in self.headers


def construct_api_url(base_url: str, endpoint: Endpoint | str) -> str:
    name = endpoint.value if isinstance(endpoint, Endpoint) else endpoint
    base = base_url.strip().rstrip("/")
    # Enforced here as well as in the config guard
    if not base.lower().startswith(HTTPS_PREFIX):
        raise ValueError("Outline API URL must use HTTPS")
    return f"{base}/api/{name}"


def redact_url(url: Optional[str]) -> str:
    """``url`` with any ``user:password@`` part removed, for display and logs."""
    if not url:
        return ""
    try:
        parsed = httpx.URL(url.strip())
    except httpx.InvalidURL:
        return "[invalid URL]"
    if not parsed.userinfo:
        return url
    return str(parsed.copy_with(username=None, password=None))


def serialize_body(body: Mapping[str, Any]) -> str:
    """Compact JSON with unset (None) fields left out."""
    return json.dumps({k: v for k, v in body.items() if v is not None}, separators=(",", ":"))


def build_request(
    method: str,
    url: str,
    body: Mapping[str, Any],
    credential: Optional[str],
) -> RequestDescriptor:
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if credential:
        headers["Authorization"] = f"Bearer {credential}"
    return RequestDescriptor(
        method=method.upper(),
        url=url,
        body=serialize_body(body),
        headers=headers,
    )


__all__ = [
    "Endpoint",
    "RequestDescriptor",
    "build_request",
    "construct_api_url",
    "redact_url",
    "serialize_body",
]
