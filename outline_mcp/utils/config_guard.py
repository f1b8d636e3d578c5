from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from .errors import ToolError, config_error
from .request_builder import redact_url

REQUIRED_SCHEME = "https"


@dataclass(frozen=True)
class OutlineConfig:
    """Base URL and API token of the Outline instance, fixed at startup."""

    base_url: Optional[str] = None
    api_token: Optional[str] = None

    def __repr__(self) -> str:
        token_state = "set" if self.api_token else "unset"
        return f"OutlineConfig(base_url={redact_url(self.base_url)!r}, api_token=<{token_state}>)"


def validate_configuration(config: OutlineConfig) -> Optional[ToolError]:
    """Pre-flight check run before any validation or network work.

    Checks run in order and stop at the first failure:
    base URL present, token present, base URL absolute, scheme is https,
    no user info, query or fragment in the base URL.
    Returns None when the configuration is usable.
    """
    base_url = (config.base_url or "").strip()
    if not base_url:
        return config_error("Base URL is not configured")

    if not (config.api_token or "").strip():
        return config_error("API token is not configured")

    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL:
        return config_error("Base URL format is invalid")
    if not url.is_absolute_url:
        return config_error("Base URL format is invalid")

    if url.scheme != REQUIRED_SCHEME:
        return config_error("Base URL must use HTTPS protocol")

    # /api/<endpoint> is appended to the path; credentials belong in the token
    if url.userinfo or url.query or url.fragment:
        return config_error("Base URL format is invalid")

    return None
