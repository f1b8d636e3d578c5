from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar, Union

logger = logging.getLogger("outline.errors")

T = TypeVar("T")

# Patterns that might leak sensitive information
SENSITIVE_PATTERNS = [
    r"api[_-]?key[=:\s]+\S+",
    r"password[=:\s]+\S+",
    r"token[=:\s]+\S+",
    r"secret[=:\s]+\S+",
    r"bearer\s+\S+",
    r"\b(?:\d{1,3}\.){3}\d{1,3}\b",  # IP addresses
    r"/home/\S+",  # File paths
    r"/var/\S+",
    r"/etc/\S+",
    r"traceback",
    r"stack trace",
]

CONNECTION_ERROR_MESSAGE = (
    "Unable to connect to the Outline API. "
    "Please check your network connection and configuration."
)
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred while processing the request."


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    OPERATIONAL = "operational"


ERROR_PREFIXES: Dict[ErrorKind, str] = {
    ErrorKind.CONFIGURATION: "Configuration error",
    ErrorKind.VALIDATION: "Invalid input",
    ErrorKind.OPERATIONAL: "Error",
}


@dataclass(frozen=True)
class ToolError:
    """A failure classified for display to a tool caller."""

    kind: ErrorKind
    message: str

    def render(self) -> str:
        return f"{ERROR_PREFIXES[self.kind]}: {self.message}"


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    error: ToolError


ValidationResult = Union[Valid[T], Invalid]


def config_error(message: str) -> ToolError:
    return ToolError(ErrorKind.CONFIGURATION, message)


def invalid_input(message: str) -> Invalid:
    return Invalid(ToolError(ErrorKind.VALIDATION, message))


def connection_error() -> ToolError:
    return ToolError(ErrorKind.OPERATIONAL, CONNECTION_ERROR_MESSAGE)


def internal_error() -> ToolError:
    return ToolError(ErrorKind.OPERATIONAL, INTERNAL_ERROR_MESSAGE)


def is_error_message(text: str) -> bool:
    """True when a tool result string carries one of the error prefixes."""
    return any(text.startswith(f"{prefix}: ") for prefix in ERROR_PREFIXES.values())


def _sanitize_error_message(message: str) -> str:
    """Remove potentially sensitive information from error messages.

    This prevents leaking internal details like file paths, IP addresses,
    API tokens, or stack traces into logs and responses.
    """
    sanitized = message

    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, "[REDACTED]", sanitized, flags=re.IGNORECASE)

    # Truncate very long messages that might contain stack traces
    if len(sanitized) > 500:
        sanitized = sanitized[:500] + "... [truncated]"

    return sanitized


def jsonrpc_error(
    code: int,
    message: str,
    req_id: Any = None,
    *,
    data: Optional[str] = None,
    sanitize: bool = True,
) -> Dict[str, Any]:
    """Build a JSON-RPC 2.0 error envelope.

    Args:
        code: JSON-RPC error code (-32700 .. -32600 range for protocol faults)
        message: Short error message
        req_id: Id of the request being answered, None if unknown
        data: Optional detail string, sanitized unless told otherwise
        sanitize: Whether to sanitize ``data`` (default True)

    Returns:
        Response body dict ready for ``JSONResponse``
    """
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = _sanitize_error_message(data) if sanitize else data
    return {"jsonrpc": "2.0", "error": error, "id": req_id}
