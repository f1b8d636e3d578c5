"""
Input validation for Outline tool arguments.
=============================================

Every value a caller hands to a tool passes through one of these functions
before it is allowed anywhere near an outbound request. The functions are
pure: no I/O, no shared state, same input gives the same result. They never
raise for bad input; they return ``Valid(value)`` or ``Invalid(error)``.

Check order inside each validator is fixed (empty → length → format); each
step assumes the previous one passed.
"""

from __future__ import annotations

import html
import re
from typing import Any, Optional

from .errors import Invalid, Valid, ValidationResult, invalid_input

MAX_QUERY_LENGTH = 1000
MAX_DOCUMENT_ID_LENGTH = 255
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 20

# Anything except shell/markup metacharacters: < > " ' ; & | ` $
SAFE_QUERY_PATTERN = re.compile(r"^[^<>\"';&|`$]+$")
DOCUMENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,255}$")

SORT_FIELDS = ("createdAt", "updatedAt", "title", "index")
_SORT_LOOKUP = {name.lower(): name for name in SORT_FIELDS}


def validate_query(query: Optional[str]) -> ValidationResult[str]:
    """Validate search text and return it trimmed and HTML-escaped."""
    if query is None or not isinstance(query, str) or not query.strip():
        return invalid_input("Query cannot be null or empty")

    trimmed = query.strip()
    if len(trimmed) > MAX_QUERY_LENGTH:
        return invalid_input(f"Query length cannot exceed {MAX_QUERY_LENGTH} characters")

    if not SAFE_QUERY_PATTERN.fullmatch(trimmed):
        return invalid_input("Query contains potentially unsafe characters")

    return Valid(html.escape(trimmed, quote=True))


def validate_document_id(document_id: Optional[str]) -> ValidationResult[str]:
    # Surrounding whitespace is not stripped: it fails the format check.
    if document_id is None or not isinstance(document_id, str) or not document_id.strip():
        return invalid_input("Document ID cannot be null or empty")

    if len(document_id) > MAX_DOCUMENT_ID_LENGTH:
        return invalid_input(
            f"Document ID length cannot exceed {MAX_DOCUMENT_ID_LENGTH} characters"
        )

    if not DOCUMENT_ID_PATTERN.fullmatch(document_id):
        return invalid_input("Document ID contains invalid characters")

    return Valid(document_id)


def validate_limit(limit: Any) -> ValidationResult[int]:
    # bool is a subclass of int; True must not pass as a limit of 1
    if isinstance(limit, bool) or not isinstance(limit, int):
        return invalid_input("Limit must be an integer")

    if limit < MIN_LIMIT:
        return invalid_input("Limit must be greater than 0")

    if limit > MAX_LIMIT:
        return invalid_input(f"Limit cannot exceed {MAX_LIMIT}")

    return Valid(limit)


def validate_sort(sort: Optional[str]) -> ValidationResult[Optional[str]]:
    """Match ``sort`` case-insensitively and return the canonical field name.

    Absent or blank values are accepted as ``None`` so the field is left out
    of the request body.
    """
    if sort is None:
        return Valid(None)
    if not isinstance(sort, str):
        return _invalid_sort()

    key = sort.strip()
    if not key:
        return Valid(None)

    canonical = _SORT_LOOKUP.get(key.lower())
    if canonical is None:
        return _invalid_sort()
    return Valid(canonical)


def validate_starred(starred: Any) -> ValidationResult[Optional[bool]]:
    if starred is None or isinstance(starred, bool):
        return Valid(starred)
    return invalid_input("Starred must be a boolean")


def _invalid_sort() -> Invalid:
    return invalid_input(f"Sort parameter must be one of: {', '.join(SORT_FIELDS)}")


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_DOCUMENT_ID_LENGTH",
    "MAX_LIMIT",
    "MAX_QUERY_LENGTH",
    "SORT_FIELDS",
    "validate_document_id",
    "validate_limit",
    "validate_query",
    "validate_sort",
    "validate_starred",
]
