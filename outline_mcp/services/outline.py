from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..utils.config_guard import OutlineConfig, validate_configuration
from ..utils.errors import (
    Invalid,
    _sanitize_error_message,
    connection_error,
    internal_error,
)
from ..utils.http_client import HttpClient, TransportError
from ..utils.request_builder import Endpoint, build_request, construct_api_url
from ..utils.validation import (
    DEFAULT_LIMIT,
    validate_document_id,
    validate_limit,
    validate_query,
    validate_sort,
    validate_starred,
)

logger = logging.getLogger("outline.service")

SEARCH_LABEL = "Search results for query"
WIKI_SEARCH_LABEL = "Wiki search results for query"


class OutlineService:
    """Tool operations against one Outline instance.

    Every public method returns a displayable string, success or failure.
    Nothing raises past this class.
    """

    def __init__(self, config: OutlineConfig, client: HttpClient) -> None:
        self._config = config
        self._client = client

    @property
    def config(self) -> OutlineConfig:
        return self._config

    async def search_documents(self, query: Optional[str], limit: Any = DEFAULT_LIMIT) -> str:
        return await self._search(query, limit, label=SEARCH_LABEL)

    async def search_wiki(self, query: Optional[str], limit: Any = DEFAULT_LIMIT) -> str:
        # Same backend call as search_documents; Outline has no wiki-specific search endpoint yet.
        return await self._search(query, limit, label=WIKI_SEARCH_LABEL)

    async def get_document(self, document_id: Optional[str]) -> str:
        guard = validate_configuration(self._config)
        if guard is not None:
            return guard.render()

        doc_id = validate_document_id(document_id)
        if isinstance(doc_id, Invalid):
            return doc_id.error.render()

        return await self._execute(
            Endpoint.DOCUMENTS_INFO,
            {"id": doc_id.value},
            label=f"Document {doc_id.value}:",
        )

    async def list_documents(
        self,
        limit: Any = DEFAULT_LIMIT,
        sort: Optional[str] = None,
        starred: Optional[bool] = None,
    ) -> str:
        guard = validate_configuration(self._config)
        if guard is not None:
            return guard.render()

        checked_limit = validate_limit(limit)
        if isinstance(checked_limit, Invalid):
            return checked_limit.error.render()
        checked_sort = validate_sort(sort)
        if isinstance(checked_sort, Invalid):
            return checked_sort.error.render()
        checked_starred = validate_starred(starred)
        if isinstance(checked_starred, Invalid):
            return checked_starred.error.render()

        return await self._execute(
            Endpoint.DOCUMENTS_LIST,
            {
                "limit": checked_limit.value,
                "sort": checked_sort.value,
                "starred": checked_starred.value,
            },
            label="Documents list:",
        )

    async def list_collections(self, limit: Any = DEFAULT_LIMIT) -> str:
        guard = validate_configuration(self._config)
        if guard is not None:
            return guard.render()

        checked_limit = validate_limit(limit)
        if isinstance(checked_limit, Invalid):
            return checked_limit.error.render()

        return await self._execute(
            Endpoint.COLLECTIONS_LIST,
            {"limit": checked_limit.value},
            label="Collections list:",
        )

    async def _search(self, query: Optional[str], limit: Any, *, label: str) -> str:
        guard = validate_configuration(self._config)
        if guard is not None:
            return guard.render()

        checked_query = validate_query(query)
        if isinstance(checked_query, Invalid):
            return checked_query.error.render()
        checked_limit = validate_limit(limit)
        if isinstance(checked_limit, Invalid):
            return checked_limit.error.render()

        return await self._execute(
            Endpoint.DOCUMENTS_SEARCH,
            {"query": checked_query.value, "limit": checked_limit.value},
            label=f"{label}: {checked_query.value}",
        )

    async def _execute(self, endpoint: Endpoint, body: Dict[str, Any], *, label: str) -> str:
        try:
            url = construct_api_url(self._config.base_url or "", endpoint)
            descriptor = build_request("POST", url, body, self._config.api_token)
            response = await self._client.send(descriptor)
        except TransportError as exc:
            logger.warning(f"Outline {endpoint.value} transport failure: {exc}")
            return connection_error().render()
        except Exception as exc:
            logger.error(
                f"Outline {endpoint.value} failed unexpectedly: "
                f"{type(exc).__name__}: {_sanitize_error_message(str(exc))}"
            )
            return internal_error().render()

        if not response.is_success:
            logger.warning(f"Outline {endpoint.value} returned HTTP {response.status_code}")
            return connection_error().render()

        logger.info(f"Outline {endpoint.value} ok ({len(response.text)} bytes)")
        return f"{label}\n{response.text}"

