"""
Notion database reader with cursor pagination.

Wraps ``notion_client.AsyncClient`` for the two read operations the fetcher
needs: exhaustive database queries and schema retrieval.
"""

import logging
from typing import Any, Optional

from notion_client import AsyncClient

from utils.config import settings

logger = logging.getLogger(__name__)


class NotionReader:
    """Read-only Notion client with lazy connection and full pagination."""

    def __init__(
        self,
        auth: Optional[str] = None,
        page_size: Optional[int] = None,
        client: Optional[Any] = None,
    ) -> None:
        """Initialize Notion reader.

        Args:
            auth: Integration token, defaults to settings.NOTION_API_KEY
            page_size: Records per page, defaults to settings.PAGE_SIZE
            client: Pre-built client exposing ``databases.query`` and
                ``databases.retrieve`` coroutines
        """
        self.auth = auth if auth is not None else settings.NOTION_API_KEY
        self.page_size = page_size or settings.PAGE_SIZE
        self.client = client
        self._owns_client = client is None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        if self.client is None:
            self.client = AsyncClient(
                auth=self.auth,
                timeout_ms=settings.NOTION_TIMEOUT_MS,
            )
            self._owns_client = True

    async def query_all(
        self,
        database_id: Optional[str],
        filter: Optional[dict[str, Any]] = None,
        sorts: Optional[list[dict[str, Any]]] = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch every page of a database query.

        Pages are requested sequentially, each one with the cursor returned by
        the previous response, until the API reports ``has_more`` false.

        Args:
            database_id: Database to query; None or empty returns []
            filter: Notion filter object
            sorts: Notion sort specification

        Returns:
            All matching pages in API order
        """
        if not database_id:
            return []

        if self.client is None:
            await self.connect()

        results: list[dict[str, Any]] = []
        cursor: Optional[str] = None
        page_count = 0

        while True:
            params: dict[str, Any] = {
                "database_id": database_id,
                "page_size": self.page_size,
            }
            if filter is not None:
                params["filter"] = filter
            if sorts is not None:
                params["sorts"] = sorts
            if cursor is not None:
                params["start_cursor"] = cursor

            response = await self.client.databases.query(**params)
            results.extend(response["results"])
            page_count += 1

            cursor = response.get("next_cursor") if response.get("has_more") else None
            if not cursor:
                break

        logger.debug(
            "Database query complete",
            extra={"database_id": database_id, "pages": page_count, "records": len(results)},
        )
        return results

    async def retrieve_schema(self, database_id: str) -> dict[str, Any]:
        """Retrieve the property schema of a database.

        Args:
            database_id: Database to describe

        Returns:
            Mapping of property name to property definition
        """
        if self.client is None:
            await self.connect()

        database = await self.client.databases.retrieve(database_id=database_id)
        return database.get("properties") or {}

    async def close(self) -> None:
        """Close the HTTP client if this reader created it."""
        if self.client is not None and self._owns_client:
            await self.client.aclose()
        self.client = None
