# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Provides a fake Notion client and page builders shared by all tests.
# The fake serves canned pages per database id with real cursor semantics,
# records every call and can be told to fail for a given database.
# =============================================================================

import os

# Set up test environment BEFORE importing utils.config, which loads
# settings at import time.
os.environ.setdefault("NOTION_API_KEY", "secret_test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from typing import Any, Optional

import pytest

from utils.config import Settings
from utils.notion import NotionReader


# -----------------------------------------------------------------------------
# Property builders
# -----------------------------------------------------------------------------

def title(text: str) -> dict:
    return {"type": "title", "title": [{"plain_text": text}]}


def rich_text(*runs: str) -> dict:
    return {"type": "rich_text", "rich_text": [{"plain_text": run} for run in runs]}


def checkbox(value: bool) -> dict:
    return {"type": "checkbox", "checkbox": value}


def number(value: Optional[float]) -> dict:
    return {"type": "number", "number": value}


def select(name: Optional[str]) -> dict:
    return {"type": "select", "select": {"name": name} if name is not None else None}


def multi_select(*names: str) -> dict:
    return {"type": "multi_select", "multi_select": [{"name": name} for name in names]}


def date(start: Optional[str]) -> dict:
    return {"type": "date", "date": {"start": start, "end": None} if start else None}


def created_time(ts: str) -> dict:
    return {"type": "created_time", "created_time": ts}


def page(page_id: str, created: str = "2024-01-01T00:00:00.000Z", **properties: dict) -> dict:
    """Build a Notion page; property names with spaces go through `props`."""
    props = properties.pop("props", {})
    props.update(properties)
    return {
        "object": "page",
        "id": page_id,
        "url": f"https://www.notion.so/{page_id}",
        "created_time": created,
        "properties": props,
    }


# -----------------------------------------------------------------------------
# Fake client
# -----------------------------------------------------------------------------

class FakeDatabases:
    def __init__(self) -> None:
        self.pages: dict[str, list[dict]] = {}
        self.schemas: dict[str, dict] = {}
        self.errors: dict[str, Exception] = {}
        self.queries: list[dict[str, Any]] = []
        self.retrieves: list[str] = []

    async def query(self, **params: Any) -> dict:
        self.queries.append(params)
        database_id = params["database_id"]
        if database_id in self.errors:
            raise self.errors[database_id]

        rows = self.pages.get(database_id, [])
        start = int(params.get("start_cursor") or 0)
        end = start + params.get("page_size", 100)
        has_more = end < len(rows)
        return {
            "object": "list",
            "results": rows[start:end],
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }

    async def retrieve(self, database_id: str) -> dict:
        self.retrieves.append(database_id)
        if database_id in self.errors:
            raise self.errors[database_id]
        return {"object": "database", "id": database_id, "properties": self.schemas.get(database_id, {})}


class FakeNotionClient:
    def __init__(self) -> None:
        self.databases = FakeDatabases()
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def fake_client() -> FakeNotionClient:
    return FakeNotionClient()


@pytest.fixture
def reader(fake_client: FakeNotionClient) -> NotionReader:
    return NotionReader(auth="secret_test", page_size=100, client=fake_client)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        NOTION_API_KEY="secret_test",
        DB_HABITS="db-habits",
        DB_JOURNAL="db-journal",
        DB_SKINCARE="db-skincare",
        DB_TREATMENTS="db-treatments",
        OUTPUT_PATH=str(tmp_path / "data" / "notion-data.json"),
    )
