"""
Feed Normalizers

One coroutine per dashboard feed. Each reads its Notion database through a
NotionReader, flattens the pages into the feed's output shape and returns it
as a plain dict. A failing feed never raises: it logs the error and returns
``{"error": message}`` so sibling feeds still complete.

Field fallbacks are declared as data in the ``*_FIELDS`` mappings below.
"""

import logging
from typing import Any, Optional

from utils.notion import NotionReader
from utils.properties import FallbackChain, properties_of_type, resolve_fields
from utils.schemas import (
    FeedError,
    HabitsPending,
    HabitsToday,
    JournalEntry,
    JournalFeed,
    SkincareFeed,
    SkincareProduct,
    TreatmentSession,
    TreatmentsFeed,
    utc_now_iso,
    utc_today,
)

logger = logging.getLogger(__name__)

DEFAULT_MOOD = "✨"

JOURNAL_FIELDS = {
    "date": FallbackChain(("Date", "Created"), page_attribute="created_time"),
    "title": FallbackChain(("Name", "Title"), default="Untitled"),
    "mood": FallbackChain(("Mood", "Emoji"), default=DEFAULT_MOOD),
    "tags": FallbackChain(("Tags",), default=[]),
}

SKINCARE_FIELDS = {
    "name": FallbackChain(("Name", "Product"), default="Unknown"),
    "brand": FallbackChain(("Brand",), default=""),
    "category": FallbackChain(("Category", "Type"), default=""),
    "tags": FallbackChain(("Tags", "When"), default=[]),
    "stock_level": FallbackChain(("Stock Level", "Stock")),
    "notes": FallbackChain(("Notes",), default=""),
}

TREATMENT_FIELDS = {
    "name": FallbackChain(("Name", "Treatment"), default="Session"),
    "date": FallbackChain(("Date",), page_attribute="created_time"),
    "duration": FallbackChain(("Duration", "Time"), default=""),
    "notes": FallbackChain(("Notes", "Details"), default=""),
    "type": FallbackChain(("Type", "Category"), default=""),
}

JOURNAL_SORTS = [{"property": "Created", "direction": "descending"}]
SKINCARE_SORTS = [{"property": "Name", "direction": "ascending"}]
TREATMENT_SORTS = [{"property": "Date", "direction": "descending"}]


def _feed_error(feed: str, exc: Exception) -> dict[str, Any]:
    logger.error("%s fetch error: %s", feed, exc, extra={"feed": feed.lower()}, exc_info=True)
    return FeedError(error=str(exc)).to_output()


async def fetch_habits(
    reader: NotionReader,
    database_id: Optional[str],
    today: Optional[str] = None,
) -> dict[str, Any]:
    """
    Summarise today's habit checklist.

    Queries the habits database for pages whose Date equals today (UTC). When
    no page exists yet, the checkbox property names from the database schema
    are returned so the dashboard can render empty checkboxes.

    Args:
        reader: Notion reader
        database_id: Habits database; None yields an empty pending summary
        today: Date to match as YYYY-MM-DD, defaults to the current UTC date

    Returns:
        HabitsToday / HabitsPending as a dict, or an error dict
    """
    try:
        if not database_id:
            return HabitsPending(habit_names=[], last_updated=utc_now_iso()).to_output()

        today = today or utc_today()
        pages = await reader.query_all(
            database_id,
            filter={"property": "Date", "date": {"equals": today}},
        )

        if not pages:
            schema = await reader.retrieve_schema(database_id)
            habit_names = list(properties_of_type(schema, "checkbox"))
            return HabitsPending(habit_names=habit_names, last_updated=utc_now_iso()).to_output()

        page = pages[0]
        habits = {
            name: bool(prop.get("checkbox"))
            for name, prop in properties_of_type(page.get("properties"), "checkbox").items()
        }
        return HabitsToday(today=habits, page_id=page["id"], last_updated=utc_now_iso()).to_output()

    except Exception as e:
        return _feed_error("Habits", e)


async def fetch_journal(
    reader: NotionReader,
    database_id: Optional[str],
    limit: int = 20,
) -> dict[str, Any]:
    """Most recent journal entries, newest first."""
    try:
        pages = await reader.query_all(database_id, sorts=JOURNAL_SORTS)
        entries = [
            JournalEntry(id=page["id"], url=page.get("url"), **resolve_fields(page, JOURNAL_FIELDS))
            for page in pages[:limit]
        ]
        return JournalFeed(entries=entries, last_updated=utc_now_iso()).to_output()

    except Exception as e:
        return _feed_error("Journal", e)


async def fetch_skincare(
    reader: NotionReader,
    database_id: Optional[str],
) -> dict[str, Any]:
    """All skincare products, by name ascending."""
    try:
        pages = await reader.query_all(database_id, sorts=SKINCARE_SORTS)
        products = [
            SkincareProduct(id=page["id"], url=page.get("url"), **resolve_fields(page, SKINCARE_FIELDS))
            for page in pages
        ]
        return SkincareFeed(products=products, last_updated=utc_now_iso()).to_output()

    except Exception as e:
        return _feed_error("Skincare", e)


async def fetch_treatments(
    reader: NotionReader,
    database_id: Optional[str],
    limit: int = 50,
) -> dict[str, Any]:
    """Most recent treatment sessions, newest first."""
    try:
        pages = await reader.query_all(database_id, sorts=TREATMENT_SORTS)
        treatments = [
            TreatmentSession(id=page["id"], url=page.get("url"), **resolve_fields(page, TREATMENT_FIELDS))
            for page in pages[:limit]
        ]
        return TreatmentsFeed(treatments=treatments, last_updated=utc_now_iso()).to_output()

    except Exception as e:
        return _feed_error("Treatments", e)
