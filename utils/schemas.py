"""
Pydantic Schemas - Output Document Models

Defines the stable shapes written to the dashboard data file. Field names are
snake_case in Python and camelCase on disk (serialise with ``by_alias=True``).

Usage:
    from utils.schemas import JournalFeed

    feed = JournalFeed(entries=entries, last_updated=utc_now_iso())
    feed.model_dump(by_alias=True)
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_today() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


class FeedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_output(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class FeedError(FeedModel):
    """Replaces a feed's summary when its fetch failed."""

    error: str


class HabitsToday(FeedModel):
    """Today's habit page exists: checkbox name -> checked."""

    today: dict[str, bool]
    page_id: str = Field(..., alias="pageId")
    last_updated: str = Field(..., alias="lastUpdated")


class HabitsPending(FeedModel):
    """No page for today yet; habit names come from the database schema."""

    today: None = None
    habit_names: list[str] = Field(default_factory=list, alias="habitNames")
    last_updated: str = Field(..., alias="lastUpdated")


class JournalEntry(FeedModel):
    id: str
    date: Optional[Any] = None
    title: Any = "Untitled"
    mood: Any = "✨"
    tags: Any = Field(default_factory=list)
    url: Optional[str] = None


class JournalFeed(FeedModel):
    entries: list[JournalEntry]
    last_updated: str = Field(..., alias="lastUpdated")


class SkincareProduct(FeedModel):
    id: str
    name: Any = "Unknown"
    brand: Any = ""
    category: Any = ""
    tags: Any = Field(default_factory=list)
    stock_level: Optional[Any] = Field(default=None, alias="stockLevel")
    notes: Any = ""
    url: Optional[str] = None


class SkincareFeed(FeedModel):
    products: list[SkincareProduct]
    last_updated: str = Field(..., alias="lastUpdated")


class TreatmentSession(FeedModel):
    id: str
    name: Any = "Session"
    date: Optional[Any] = None
    duration: Any = ""
    notes: Any = ""
    type: Any = ""
    url: Optional[str] = None


class TreatmentsFeed(FeedModel):
    treatments: list[TreatmentSession]
    last_updated: str = Field(..., alias="lastUpdated")


class SyncDocument(BaseModel):
    """The complete data file; feeds are already-serialised dicts."""

    synced_at: str = Field(..., alias="syncedAt")
    habits: dict[str, Any]
    journal: dict[str, Any]
    skincare: dict[str, Any]
    treatments: dict[str, Any]

    model_config = ConfigDict(populate_by_name=True)

    def to_output(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
