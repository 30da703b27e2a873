"""
Sync Orchestrator

Runs the four feed normalizers concurrently, assembles the dashboard data
document and writes it to disk, replacing the previous file.

Usage:
    from apps.fetcher.sync import run_sync

    output_path = await run_sync()
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import orjson

from apps.fetcher.feeds import fetch_habits, fetch_journal, fetch_skincare, fetch_treatments
from utils.config import Settings, settings as default_settings
from utils.notion import NotionReader
from utils.schemas import SyncDocument, utc_now_iso

logger = logging.getLogger(__name__)


async def collect_feeds(reader: NotionReader, settings: Settings) -> dict[str, Any]:
    """
    Fetch all feeds concurrently and build the output document.

    Feed failures are embedded as ``{"error": ...}`` entries; they never
    cancel the other feeds.
    """
    habits, journal, skincare, treatments = await asyncio.gather(
        fetch_habits(reader, settings.database_id("habits")),
        fetch_journal(reader, settings.database_id("journal"), limit=settings.JOURNAL_LIMIT),
        fetch_skincare(reader, settings.database_id("skincare")),
        fetch_treatments(reader, settings.database_id("treatments"), limit=settings.TREATMENTS_LIMIT),
    )

    document = SyncDocument(
        synced_at=utc_now_iso(),
        habits=habits,
        journal=journal,
        skincare=skincare,
        treatments=treatments,
    )
    return document.to_output()


def write_output(document: dict[str, Any], output_path: str) -> Path:
    """
    Serialise the document as 2-space indented UTF-8 JSON, overwriting
    any existing file.

    Raises:
        OSError: If the file can't be written
        TypeError: If the document isn't JSON-serialisable
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(document, option=orjson.OPT_INDENT_2))
    return path


def log_summary(document: dict[str, Any]) -> None:
    """One line per successful feed."""
    habits = document["habits"]
    journal = document["journal"]
    skincare = document["skincare"]
    treatments = document["treatments"]

    if "error" not in habits:
        state = "found" if habits.get("today") is not None else "not yet created"
        logger.info("Habits: today's page %s", state)
    if "error" not in journal:
        logger.info("Journal: %d entries", len(journal.get("entries") or []))
    if "error" not in skincare:
        logger.info("Skincare: %d products", len(skincare.get("products") or []))
    if "error" not in treatments:
        logger.info("Treatments: %d sessions", len(treatments.get("treatments") or []))


async def run_sync(
    settings: Optional[Settings] = None,
    reader: Optional[NotionReader] = None,
) -> Path:
    """
    Execute one complete sync: fetch, normalise, write.

    Args:
        settings: Settings to use, defaults to the environment settings
        reader: Notion reader, defaults to a new reader for settings

    Returns:
        Path of the written data file

    Raises:
        OSError: If the output file can't be written
    """
    settings = settings or default_settings
    reader = reader or NotionReader(auth=settings.NOTION_API_KEY, page_size=settings.PAGE_SIZE)

    logger.info("Fetching Notion data")

    try:
        document = await collect_feeds(reader, settings)
    finally:
        await reader.close()

    path = write_output(document, settings.OUTPUT_PATH)
    logger.info("Saved to %s", path, extra={"output_file": str(path)})

    log_summary(document)
    return path
