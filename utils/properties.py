"""
Notion Property Extraction

Flattens the typed property wrappers Notion returns on every page into plain
values, and resolves output fields through ordered fallback chains.

Usage:
    from utils.properties import FallbackChain, get_property

    title = get_property(page, "Name")
    mood = FallbackChain(("Mood", "Emoji"), default="✨").resolve(page)
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field


def _plain_text(runs: Any) -> Optional[str]:
    if not isinstance(runs, list):
        return None
    return "".join(
        run.get("plain_text") or "" for run in runs if isinstance(run, dict)
    )


def _nested(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key)
    return None


def _checkbox(prop: dict) -> Optional[bool]:
    value = prop.get("checkbox")
    return value if isinstance(value, bool) else None


def _multi_select(prop: dict) -> Optional[list[str]]:
    options = prop.get("multi_select")
    if not isinstance(options, list):
        return None
    return [opt["name"] for opt in options if isinstance(opt, dict) and "name" in opt]


def _formula(prop: dict) -> Any:
    formula = prop.get("formula")
    number = _nested(formula, "number")
    if number is not None:
        return number
    return _nested(formula, "string")


# Known property type tags. Anything not listed here (people, files,
# relation, rollup, ...) extracts as None.
EXTRACTORS: dict[str, Callable[[dict], Any]] = {
    "title": lambda prop: _plain_text(prop.get("title")),
    "rich_text": lambda prop: _plain_text(prop.get("rich_text")),
    "checkbox": _checkbox,
    "number": lambda prop: prop.get("number"),
    "select": lambda prop: _nested(prop.get("select"), "name"),
    "multi_select": _multi_select,
    "date": lambda prop: _nested(prop.get("date"), "start"),
    "created_time": lambda prop: prop.get("created_time"),
    "formula": _formula,
    "url": lambda prop: prop.get("url"),
}


def get_property(page: dict, name: str) -> Any:
    """
    Extract a plain value from a page property.

    Args:
        page: Notion page object (as returned by a database query)
        name: Property name

    Returns:
        Plain value for the property type, or None when the property is
        absent, malformed or of an unsupported type
    """
    properties = page.get("properties") if isinstance(page, dict) else None
    if not isinstance(properties, dict):
        return None

    prop = properties.get(name)
    if not isinstance(prop, dict):
        return None

    extractor = EXTRACTORS.get(prop.get("type"))
    if extractor is None:
        return None
    return extractor(prop)


def properties_of_type(properties: Any, type_tag: str) -> dict[str, dict]:
    """Select the property entries of one type, keeping schema order."""
    if not isinstance(properties, dict):
        return {}
    return {
        name: prop
        for name, prop in properties.items()
        if isinstance(prop, dict) and prop.get("type") == type_tag
    }


def is_empty(value: Any) -> bool:
    """None, empty strings and empty lists do not satisfy a fallback."""
    return value is None or value == "" or value == []


class FallbackChain(BaseModel):
    """
    Ordered candidate property names for one output field.

    The first candidate that extracts to a non-empty value wins. When every
    candidate is empty, the page-level attribute (e.g. ``created_time``) is
    tried, then the literal default.
    """

    model_config = ConfigDict(frozen=True)

    candidates: tuple[str, ...] = Field(..., min_length=1, description="Property names, in priority order")
    default: Any = Field(default=None, description="Value when nothing resolves")
    page_attribute: Optional[str] = Field(default=None, description="Page-level key tried after the candidates")

    def __init__(self, candidates: tuple[str, ...], **data: Any) -> None:
        super().__init__(candidates=candidates, **data)

    def resolve(self, page: dict) -> Any:
        for name in self.candidates:
            value = get_property(page, name)
            if not is_empty(value):
                return value

        if self.page_attribute is not None:
            value = page.get(self.page_attribute)
            if not is_empty(value):
                return value

        # List defaults are copied per page
        return list(self.default) if isinstance(self.default, list) else self.default


def resolve_fields(page: dict, chains: dict[str, FallbackChain]) -> dict[str, Any]:
    """Resolve every chain of a field map against one page."""
    return {field: chain.resolve(page) for field, chain in chains.items()}
