"""
Catalog loader - reads the static materials JSON once per process.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from src.config import settings
from src.core.catalog.models import CatalogCategory, CatalogItem

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Catalog file is missing or malformed."""


def parse_catalog(raw: list) -> tuple[CatalogCategory, ...]:
    """
    Build catalog categories from decoded JSON.

    Expected shape: [{"title": str, "items": [{"label": str, "key": str}]}]

    Raises:
        CatalogError: On wrong shape or duplicate item keys
    """
    if not isinstance(raw, list):
        raise CatalogError("Catalog root must be a list of categories")

    categories = []
    seen_keys: set[str] = set()

    for position, entry in enumerate(raw):
        if not isinstance(entry, dict) or "title" not in entry:
            raise CatalogError(f"Category #{position} has no title")

        items = []
        for item_data in entry.get("items", []):
            try:
                item = CatalogItem(label=str(item_data["label"]), key=str(item_data["key"]))
            except (KeyError, TypeError) as e:
                raise CatalogError(
                    f"Bad item in category '{entry['title']}': {item_data!r}"
                ) from e

            if item.key in seen_keys:
                raise CatalogError(f"Duplicate catalog key: {item.key}")
            seen_keys.add(item.key)
            items.append(item)

        categories.append(CatalogCategory(title=str(entry["title"]), items=tuple(items)))

    return tuple(categories)


def load_catalog(path: str | Path) -> tuple[CatalogCategory, ...]:
    """Load catalog from a JSON file."""
    path = Path(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file is not valid JSON: {path}") from e

    catalog = parse_catalog(raw)
    logger.info(
        f"Catalog loaded: {len(catalog)} categories, "
        f"{sum(len(c.items) for c in catalog)} items from {path.name}"
    )
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> tuple[CatalogCategory, ...]:
    """Get the process-wide catalog snapshot."""
    return load_catalog(settings.catalog_path)
