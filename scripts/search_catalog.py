#!/usr/bin/env python3
"""
Script to check the catalog and try search queries without Telegram.

Usage:
    python scripts/search_catalog.py "mtg biology"
    python scripts/search_catalog.py "hc verma" --catalog data/material.json
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import settings
from src.core.catalog import CatalogError, EmptyQuery, load_catalog, rank
from src.core.catalog.links import delivery_link


def main(query: str, catalog_path: str | None = None) -> None:
    path = Path(catalog_path) if catalog_path else settings.catalog_path

    try:
        catalog = load_catalog(path)
    except CatalogError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"Catalog: {path} ({sum(len(c.items) for c in catalog)} items)")
    print("-" * 50)

    try:
        results = rank(query, catalog)
    except EmptyQuery:
        print("❌ Query is empty")
        sys.exit(1)

    if not results:
        print(f'No materials found for "{query}"')
        return

    for i, result in enumerate(results, 1):
        print(f"{i:>2}. [{result.rank:>3}%] {result.item.label} ({result.category_title})")
        print(f"      {delivery_link(result.item.key)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Search the study materials catalog")
    parser.add_argument("query", help="Search query")
    parser.add_argument("--catalog", "-c", help="Path to catalog JSON", default=None)

    args = parser.parse_args()
    main(args.query, args.catalog)
