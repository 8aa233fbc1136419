"""
Keyword-overlap matcher for catalog search.
"""

from typing import Iterable

from src.core.catalog.models import CatalogCategory, SearchResult


class EmptyQuery(ValueError):
    """Query has no words after trimming."""


def _words(text: str) -> set[str]:
    return set(text.lower().split())


def rank(query: str, catalog: Iterable[CatalogCategory]) -> list[SearchResult]:
    """
    Score every catalog item against the query.

    rank = round(100 * matched query words / query words), where an item's
    words come from "{category title} {item label}". Items with rank 0 are
    dropped. Results are sorted by rank, highest first; ties keep catalog
    order.

    Raises:
        EmptyQuery: If the query is empty or whitespace only
    """
    query_words = _words(query)
    if not query_words:
        raise EmptyQuery("Search query is empty")

    results = []
    for category in catalog:
        for item in category.items:
            item_words = _words(f"{category.title} {item.label}")
            matched = len(query_words & item_words)
            score = round(100 * matched / len(query_words))
            if score > 0:
                results.append(
                    SearchResult(item=item, category_title=category.title, rank=score)
                )

    # sorted() is stable, so equal ranks stay in catalog order
    return sorted(results, key=lambda r: r.rank, reverse=True)
