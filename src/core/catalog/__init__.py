"""
Catalog module: static study materials and keyword search.
"""

from src.core.catalog.models import CatalogCategory, CatalogItem, SearchResult
from src.core.catalog.loader import CatalogError, get_catalog, load_catalog, parse_catalog
from src.core.catalog.matcher import EmptyQuery, rank

__all__ = [
    # Models
    "CatalogCategory",
    "CatalogItem",
    "SearchResult",
    # Loader
    "CatalogError",
    "get_catalog",
    "load_catalog",
    "parse_catalog",
    # Matcher
    "EmptyQuery",
    "rank",
]
