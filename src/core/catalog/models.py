"""
Catalog models for the study materials store.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CatalogItem:
    """Single purchasable study material."""
    label: str
    key: str            # Unique within the catalog


@dataclass(frozen=True)
class CatalogCategory:
    """Group of items under one title."""
    title: str
    items: tuple[CatalogItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SearchResult:
    """Catalog item scored against a query."""
    item: CatalogItem
    category_title: str
    rank: int           # 0..100

    def to_dict(self) -> dict:
        """Convert to a dictionary that fits into FSM storage."""
        return {
            "label": self.item.label,
            "key": self.item.key,
            "category_title": self.category_title,
            "rank": self.rank,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SearchResult":
        return cls(
            item=CatalogItem(label=data["label"], key=data["key"]),
            category_title=data.get("category_title", ""),
            rank=int(data.get("rank", 0)),
        )
