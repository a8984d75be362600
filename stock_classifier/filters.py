from collections.abc import Iterable
from typing import Optional, TypeVar
from pydantic import BaseModel, field_validator

from .schemas import AbcClass, ClassifiedItem, InventoryItem, StockStatus
from .utils import clean_text

ALL_CATEGORIES = "all"

ItemT = TypeVar("ItemT", bound=InventoryItem)


class FilterCriteria(BaseModel):
    """
    Search and filter selections for an item listing.
    An empty search and the 'all' category match everything.
    """

    search: str = ""
    category: str = ALL_CATEGORIES
    abc_class: Optional[AbcClass] = None
    stock_status: Optional[StockStatus] = None

    @field_validator("search", mode="before")
    @classmethod
    def _normalize_search(cls, value):
        return clean_text(value).lower()

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value):
        return value or ALL_CATEGORIES


def matches(item: InventoryItem, criteria: FilterCriteria) -> bool:
    if criteria.search:
        haystacks = [item.name, item.sku, item.description or ""]
        if not any(criteria.search in text.lower() for text in haystacks):
            return False

    if criteria.category != ALL_CATEGORIES and item.category != criteria.category:
        return False

    # Class and status only exist once an item has been classified.
    if criteria.abc_class is not None:
        if not isinstance(item, ClassifiedItem) or item.abc_class != criteria.abc_class:
            return False

    if criteria.stock_status is not None:
        if not isinstance(item, ClassifiedItem) or item.stock_status != criteria.stock_status:
            return False

    return True


def filter_items(items: Iterable[ItemT], criteria: FilterCriteria) -> list[ItemT]:
    """Returns the items matching every selection, in their original order."""
    return [item for item in items if matches(item, criteria)]
