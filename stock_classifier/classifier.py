"""
ABC value classification and stock health evaluation.

Two classification methods are offered:

- `classify` tests each item's own share of the total inventory value
  against the A/B cut-offs (>= 80% is A, >= 20% is B, the rest C). This is
  the behaviour the inventory screens have always shown and is kept as the
  default so existing reports do not change.
- `classify_cumulative` is the textbook Pareto split: items are ranked by
  value and classified by the running cumulative share.

Both are pure: every call rebuilds its output from the input batch.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from . import settings
from .schemas import AbcClass, ClassifiedItem, InventoryItem, StockStatus

logger = logging.getLogger(__name__)

# Derived fields are recomputed, never carried over from a previous run.
_BASE_FIELDS = set(InventoryItem.model_fields)


def _ingest(items: Iterable[Any]) -> list[InventoryItem]:
    if items is None or isinstance(items, (str, bytes, Mapping)):
        raise TypeError(
            f"items must be a sequence of inventory records, got {type(items).__name__}"
        )
    try:
        records = list(items)
    except TypeError as e:
        raise TypeError(
            f"items must be a sequence of inventory records, got {type(items).__name__}"
        ) from e

    return [
        record if isinstance(record, InventoryItem) else InventoryItem.model_validate(record)
        for record in records
    ]


def item_value(item: InventoryItem) -> float:
    """Stock on hand valued at unit cost."""
    return item.current_stock * item.unit_cost


def abc_class_for(percentage: float) -> AbcClass:
    """Classifies a single item's share of the total value."""
    if percentage >= settings.ABC_A_THRESHOLD:
        return AbcClass.A
    if percentage >= settings.ABC_B_THRESHOLD:
        return AbcClass.B
    return AbcClass.C


def stock_status_for(item: InventoryItem) -> StockStatus:
    """
    Critical when stock is at or below safety stock, Low when at or below the
    reorder point, Good otherwise. A missing threshold never triggers.
    """
    if item.safety_stock is not None and item.current_stock <= item.safety_stock:
        return StockStatus.CRITICAL
    if item.reorder_point is not None and item.current_stock <= item.reorder_point:
        return StockStatus.LOW
    return StockStatus.GOOD


def _shares(records: list[InventoryItem]) -> tuple[list[float], list[float]]:
    values = [item_value(item) for item in records]
    total = sum(values)
    if total > 0:
        shares = [value / total * 100 for value in values]
    else:
        shares = [0.0] * len(values)
    return values, shares


def classify(items: Iterable[Any]) -> list[ClassifiedItem]:
    """
    Values every item, classifies it by its own share of the batch value and
    evaluates its stock health.

    Accepts raw records (dicts) or `InventoryItem` models. The result is
    sorted by share, highest first; ties keep their input order.

    Raises:
        TypeError: if `items` is not a sequence of records.
    """
    records = _ingest(items)
    values, shares = _shares(records)

    order = sorted(range(len(records)), key=lambda i: shares[i], reverse=True)

    classified = []
    cumulative = 0.0
    for i in order:
        cumulative += shares[i]
        classified.append(
            ClassifiedItem(
                **records[i].model_dump(include=_BASE_FIELDS),
                current_value=values[i],
                percentage_of_total=shares[i],
                cumulative_percentage=cumulative,
                abc_class=abc_class_for(shares[i]),
                stock_status=stock_status_for(records[i]),
            )
        )

    logger.debug(f"Classified {len(classified)} items by individual value share.")
    return classified


def classify_cumulative(
    items: Iterable[Any],
    a_threshold: float = settings.CUMULATIVE_A_THRESHOLD,
    b_threshold: float = settings.CUMULATIVE_B_THRESHOLD,
) -> list[ClassifiedItem]:
    """
    Pareto ABC classification by cumulative value share.

    Items are ranked by value. An item is A while the running share
    (including itself) stays within `a_threshold`, B while it stays within
    `b_threshold`, and C after that. The top item is always A. When the
    batch has no value at all, every item is C.
    """
    if a_threshold > b_threshold:
        raise ValueError("a_threshold must not exceed b_threshold")

    records = _ingest(items)
    values, shares = _shares(records)
    total = sum(values)

    order = sorted(range(len(records)), key=lambda i: shares[i], reverse=True)

    classified = []
    cumulative = 0.0
    for rank, i in enumerate(order):
        cumulative += shares[i]
        if total <= 0:
            abc_class = AbcClass.C
        elif rank == 0 or cumulative <= a_threshold:
            abc_class = AbcClass.A
        elif cumulative <= b_threshold:
            abc_class = AbcClass.B
        else:
            abc_class = AbcClass.C

        classified.append(
            ClassifiedItem(
                **records[i].model_dump(include=_BASE_FIELDS),
                current_value=values[i],
                percentage_of_total=shares[i],
                cumulative_percentage=cumulative,
                abc_class=abc_class,
                stock_status=stock_status_for(records[i]),
            )
        )

    logger.debug(f"Classified {len(classified)} items by cumulative value share.")
    return classified
