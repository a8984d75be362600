from collections.abc import Iterable
from typing import Any
import pandas as pd

from . import settings
from .classifier import item_value
from .schemas import (
    AbcClass,
    AbcExportRow,
    AnalyticsOverview,
    ClassifiedItem,
    InventoryItem,
    StockStatus,
    SupplierMetric,
    TopItemRow,
    ValuationExportRow,
)
from .utils import coerce_number, display_number, format_percentage


def summarize_classes(items: Iterable[ClassifiedItem]) -> dict[str, int]:
    """Counts items per ABC class. Every class is present, even at zero."""
    counts = pd.Series([item.abc_class.value for item in items], dtype="object")
    counts = counts.value_counts().reindex([c.value for c in AbcClass], fill_value=0)
    return {cls: int(n) for cls, n in counts.items()}


def summarize_stock_status(items: Iterable[ClassifiedItem]) -> dict[str, int]:
    """Counts items per stock status. Every status is present, even at zero."""
    counts = pd.Series([item.stock_status.value for item in items], dtype="object")
    counts = counts.value_counts().reindex([s.value for s in StockStatus], fill_value=0)
    return {status: int(n) for status, n in counts.items()}


def valuation_summary(items: Iterable[InventoryItem]) -> dict[str, float | int]:
    values = [item_value(item) for item in items]
    total_value = sum(values)
    total_items = len(values)
    return {
        "total_value": total_value,
        "total_items": total_items,
        "average_value": total_value / total_items if total_items else 0.0,
    }


def top_items_by_value(
    items: Iterable[InventoryItem], limit: int = settings.TOP_ITEMS_LIMIT
) -> list[TopItemRow]:
    """The `limit` most valuable items, highest value first."""
    ranked = sorted(items, key=item_value, reverse=True)[:limit]
    return [
        TopItemRow(
            name=item.name,
            sku=item.sku,
            category=item.category,
            stock=display_number(item.current_stock),
            value=display_number(item_value(item)),
        )
        for item in ranked
    ]


def supplier_metrics(
    suppliers: list[dict[str, Any]],
    orders: list[dict[str, Any]],
    limit: int = settings.TOP_ITEMS_LIMIT,
) -> list[SupplierMetric]:
    """
    Aggregates purchase orders per supplier: order count, total order value
    and average order value. Suppliers without orders are kept with zeros.
    Sorted by total value, highest first.
    """
    if not suppliers:
        return []

    # Ids are joined as strings so int and str ids from different endpoints line up.
    suppliers_df = pd.DataFrame(
        {
            "id": [s.get("id") for s in suppliers],
            "key": [str(s.get("id")) for s in suppliers],
            "name": [s.get("name") or "" for s in suppliers],
        }
    )

    orders_df = pd.DataFrame(
        {
            "key": [str(o.get("supplier_id")) for o in orders],
            "total_amount": [coerce_number(o.get("total_amount")) for o in orders],
        },
        columns=["key", "total_amount"],
    )
    orders_df["total_amount"] = pd.to_numeric(
        orders_df["total_amount"], errors="coerce"
    ).fillna(0)

    per_supplier = (
        orders_df.groupby("key")
        .agg(
            order_count=("total_amount", "size"),
            total_value=("total_amount", "sum"),
        )
        .reset_index()
    )

    merged = pd.merge(suppliers_df, per_supplier, on="key", how="left")
    merged["order_count"] = merged["order_count"].fillna(0).astype(int)
    merged["total_value"] = merged["total_value"].fillna(0.0).astype(float)
    merged["avg_order_value"] = (
        merged["total_value"] / merged["order_count"].where(merged["order_count"] > 0)
    ).fillna(0.0)

    merged = merged.sort_values("total_value", ascending=False, kind="stable").head(limit)

    return [
        SupplierMetric(
            id=row["id"],
            name=row["name"],
            order_count=int(row["order_count"]),
            total_value=float(row["total_value"]),
            avg_order_value=float(row["avg_order_value"]),
        )
        for row in merged.to_dict("records")
    ]


def analytics_overview(
    items: list[ClassifiedItem],
    suppliers: list[dict[str, Any]],
    orders: list[dict[str, Any]],
) -> AnalyticsOverview:
    return AnalyticsOverview(
        total_items=len(items),
        total_value=sum(item.current_value for item in items),
        total_suppliers=len(suppliers),
        total_orders=len(orders),
        approved_orders=sum(1 for order in orders if order.get("status") == "APPROVED"),
        low_stock_items=sum(
            1 for item in items if item.stock_status != StockStatus.GOOD
        ),
    )


def abc_export_rows(items: Iterable[ClassifiedItem]) -> list[AbcExportRow]:
    return [
        AbcExportRow(
            name=item.name,
            sku=item.sku,
            category=item.category,
            current_stock=display_number(item.current_stock),
            unit_cost=display_number(item.unit_cost),
            current_value=display_number(item.current_value),
            percentage=format_percentage(item.percentage_of_total),
            classification=item.abc_class,
        )
        for item in items
    ]


def valuation_export_rows(items: Iterable[InventoryItem]) -> list[ValuationExportRow]:
    return [
        ValuationExportRow(
            name=item.name,
            sku=item.sku,
            category=item.category,
            current_stock=display_number(item.current_stock),
            unit_cost=display_number(item.unit_cost),
            total_value=display_number(item_value(item)),
            warehouse=item.warehouse,
        )
        for item in items
    ]
