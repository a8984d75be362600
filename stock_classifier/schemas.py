from enum import Enum
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from . import settings
from .utils import clean_text, coerce_number


class AbcClass(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class StockStatus(str, Enum):
    CRITICAL = "Critical"
    LOW = "Low"
    GOOD = "Good"


class InventoryItem(BaseModel):
    """
    A single inventory record as delivered by the inventory API or an
    inventory CSV export.

    Field defaults are resolved here, once, so the rest of the code never has
    to guess: stock falls back to 0, unit cost to the default cost, missing
    thresholds stay None and the related status check is skipped.

    A numeric unit cost of 0 is kept as 0. Older inventory screens replaced
    any falsy cost, 0 included, with the default cost, so zero-cost rows value
    differently here than they did there.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Any = None
    name: str = ""
    sku: str = ""
    category: str = Field(
        default=settings.DEFAULT_CATEGORY,
        validation_alias=AliasChoices("category", "category_name"),
    )
    description: Optional[str] = None
    warehouse: str = Field(
        default=settings.DEFAULT_WAREHOUSE,
        validation_alias=AliasChoices("warehouse", "warehouse_name"),
    )
    current_stock: float = Field(
        default=0.0,
        validation_alias=AliasChoices("current_stock", "currentStock"),
    )
    unit_cost: float = Field(
        default=float(settings.DEFAULT_UNIT_COST),
        validation_alias=AliasChoices("unit_cost", "cost", "unitCost"),
    )
    reorder_point: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("reorder_point", "reorderPoint"),
    )
    safety_stock: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("safety_stock", "safetyStock"),
    )

    @field_validator("name", "sku", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return clean_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return clean_text(value) or None

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> str:
        return clean_text(value, settings.DEFAULT_CATEGORY)

    @field_validator("warehouse", mode="before")
    @classmethod
    def _warehouse(cls, value: Any) -> str:
        return clean_text(value, settings.DEFAULT_WAREHOUSE)

    @field_validator("current_stock", mode="before")
    @classmethod
    def _stock(cls, value: Any) -> float:
        number = coerce_number(value)
        return max(number, 0.0) if number is not None else 0.0

    @field_validator("unit_cost", mode="before")
    @classmethod
    def _unit_cost(cls, value: Any) -> float:
        number = coerce_number(value)
        if number is None:
            return float(settings.DEFAULT_UNIT_COST)
        return max(number, 0.0)

    @field_validator("reorder_point", "safety_stock", mode="before")
    @classmethod
    def _threshold(cls, value: Any) -> Optional[float]:
        number = coerce_number(value)
        return max(number, 0.0) if number is not None else None


class ClassifiedItem(InventoryItem):
    """An inventory item with its value share, ABC class and stock health."""

    current_value: float = 0.0
    percentage_of_total: float = 0.0
    cumulative_percentage: float = 0.0
    abc_class: AbcClass = AbcClass.C
    stock_status: StockStatus = StockStatus.GOOD


class AbcExportRow(BaseModel):
    """One flat line of the ABC analysis CSV export."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Item Name")
    sku: str = Field(..., alias="SKU")
    category: str = Field(..., alias="Category")
    current_stock: int | float = Field(..., alias="Current Stock")
    unit_cost: int | float = Field(..., alias="Unit Cost")
    current_value: int | float = Field(..., alias="Current Value")
    percentage: str = Field(..., alias="Percentage")
    classification: AbcClass = Field(..., alias="Classification")


class ValuationExportRow(BaseModel):
    """One flat line of the stock valuation CSV export."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Item Name")
    sku: str = Field(..., alias="SKU")
    category: str = Field(..., alias="Category")
    current_stock: int | float = Field(..., alias="Current Stock")
    unit_cost: int | float = Field(..., alias="Unit Cost")
    total_value: int | float = Field(..., alias="Total Value")
    warehouse: str = Field(..., alias="Warehouse")


class TopItemRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Item Name")
    sku: str = Field(..., alias="SKU")
    category: str = Field(..., alias="Category")
    stock: int | float = Field(..., alias="Current Stock")
    value: int | float = Field(..., alias="Value")


class SupplierMetric(BaseModel):
    id: Any = None
    name: str = ""
    order_count: int = 0
    total_value: float = 0.0
    avg_order_value: float = 0.0


class AnalyticsOverview(BaseModel):
    total_items: int = 0
    total_value: float = 0.0
    total_suppliers: int = 0
    total_orders: int = 0
    approved_orders: int = 0
    low_stock_items: int = 0
