import logging
from typing import Any, Optional
from pydantic import ValidationError

from stock_classifier import classifier, data_handler, reports, settings
from stock_classifier.pipeline import DataPipeline
from stock_classifier.schemas import TopItemRow

logger = logging.getLogger(__name__)


class AnalyticsPipeline(DataPipeline):
    """
    Inventory analytics: headline figures, the most valuable items and the
    suppliers with the highest purchase order value.
    """

    def __init__(self, test_mode: bool = False, limit: int = settings.TOP_ITEMS_LIMIT):
        super().__init__("analytics", test_mode=test_mode)
        self.limit = limit
        self.suppliers: list[dict[str, Any]] = []
        self.orders: list[dict[str, Any]] = []

    def extract(self) -> Optional[list[dict[str, Any]]]:
        inventory = super().extract()

        # Suppliers and orders only come from the API; without one the
        # supplier section is simply empty.
        if settings.API_BASE_URL:
            self.suppliers = data_handler.fetch_suppliers()
            self.orders = data_handler.fetch_purchase_orders()

        return inventory

    def transform(self, records: list[dict[str, Any]]) -> list[TopItemRow] | None:
        logger.info("\n--- Building Analytics ---")

        try:
            classified = classifier.classify(records)
        except ValidationError as e:
            logger.error("❌ Data validation failed!")
            logger.error(e)
            return None

        overview = reports.analytics_overview(classified, self.suppliers, self.orders)
        metrics = reports.supplier_metrics(self.suppliers, self.orders, limit=self.limit)

        self.metadata.update(
            {
                "overview": overview.model_dump(mode="json"),
                "supplierMetrics": [m.model_dump(mode="json") for m in metrics],
            }
        )

        return reports.top_items_by_value(classified, limit=self.limit)
