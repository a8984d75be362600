import logging
from typing import Any
from pydantic import ValidationError

from stock_classifier import reports
from stock_classifier.pipeline import DataPipeline
from stock_classifier.schemas import InventoryItem, ValuationExportRow

logger = logging.getLogger(__name__)


class StockValuationPipeline(DataPipeline):
    def __init__(self, test_mode: bool = False):
        super().__init__("stock_valuation", test_mode=test_mode)

    def transform(self, records: list[dict[str, Any]]) -> list[ValuationExportRow] | None:
        logger.info("\n--- Valuing Stock ---")

        try:
            items = [InventoryItem.model_validate(record) for record in records]
        except ValidationError as e:
            logger.error("❌ Data validation failed!")
            logger.error(e)
            return None

        summary = reports.valuation_summary(items)
        self.metadata.update(
            {
                "totalValue": summary["total_value"],
                "totalItems": summary["total_items"],
                "averageValue": summary["average_value"],
            }
        )

        return reports.valuation_export_rows(items)
