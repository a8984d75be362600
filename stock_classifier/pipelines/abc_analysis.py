import logging
from typing import Any, Optional
from pydantic import ValidationError

from stock_classifier import classifier, reports, settings
from stock_classifier.pipeline import DataPipeline
from stock_classifier.schemas import AbcExportRow, ClassifiedItem

logger = logging.getLogger(__name__)

CLASSIFICATION_METHODS = {
    "item_share": classifier.classify,
    "cumulative": classifier.classify_cumulative,
}


class AbcAnalysisPipeline(DataPipeline):
    def __init__(self, method: Optional[str] = None, test_mode: bool = False):
        super().__init__("abc_analysis", test_mode=test_mode)
        self.method = method or settings.ABC_METHOD
        if self.method not in CLASSIFICATION_METHODS:
            raise ValueError(
                f"Unknown ABC method '{self.method}'. "
                f"Expected one of: {', '.join(CLASSIFICATION_METHODS)}"
            )
        self.classified: list[ClassifiedItem] = []

    def transform(self, records: list[dict[str, Any]]) -> list[AbcExportRow] | None:
        logger.info(f"\n--- Classifying {len(records)} items ({self.method}) ---")

        try:
            self.classified = CLASSIFICATION_METHODS[self.method](records)
        except ValidationError as e:
            logger.error("❌ Data validation failed!")
            logger.error(e)
            return None

        class_counts = reports.summarize_classes(self.classified)
        status_counts = reports.summarize_stock_status(self.classified)

        self.metadata.update(
            {
                "method": self.method,
                "itemCount": len(self.classified),
                "totalValue": sum(item.current_value for item in self.classified),
                "classCounts": class_counts,
                "stockStatusCounts": status_counts,
            }
        )
        logger.info(
            "Class A: {A} | Class B: {B} | Class C: {C}".format(**class_counts)
        )

        return reports.abc_export_rows(self.classified)
