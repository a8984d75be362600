import logging
from abc import ABC, abstractmethod
from typing import Any, Optional
from pydantic import BaseModel

from . import settings, data_handler, utils

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines (ABC analysis, valuation, etc.).
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode
        # Summary figures posted alongside the rows; filled in by transform.
        self.metadata: dict[str, Any] = {}
        self.output_path = None

    def run(self) -> Optional[list[BaseModel]]:
        """
        Orchestrates the pipeline execution. Returns the transformed rows,
        or None when the transformation failed.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if not raw_data:
            logger.warning(f"⚠️ No data extracted for {self.report_type}. Sending an empty report.")
            raw_data = []

        # --- 2. TRANSFORM ---
        validated_data = self.transform(raw_data)
        if validated_data is None:
            logger.error(f"❌ Transformation failed for {self.report_type}.")
            return None

        # --- 3. LOAD ---
        self.load(validated_data)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return validated_data

    def extract(self) -> Optional[list[dict[str, Any]]]:
        """
        Pulls inventory records from the API when one is configured,
        otherwise from the latest inventory CSV in the input directory.
        """
        if settings.API_BASE_URL:
            logger.info(f"-- Fetching inventory from {settings.API_BASE_URL} --")
            return data_handler.fetch_inventory()

        found = utils.find_latest_report(settings.INPUT_DIR, settings.INVENTORY_FILENAME_PREFIX)
        if not found:
            logger.error(
                f"  > ERROR: No '{settings.INVENTORY_FILENAME_PREFIX}*.csv' file in {settings.INPUT_DIR}."
            )
            return None

        path, report_date = found
        logger.info(f"  > Found inventory file: {path.name} ({report_date})")
        self.metadata["sourceDate"] = report_date.isoformat()

        df = utils.load_csv(path)
        if df is None:
            return None
        return df.to_dict("records")

    @abstractmethod
    def transform(self, records: list[dict[str, Any]]) -> Optional[list[BaseModel]]:
        """
        Validates the raw records and builds the report rows.
        Returns None if the data could not be validated.
        """
        pass

    def load(self, validated_data: list[BaseModel]):
        """
        Saves data to disk and posts to webhook.
        """
        if self.metadata:
            logger.info("\n--- Report Summary ---")
            for key, value in self.metadata.items():
                logger.info(f"{key}: {value}")

        self.output_path = data_handler.save_outputs(validated_data, f"{self.report_type}_report")

        if not self.test_mode:
            data_handler.post_to_webhook(
                validated_data=validated_data,
                metadata=self.metadata,
                report_type=self.report_type,
            )
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
