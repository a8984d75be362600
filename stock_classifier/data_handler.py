import json
import logging
from pathlib import Path
from typing import Any, Optional
import pandas as pd
import requests
from pydantic import BaseModel

from . import settings
from . import utils

logger = logging.getLogger(__name__)


def fetch_records(endpoint: str) -> list[dict[str, Any]]:
    """
    GETs a list of records from the inventory API.
    Any failure (no API configured, network error, unexpected body) is logged
    and treated as an empty batch so reports still run.
    """
    if not settings.API_BASE_URL:
        logger.warning(f"⚠️ API_BASE_URL not set. Cannot fetch {endpoint}.")
        return []

    url = settings.API_BASE_URL.rstrip("/") + endpoint
    try:
        response = requests.get(url, timeout=settings.API_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error fetching {url}: {e}")
        return []
    except ValueError as e:
        logger.error(f"❌ Response from {url} is not valid JSON: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"⚠️ Expected a list from {url}, got {type(data).__name__}.")
        return []

    logger.info(f"  > Fetched {len(data)} records from {endpoint}")
    return data


def fetch_inventory() -> list[dict[str, Any]]:
    return fetch_records(settings.INVENTORY_ENDPOINT)


def fetch_suppliers() -> list[dict[str, Any]]:
    return fetch_records(settings.SUPPLIERS_ENDPOINT)


def fetch_purchase_orders() -> list[dict[str, Any]]:
    return fetch_records(settings.PURCHASE_ORDERS_ENDPOINT)


def save_outputs(validated_data: list[BaseModel], filename_base: str) -> Optional[Path]:
    """Saves the rows to a dated CSV (column aliases as headers) and optionally to JSON."""
    if not validated_data:
        logger.warning("No data to save to disk.")
        return None

    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{filename_base}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{filename_base}_{date_suffix}.json"

    records = [item.model_dump(mode="json", by_alias=True) for item in validated_data]
    pd.DataFrame(records).to_csv(csv_path, index=False)
    logger.info(f"✅ Report saved to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, default=str)
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("Skipping JSON file save as per configuration.")

    return csv_path


def post_to_webhook(
    validated_data: list[BaseModel],
    metadata: dict[str, Any],
    report_type: str,
) -> bool:
    """
    Posts the report rows and a metadata block to the webhook.
    Returns True when the post went through.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} report to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "reportData": [
            item.model_dump(mode="json", by_alias=True) for item in validated_data
        ],
        "metadata": metadata,
    }

    try:
        response = requests.post(
            settings.WEBHOOK_URL, json=payload, timeout=settings.WEBHOOK_TIMEOUT
        )
        response.raise_for_status()
        logger.info("✅ Report successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
