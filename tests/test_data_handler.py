import json
import os
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest
import requests

from stock_classifier import data_handler, reports, settings
from stock_classifier.classifier import classify
from stock_classifier.utils import coerce_number, find_latest_report


def _response(payload, status=200):
    response = MagicMock()
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status}")
    return response


class TestFetchRecords:
    def test_without_api_returns_empty(self, isolated_settings):
        with patch("stock_classifier.data_handler.requests.get") as get:
            assert data_handler.fetch_inventory() == []
        get.assert_not_called()

    def test_returns_list_body(self, isolated_settings, monkeypatch, inventory_records):
        monkeypatch.setattr(settings, "API_BASE_URL", "http://api.local/api/")
        with patch(
            "stock_classifier.data_handler.requests.get",
            return_value=_response(inventory_records),
        ) as get:
            assert data_handler.fetch_inventory() == inventory_records
        get.assert_called_once_with("http://api.local/api/inventory", timeout=settings.API_TIMEOUT)

    def test_http_error_is_empty_batch(self, isolated_settings, monkeypatch):
        monkeypatch.setattr(settings, "API_BASE_URL", "http://api.local")
        with patch(
            "stock_classifier.data_handler.requests.get",
            return_value=_response({"error": "boom"}, status=500),
        ):
            assert data_handler.fetch_suppliers() == []

    def test_connection_error_is_empty_batch(self, isolated_settings, monkeypatch):
        monkeypatch.setattr(settings, "API_BASE_URL", "http://api.local")
        with patch(
            "stock_classifier.data_handler.requests.get",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ):
            assert data_handler.fetch_purchase_orders() == []

    def test_non_list_body_is_empty_batch(self, isolated_settings, monkeypatch):
        monkeypatch.setattr(settings, "API_BASE_URL", "http://api.local")
        with patch(
            "stock_classifier.data_handler.requests.get",
            return_value=_response({"items": []}),
        ):
            assert data_handler.fetch_inventory() == []


class TestSaveOutputs:
    def test_csv_uses_aliases(self, isolated_settings, inventory_records):
        rows = reports.abc_export_rows(classify(inventory_records))
        path = data_handler.save_outputs(rows, "abc_analysis_report")

        assert path is not None and path.exists()
        df = pd.read_csv(path)
        assert list(df.columns) == [
            "Item Name",
            "SKU",
            "Category",
            "Current Stock",
            "Unit Cost",
            "Current Value",
            "Percentage",
            "Classification",
        ]
        assert df["Percentage"].tolist() == ["99.60%", "0.30%", "0.10%"]
        assert df["Classification"].tolist() == ["A", "C", "C"]
        assert not path.with_suffix(".json").exists()

    def test_json_when_enabled(self, isolated_settings, monkeypatch, inventory_records):
        monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)
        rows = reports.abc_export_rows(classify(inventory_records))
        path = data_handler.save_outputs(rows, "abc_analysis_report")

        data = json.loads(path.with_suffix(".json").read_text(encoding="utf-8"))
        assert data[0]["Item Name"] == "Pallet Jack"
        assert data[0]["Classification"] == "A"

    def test_nothing_to_save(self, isolated_settings):
        assert data_handler.save_outputs([], "empty_report") is None
        assert not settings.OUTPUT_DIR.exists()


class TestPostToWebhook:
    def test_skipped_without_url(self, isolated_settings):
        with patch("stock_classifier.data_handler.requests.post") as post:
            assert data_handler.post_to_webhook([], {}, "abc_analysis") is False
        post.assert_not_called()

    def test_posts_payload(self, isolated_settings, monkeypatch, inventory_records):
        monkeypatch.setattr(settings, "WEBHOOK_URL", "http://hook.local")
        rows = reports.abc_export_rows(classify(inventory_records))
        with patch(
            "stock_classifier.data_handler.requests.post", return_value=_response({})
        ) as post:
            assert data_handler.post_to_webhook(rows, {"itemCount": 3}, "abc_analysis") is True

        payload = post.call_args.kwargs["json"]
        assert payload["reportType"] == "abc_analysis"
        assert payload["metadata"] == {"itemCount": 3}
        assert payload["reportData"][0]["Percentage"] == "99.60%"
        json.dumps(payload)

    def test_uses_configured_timeout(self, isolated_settings, monkeypatch):
        monkeypatch.setattr(settings, "WEBHOOK_URL", "http://hook.local")
        monkeypatch.setattr(settings, "WEBHOOK_TIMEOUT", 3.0)
        with patch(
            "stock_classifier.data_handler.requests.post", return_value=_response({})
        ) as post:
            assert data_handler.post_to_webhook([], {}, "abc_analysis") is True
        assert post.call_args.kwargs["timeout"] == 3.0

    def test_failure_is_logged_not_raised(self, isolated_settings, monkeypatch):
        monkeypatch.setattr(settings, "WEBHOOK_URL", "http://hook.local")
        with patch(
            "stock_classifier.data_handler.requests.post",
            side_effect=requests.exceptions.Timeout("slow"),
        ):
            assert data_handler.post_to_webhook([], {}, "abc_analysis") is False


class TestUtils:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (5, 5.0),
            ("5", 5.0),
            (" 1,250.5 ", 1250.5),
            ("", None),
            ("abc", None),
            (None, None),
            (True, None),
            (float("nan"), None),
            (float("inf"), None),
        ],
    )
    def test_coerce_number(self, raw, expected):
        assert coerce_number(raw) == expected

    def test_find_latest_report(self, isolated_settings):
        older = settings.INPUT_DIR / "inventory_old.csv"
        newer = settings.INPUT_DIR / "inventory_new.csv"
        older.write_text("name\n")
        newer.write_text("name\n")
        os.utime(older, (1_000_000, 1_000_000))
        (settings.INPUT_DIR / "suppliers.csv").write_text("name\n")

        path, _ = find_latest_report(settings.INPUT_DIR, "inventory_")
        assert path == newer

    def test_find_latest_report_missing(self, isolated_settings):
        assert find_latest_report(settings.INPUT_DIR, "inventory_") is None
