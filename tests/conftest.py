"""
Shared fixtures for the report tests.
"""
import pytest

from stock_classifier import settings


@pytest.fixture
def inventory_records():
    """Backend-shaped inventory records, as returned by GET /inventory."""
    return [
        {
            "id": 1,
            "name": "Pallet Jack",
            "sku": "PJ-100",
            "category_name": "Equipment",
            "current_stock": 100,
            "cost": 1000,
            "reorder_point": 20,
            "safety_stock": 5,
        },
        {
            "id": 2,
            "name": "Stretch Wrap",
            "sku": "SW-010",
            "category_name": "Packaging",
            "current_stock": "10",
            "cost": 10,
            "reorder_point": 15,
            "safety_stock": 5,
            "description": "Clear 18 inch roll",
        },
        {
            "id": 3,
            "name": "Label Roll",
            "sku": "LR-001",
            "category_name": None,
            "current_stock": 3,
            "reorder_point": 10,
            "safety_stock": 4,
        },
    ]


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Points every file and network setting at a sandbox."""
    input_dir = tmp_path / "input"
    output_dir = tmp_path / "output"
    input_dir.mkdir()
    monkeypatch.setattr(settings, "INPUT_DIR", input_dir)
    monkeypatch.setattr(settings, "OUTPUT_DIR", output_dir)
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(settings, "API_BASE_URL", None)
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)
    monkeypatch.setattr(settings, "ABC_METHOD", "item_share")
    return tmp_path
