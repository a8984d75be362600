import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Filename Configuration ---
INVENTORY_FILENAME_PREFIX = os.getenv("INVENTORY_FILENAME_PREFIX", "inventory_")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "false").lower() in ("1", "true", "yes")

# --- Inventory API ---
# When unset, pipelines read the latest inventory CSV from INPUT_DIR instead.
API_BASE_URL = os.getenv("API_BASE_URL")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "15"))
INVENTORY_ENDPOINT = "/inventory"
SUPPLIERS_ENDPOINT = "/suppliers"
PURCHASE_ORDERS_ENDPOINT = "/purchase-orders"

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
WEBHOOK_TIMEOUT = float(os.getenv("WEBHOOK_TIMEOUT", str(API_TIMEOUT)))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Shared Business Logic ---
# "item_share" tests each item's own share of total value against the A/B
# cut-offs. "cumulative" runs the running-sum Pareto classification.
ABC_METHOD = os.getenv("ABC_METHOD", "item_share")

DEFAULT_UNIT_COST = 100
DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_WAREHOUSE = "Main Warehouse"

ABC_A_THRESHOLD = 80.0
ABC_B_THRESHOLD = 20.0

CUMULATIVE_A_THRESHOLD = 80.0
CUMULATIVE_B_THRESHOLD = 95.0

TOP_ITEMS_LIMIT = 10
