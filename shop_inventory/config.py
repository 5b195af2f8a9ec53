# shop_inventory/config.py
import os
from pathlib import Path

from .constants import DATA_DIR, DB_FILE_NAME

BASE_DIR = Path(__file__).resolve().parent
DATA_PATH = Path(os.environ.get("SHOP_INVENTORY_DATA_DIR", BASE_DIR / DATA_DIR))
DB_PATH = Path(os.environ.get("SHOP_INVENTORY_DB", DATA_PATH / DB_FILE_NAME))

# The bill screen asks the ledger to refuse sales beyond computed on-hand stock.
ENFORCE_STOCK_ON_BILL = os.environ.get("SHOP_INVENTORY_ENFORCE_STOCK", "1") != "0"

LOG_LEVEL = os.environ.get("SHOP_INVENTORY_LOG_LEVEL", "INFO")
