# shop_inventory/constants.py
APP_NAME = "Shop Inventory"
SHOP_NAME = "Hussnain Traders"

# storage
DATA_DIR = "data"
DB_FILE_NAME = "inventory.db"
TABLE_SCHEMA_VERSION = "schema_version"
SCHEMA_VERSION = "2"
STYLE_FILE = "resources/style.qss"
RECEIPT_TEMPLATE = "resources/templates/receipt.html"

# payment methods
PAYMENT_CASH = "cash"
PAYMENT_CREDIT = "credit"
PAYMENT_METHODS = (PAYMENT_CASH, PAYMENT_CREDIT)

# shown wherever a referenced product no longer exists
MISSING_PRODUCT_NAME = "—"

# stock / expiry
NEAR_EXPIRY_DAYS = 30
URGENT_EXPIRY_DAYS = 7
DEFAULT_EXPIRY_BACKFILL = "+1 year"

# purchases list paging
PURCHASE_PAGE_SIZE = 10
PURCHASE_PAGE_MAX = 1000

# bill screen
MAX_LINE_QUANTITY = 200

# purchase form
MAX_PURCHASE_QUANTITY = 1000

# sign-in gate
LOGIN_USERNAME = "Iamuser"
LOGIN_PASSWORD = "9876"
