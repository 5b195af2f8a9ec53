from pathlib import Path
import logging
import sqlite3
import sys

from ..constants import DEFAULT_EXPIRY_BACKFILL

_log = logging.getLogger(__name__)

SQL = r"""
PRAGMA foreign_keys = ON;

/* ======================== CORE TABLES ======================== */

/* -------- products --------
   quantity is a cache of the stock projection; purchases and bill items
   are the source of truth for on-hand stock. */
CREATE TABLE IF NOT EXISTS products (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    name             TEXT    NOT NULL,
    quantity         INTEGER NOT NULL DEFAULT 0,
    purchase_price   REAL    NOT NULL DEFAULT 0,
    sale_price       REAL    NOT NULL DEFAULT 0,
    stock_entry_date TEXT    NOT NULL,
    expiry_date      TEXT
);

/* -------- bills -------- */
CREATE TABLE IF NOT EXISTS bills (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_date        TEXT NOT NULL,
    payment_method   TEXT NOT NULL CHECK (payment_method IN ('cash','credit')),
    total            REAL NOT NULL CHECK (total > 0),
    amount_paid      REAL NOT NULL DEFAULT 0,
    credit_remaining REAL NOT NULL DEFAULT 0 CHECK (credit_remaining >= 0),
    printed          INTEGER NOT NULL DEFAULT 0 CHECK (printed IN (0,1)),
    customer_name    TEXT,
    customer_mobile  TEXT
);
CREATE INDEX IF NOT EXISTS idx_bills_date ON bills(bill_date);

/* -------- bill items --------
   product_id is not a foreign key: deleting a product leaves history intact. */
CREATE TABLE IF NOT EXISTS bill_items (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_id    INTEGER NOT NULL,
    product_id INTEGER NOT NULL,
    quantity   INTEGER NOT NULL CHECK (quantity > 0),
    unit_price REAL    NOT NULL CHECK (unit_price >= 0),
    line_total REAL    NOT NULL,
    FOREIGN KEY (bill_id) REFERENCES bills(id)
);
CREATE INDEX IF NOT EXISTS idx_bill_items_bill    ON bill_items(bill_id);
CREATE INDEX IF NOT EXISTS idx_bill_items_product ON bill_items(product_id);

/* -------- purchases (stock intake) -------- */
CREATE TABLE IF NOT EXISTS purchases (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id    INTEGER NOT NULL,
    quantity      INTEGER NOT NULL,
    total_value   REAL    NOT NULL,
    purchase_date TEXT    NOT NULL,
    expiry_date   TEXT,
    sale_price    REAL
);
CREATE INDEX IF NOT EXISTS idx_purchases_product ON purchases(product_id);
CREATE INDEX IF NOT EXISTS idx_purchases_date    ON purchases(purchase_date);

/* -------- credit payments (append-only) -------- */
CREATE TABLE IF NOT EXISTS credit_payments (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_id      INTEGER NOT NULL,
    amount       REAL    NOT NULL CHECK (amount > 0),
    payment_date TEXT    NOT NULL,
    FOREIGN KEY (bill_id) REFERENCES bills(id)
);
CREATE INDEX IF NOT EXISTS idx_credit_payments_bill ON credit_payments(bill_id);
"""


def _columns(conn: sqlite3.Connection, table: str) -> set[str]:
    return {row[1] for row in conn.execute(f"PRAGMA table_info({table});").fetchall()}


def _ensure_products_expiry_date(conn: sqlite3.Connection) -> None:
    """
    Safe migration for older DBs that created `products` before `expiry_date` existed.
    Adds the column and backfills it one year after the stock entry date.
    No-op if already present.
    """
    if "expiry_date" in _columns(conn, "products"):
        return
    conn.execute("ALTER TABLE products ADD COLUMN expiry_date TEXT;")
    cur = conn.execute(
        "UPDATE products SET expiry_date = DATE(stock_entry_date, ?) "
        "WHERE stock_entry_date IS NOT NULL AND stock_entry_date != ''",
        (DEFAULT_EXPIRY_BACKFILL,),
    )
    _log.info("Added products.expiry_date; backfilled %d row(s)", cur.rowcount)


def _ensure_nullable_columns(conn: sqlite3.Connection) -> None:
    """Columns introduced after the first release; all nullable, no backfill."""
    wanted = {
        "purchases": [("expiry_date", "TEXT"), ("sale_price", "REAL")],
        "bills": [("customer_name", "TEXT"), ("customer_mobile", "TEXT")],
    }
    for table, cols in wanted.items():
        have = _columns(conn, table)
        for name, decl in cols:
            if name not in have:
                conn.execute(f"ALTER TABLE {table} ADD COLUMN {name} {decl};")
                _log.info("Added %s.%s", table, name)


def apply_schema(conn: sqlite3.Connection) -> None:
    """Apply the idempotent DDL and column migrations on an open connection."""
    conn.executescript(SQL)
    _ensure_products_expiry_date(conn)
    _ensure_nullable_columns(conn)
    conn.commit()


def init_schema(db_path: Path | str = "inventory.db") -> None:
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        apply_schema(conn)
    finally:
        conn.close()
    _log.info("Schema applied to %s", db_path)


if __name__ == "__main__":
    from ..config import DB_PATH

    target = sys.argv[1] if len(sys.argv) > 1 else DB_PATH
    init_schema(target)
    print(f"✓ DB applied to {target}")
