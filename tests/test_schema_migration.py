# tests/test_schema_migration.py
import sqlite3

from shop_inventory.constants import SCHEMA_VERSION
from shop_inventory.database import get_connection
from shop_inventory.database.schema import init_schema
from shop_inventory.database.versioning import get_current_version

# Layout of a database created before expiry dates, purchase sale prices
# and customer details existed.
OLD_SCHEMA = """
CREATE TABLE products (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    name             TEXT    NOT NULL,
    quantity         INTEGER NOT NULL DEFAULT 0,
    purchase_price   REAL    NOT NULL DEFAULT 0,
    sale_price       REAL    NOT NULL DEFAULT 0,
    stock_entry_date TEXT    NOT NULL
);
CREATE TABLE bills (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_date        TEXT NOT NULL,
    payment_method   TEXT NOT NULL,
    total            REAL NOT NULL,
    amount_paid      REAL NOT NULL DEFAULT 0,
    credit_remaining REAL NOT NULL DEFAULT 0,
    printed          INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE bill_items (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_id    INTEGER NOT NULL,
    product_id INTEGER NOT NULL,
    quantity   INTEGER NOT NULL,
    unit_price REAL    NOT NULL,
    line_total REAL    NOT NULL
);
CREATE TABLE purchases (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id    INTEGER NOT NULL,
    quantity      INTEGER NOT NULL,
    total_value   REAL    NOT NULL,
    purchase_date TEXT    NOT NULL
);
INSERT INTO products(name, quantity, purchase_price, sale_price, stock_entry_date)
VALUES ('Tea', 0, 50, 75, '2024-03-15');
INSERT INTO purchases(product_id, quantity, total_value, purchase_date)
VALUES (1, 10, 500, '2024-03-15');
"""


def _columns(conn, table):
    return {row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()}


def _make_old_db(path):
    con = sqlite3.connect(path)
    try:
        con.executescript(OLD_SCHEMA)
        con.commit()
    finally:
        con.close()


def test_fresh_database_has_all_tables(conn):
    tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"products", "bills", "bill_items", "purchases", "credit_payments", "schema_version"} <= tables
    assert get_current_version(conn) == SCHEMA_VERSION
    assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1


def test_old_database_gets_expiry_backfilled(db_path):
    _make_old_db(db_path)

    con = get_connection(db_path)
    try:
        assert "expiry_date" in _columns(con, "products")
        row = con.execute("SELECT expiry_date FROM products WHERE id=1").fetchone()
        assert row["expiry_date"] == "2025-03-15"
    finally:
        con.close()


def test_old_database_gets_nullable_columns(db_path):
    _make_old_db(db_path)

    con = get_connection(db_path)
    try:
        assert {"expiry_date", "sale_price"} <= _columns(con, "purchases")
        assert {"customer_name", "customer_mobile"} <= _columns(con, "bills")
        assert tuple(con.execute("SELECT expiry_date, sale_price FROM purchases").fetchone()) == (None, None)
        # history is intact
        assert con.execute("SELECT quantity FROM purchases WHERE id=1").fetchone()[0] == 10
    finally:
        con.close()


def test_migration_is_idempotent(db_path):
    _make_old_db(db_path)
    get_connection(db_path).close()

    con = get_connection(db_path)
    try:
        assert con.execute("SELECT expiry_date FROM products WHERE id=1").fetchone()[0] == "2025-03-15"
        assert get_current_version(con) == SCHEMA_VERSION
    finally:
        con.close()


def test_init_schema_creates_file(tmp_path):
    target = tmp_path / "nested" / "shop.db"
    init_schema(target)
    assert target.exists()
    con = sqlite3.connect(target)
    try:
        assert "expiry_date" in _columns(con, "products")
    finally:
        con.close()
