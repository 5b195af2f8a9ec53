# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - pytest-qt owns QApplication (use qapp/qtbot fixtures)
# - Every test gets its own SQLite file under tmp_path (schema applied
#   by get_connection), so no seeding or rollback is needed
# - conn.row_factory = sqlite3.Row, PRAGMA foreign_keys=ON
# - "today" is pinned for expiry tests through LedgerStore(today=...)
# - Silence benign Qt signal warnings
# ---------------------------------------------------------------------

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import re
import sqlite3
from datetime import date

import pytest
from PySide6 import QtCore

from shop_inventory.database import get_connection
from shop_inventory.database.ledger import LedgerStore

FIXED_TODAY = date(2025, 1, 1)


# ---------- Qt: let pytest-qt own the app ----------
@pytest.fixture(scope="session")
def app(qapp):  # alias to match code that expects an `app` fixture
    return qapp


# ---------- Silence benign Qt warnings ----------
_BENIGN_QT_PATTERNS = [
    r"^QObject::connect: .* already connected",
    r"^QObject::disconnect: Unexpected null parameter",
    r"^QBasicTimer::stop: Failed\. Platform timer not running\.",
    r"^This plugin does not support propagateSizeHints",
]

@pytest.fixture(autouse=True, scope="session")
def _silence_benign_qt():
    """Filter common harmless Qt messages during tests."""
    original = QtCore.qInstallMessageHandler(None)
    rx = [re.compile(p) for p in _BENIGN_QT_PATTERNS]

    def handler(msg_type, context, message):
        text = str(message)
        for r in rx:
            if r.search(text):
                return  # swallow benign messages
        QtCore.qInstallMessageHandler(None)
        try:
            QtCore.qDebug(message)
        finally:
            QtCore.qInstallMessageHandler(handler)

    QtCore.qInstallMessageHandler(handler)
    try:
        yield
    finally:
        QtCore.qInstallMessageHandler(original)


# ---------- Per-test database ----------
@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "shop.db"


@pytest.fixture()
def conn(db_path):
    """Fresh database file with the full schema; closed after the test."""
    con = get_connection(db_path)
    try:
        yield con
    finally:
        con.close()


@pytest.fixture()
def store(conn: sqlite3.Connection) -> LedgerStore:
    """Ledger with 'today' pinned to FIXED_TODAY and no stock enforcement."""
    return LedgerStore(conn, today=lambda: FIXED_TODAY)


@pytest.fixture()
def enforcing_store(conn: sqlite3.Connection) -> LedgerStore:
    """Ledger that refuses to sell more than is on hand."""
    return LedgerStore(conn, enforce_stock=True, today=lambda: FIXED_TODAY)


# ---------- Handy stock ----------
@pytest.fixture()
def stocked(store: LedgerStore) -> dict:
    """
    Two products with purchases recorded:
      Tea    10 units, cost 50, sells at 75, expires well outside the window
      Sugar   5 units, cost 40, sells at 60, no expiry date
    """
    tea = store.add_product("Tea", purchase_price=50, sale_price=75,
                            stock_entry_date="2024-12-01", expiry_date="2026-01-01")
    sugar = store.add_product("Sugar", purchase_price=40, sale_price=60,
                              stock_entry_date="2024-12-01")
    store.add_purchase(tea, 10, 500, "2024-12-01")
    store.add_purchase(sugar, 5, 200, "2024-12-02")
    return {"tea": tea, "sugar": sugar}
