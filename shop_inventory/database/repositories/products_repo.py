# shop_inventory/database/repositories/products_repo.py
from dataclasses import dataclass, fields as dc_fields
from datetime import date
import logging
import sqlite3
from contextlib import contextmanager

from ...utils.stock import StockLevel, on_hand_by_product, project_stock

_log = logging.getLogger(__name__)

_UNSET = object()


@dataclass
class Product:
    id: int | None
    name: str
    quantity: int
    purchase_price: float
    sale_price: float
    stock_entry_date: str
    expiry_date: str | None


_COLUMNS = ", ".join(f.name for f in dc_fields(Product))
_EDITABLE = ("name", "quantity", "purchase_price", "sale_price", "stock_entry_date", "expiry_date")


class ProductsRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        # Use Row for named access; we normalize to dataclasses where we return products.
        self.conn.row_factory = sqlite3.Row

    # ---------------------------- TX helper ----------------------------

    @contextmanager
    def _immediate_tx(self):
        """
        Start an IMMEDIATE transaction (write lock once first write happens),
        commit on success, rollback on error.
        """
        cur = self.conn.cursor()
        try:
            cur.execute("BEGIN IMMEDIATE")
            yield
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        finally:
            cur.close()

    # ---------------------------- Reads ----------------------------

    def list_products(self) -> list[Product]:
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM products ORDER BY name COLLATE NOCASE, id"
        ).fetchall()
        return [Product(**r) for r in rows]

    def get(self, product_id: int) -> Product | None:
        r = self.conn.execute(
            f"SELECT {_COLUMNS} FROM products WHERE id=?",
            (product_id,),
        ).fetchone()
        return Product(**r) if r else None

    def find_by_name(self, name: str) -> Product | None:
        """
        Case-insensitive, whitespace-trimmed name match. Duplicate names are legal;
        the oldest matching product wins.
        """
        needle = (name or "").strip().lower()
        if not needle:
            return None
        for p in self._all_by_id():
            if (p.name or "").strip().lower() == needle:
                return p
        return None

    def list_from_purchases(self) -> list[Product]:
        """Products that have at least one purchase record (real catalog entries)."""
        rows = self.conn.execute(
            f"""
            SELECT {_COLUMNS}
            FROM products
            WHERE id IN (SELECT product_id FROM purchases)
            ORDER BY name COLLATE NOCASE, id
            """
        ).fetchall()
        return [Product(**r) for r in rows]

    # ---------------------------- Writes ----------------------------

    def create(
        self,
        name: str,
        quantity: int = 0,
        purchase_price: float = 0.0,
        sale_price: float = 0.0,
        stock_entry_date: str | None = None,
        expiry_date: str | None = None,
    ) -> int:
        with self._immediate_tx():
            pid = self.insert_row(
                name, quantity, purchase_price, sale_price, stock_entry_date, expiry_date
            )
        _log.info("Product #%s created (%s)", pid, name)
        return pid

    def insert_row(
        self,
        name: str,
        quantity: int = 0,
        purchase_price: float = 0.0,
        sale_price: float = 0.0,
        stock_entry_date: str | None = None,
        expiry_date: str | None = None,
    ) -> int:
        """INSERT only; the caller owns the transaction."""
        cur = self.conn.execute(
            "INSERT INTO products(name, quantity, purchase_price, sale_price, stock_entry_date, expiry_date) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                name,
                quantity or 0,
                purchase_price or 0.0,
                sale_price or 0.0,
                stock_entry_date or date.today().isoformat(),
                expiry_date or None,
            ),
        )
        return int(cur.lastrowid)

    def update(self, product_id: int, **changes) -> None:
        """
        Partial merge: only the given fields change. Unknown ids are ignored.
        `expiry_date=None` clears the expiry date; leaving it out keeps it.
        """
        unknown = set(changes) - set(_EDITABLE)
        if unknown:
            raise TypeError(f"Unknown product field(s): {', '.join(sorted(unknown))}")
        current = self.get(product_id)
        if current is None:
            _log.debug("update: product #%s not found", product_id)
            return
        merged = {}
        for col in _EDITABLE:
            value = changes.get(col, _UNSET)
            if value is _UNSET or (value is None and col != "expiry_date"):
                value = getattr(current, col)
            merged[col] = value
        with self._immediate_tx():
            self.conn.execute(
                "UPDATE products "
                "SET name=?, quantity=?, purchase_price=?, sale_price=?, stock_entry_date=?, expiry_date=? "
                "WHERE id=?",
                (
                    merged["name"],
                    merged["quantity"],
                    merged["purchase_price"],
                    merged["sale_price"],
                    merged["stock_entry_date"],
                    merged["expiry_date"] or None,
                    product_id,
                ),
            )

    def delete(self, product_id: int) -> None:
        """
        Hard delete. Purchases and bill items that reference the product are kept;
        joins report the product name as missing afterwards.
        """
        with self._immediate_tx():
            cur = self.conn.execute("DELETE FROM products WHERE id=?", (product_id,))
        if cur.rowcount:
            _log.info("Product #%s deleted", product_id)

    # ---------------------------- Stock ----------------------------

    def _all_by_id(self) -> list[Product]:
        rows = self.conn.execute(f"SELECT {_COLUMNS} FROM products ORDER BY id").fetchall()
        return [Product(**r) for r in rows]

    def _history(self, product_id: int | None = None) -> tuple[list[sqlite3.Row], list[sqlite3.Row]]:
        where, params = ("", ()) if product_id is None else (" WHERE product_id=?", (product_id,))
        purchases = self.conn.execute(
            "SELECT product_id, quantity FROM purchases" + where, params
        ).fetchall()
        sold = self.conn.execute(
            "SELECT product_id, quantity FROM bill_items" + where, params
        ).fetchall()
        return purchases, sold

    def stock_levels(self) -> list[StockLevel]:
        """On-hand stock recomputed from purchase and sale history (quantity > 0 only)."""
        purchases, sold = self._history()
        return project_stock(self.list_products(), purchases, sold)

    def on_hand(self, product_id: int) -> float:
        purchases, sold = self._history(product_id)
        return max(0, on_hand_by_product(purchases, sold).get(int(product_id), 0))

    def sync_quantity_cache(self) -> None:
        """
        Rewrite products.quantity from the projection. The column is a display
        cache only; nothing reads it as the stock authority.
        """
        purchases, sold = self._history()
        balance = on_hand_by_product(purchases, sold)
        ids = [r["id"] for r in self.conn.execute("SELECT id FROM products").fetchall()]
        with self._immediate_tx():
            self.conn.executemany(
                "UPDATE products SET quantity=? WHERE id=?",
                [(max(0, balance.get(pid, 0)), pid) for pid in ids],
            )
