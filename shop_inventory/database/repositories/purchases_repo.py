"""
Repository for stock intake (purchases).

Conventions:
- List-returning methods yield `list[dict]` (sqlite3.Row -> dict) with the
  product name joined in; a deleted product shows as MISSING_PRODUCT_NAME.
- purchase_date / expiry_date are ISO 'YYYY-MM-DD'.
- Recording or editing a purchase overwrites the product's sale price and
  expiry date when those are supplied (last write wins).
- Stock is never adjusted here; it is projected from purchases and bill items.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
import logging
import sqlite3
from typing import Optional

from ...constants import MISSING_PRODUCT_NAME, PURCHASE_PAGE_MAX, PURCHASE_PAGE_SIZE
from .products_repo import ProductsRepo

_log = logging.getLogger(__name__)


@dataclass
class Purchase:
    id: int | None
    product_id: int
    quantity: int
    total_value: float
    purchase_date: str
    expiry_date: str | None = None
    sale_price: float | None = None


_SELECT = """
    SELECT pur.id, pur.product_id, pur.quantity,
           CAST(pur.total_value AS REAL) AS total_value,
           pur.purchase_date, pur.expiry_date, pur.sale_price,
           COALESCE(p.name, ?) AS product_name
    FROM purchases pur
    LEFT JOIN products p ON p.id = pur.product_id
"""


class PurchasesRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.conn.row_factory = sqlite3.Row

    @contextmanager
    def _immediate_tx(self):
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

    # ---------- Query ----------
    def list_purchases(
        self,
        *,
        date: Optional[str] = None,
        limit: int = PURCHASE_PAGE_SIZE,
        offset: int = 0,
    ) -> list[dict]:
        """
        One page of purchases, newest first, optionally restricted to a single day.
        """
        params: list = [MISSING_PRODUCT_NAME]
        sql = _SELECT
        if date:
            sql += " WHERE DATE(pur.purchase_date) = DATE(?)"
            params.append(date)
        sql += " ORDER BY pur.purchase_date DESC, pur.id DESC LIMIT ? OFFSET ?"
        params += [self._normalize_limit(limit), self._normalize_offset(offset)]
        rows = self.conn.execute(sql, params).fetchall()
        return [dict(r) for r in rows]

    def count_purchases(self, *, date: Optional[str] = None) -> int:
        sql = "SELECT COUNT(*) FROM purchases"
        params: tuple = ()
        if date:
            sql += " WHERE DATE(purchase_date) = DATE(?)"
            params = (date,)
        return int(self.conn.execute(sql, params).fetchone()[0])

    def get(self, purchase_id: int) -> dict | None:
        row = self.conn.execute(_SELECT + " WHERE pur.id = ?", (MISSING_PRODUCT_NAME, purchase_id)).fetchone()
        return dict(row) if row else None

    # ---------- Writes ----------
    def _apply_product_side_effects(self, product_id: int, expiry_date: str | None, sale_price: float | None):
        if expiry_date:
            self.conn.execute("UPDATE products SET expiry_date=? WHERE id=?", (expiry_date, product_id))
        if sale_price is not None:
            self.conn.execute("UPDATE products SET sale_price=? WHERE id=?", (sale_price, product_id))

    def _insert(self, p: Purchase) -> int:
        cur = self.conn.execute(
            """
            INSERT INTO purchases(product_id, quantity, total_value, purchase_date, expiry_date, sale_price)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (p.product_id, p.quantity, p.total_value, p.purchase_date, p.expiry_date or None, p.sale_price),
        )
        self._apply_product_side_effects(p.product_id, p.expiry_date, p.sale_price)
        return int(cur.lastrowid)

    def create(self, p: Purchase) -> int:
        with self._immediate_tx():
            pid = self._insert(p)
        _log.info("Purchase #%s recorded: product #%s x %s", pid, p.product_id, p.quantity)
        return pid

    def record_intake(self, products: ProductsRepo, name: str, p: Purchase) -> tuple[int, int]:
        """
        Find the product by name or create it, then insert the purchase, all in
        one transaction. `p.product_id` is filled in here. A new product takes its
        cost from total_value / quantity and its entry date from the purchase.
        Returns (product_id, purchase_id).
        """
        with self._immediate_tx():
            product = products.find_by_name(name)
            if product is None:
                unit_cost = round(float(p.total_value) / p.quantity, 2) if p.quantity else 0.0
                product_id = products.insert_row(
                    name.strip(),
                    purchase_price=unit_cost,
                    sale_price=unit_cost if p.sale_price is None else p.sale_price,
                    stock_entry_date=p.purchase_date,
                    expiry_date=p.expiry_date,
                )
                _log.info("Product #%s created by intake (%s)", product_id, name.strip())
            else:
                product_id = int(product.id)
                _log.debug("Intake for %r matched product #%s", name, product_id)
            p.product_id = product_id
            purchase_id = self._insert(p)
        _log.info("Purchase #%s recorded: product #%s x %s", purchase_id, product_id, p.quantity)
        return product_id, purchase_id

    def update(self, p: Purchase) -> None:
        """
        Replace the editable fields of an existing purchase. Unknown ids are ignored.
        Resulting stock is not re-validated.
        """
        row = self.conn.execute("SELECT product_id FROM purchases WHERE id=?", (p.id,)).fetchone()
        if row is None:
            _log.debug("update: purchase #%s not found", p.id)
            return
        product_id = int(row["product_id"])
        with self._immediate_tx():
            self.conn.execute(
                """
                UPDATE purchases
                   SET quantity=?, total_value=?, purchase_date=?, expiry_date=?, sale_price=?
                 WHERE id=?
                """,
                (p.quantity, p.total_value, p.purchase_date, p.expiry_date or None, p.sale_price, p.id),
            )
            self._apply_product_side_effects(product_id, p.expiry_date, p.sale_price)

    def delete(self, purchase_id: int) -> None:
        with self._immediate_tx():
            cur = self.conn.execute("DELETE FROM purchases WHERE id=?", (purchase_id,))
        if cur.rowcount:
            _log.info("Purchase #%s deleted", purchase_id)

    # ---------- Utilities ----------
    @staticmethod
    def _normalize_limit(limit) -> int:
        """Clamp the page size to 1..PURCHASE_PAGE_MAX; fall back to the default page size."""
        try:
            v = int(limit)
        except (TypeError, ValueError):
            return PURCHASE_PAGE_SIZE
        if v == 0:
            return PURCHASE_PAGE_SIZE
        return max(1, min(PURCHASE_PAGE_MAX, v))

    @staticmethod
    def _normalize_offset(offset) -> int:
        try:
            return max(0, int(offset))
        except (TypeError, ValueError):
            return 0
