from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
import logging
import sqlite3
from typing import Callable, Iterable, Optional

from ...constants import MISSING_PRODUCT_NAME, PAYMENT_CASH, PAYMENT_CREDIT, PAYMENT_METHODS
from .errors import InsufficientStock

_log = logging.getLogger(__name__)

StockLookup = Callable[[int], float]


def now_str() -> str:
    """Current local timestamp as 'YYYY-MM-DD HH:MM:SS'."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class BillItem:
    product_id: int
    quantity: int
    unit_price: float
    line_total: float | None = None
    id: int | None = None
    bill_id: int | None = None


@dataclass
class BillDraft:
    """
    Everything the caller supplies for a sale. amount_paid / credit_remaining
    and the customer fields only matter for credit bills.
    """
    payment_method: str
    total: float
    items: list[BillItem] = field(default_factory=list)
    amount_paid: float | None = None
    credit_remaining: float | None = None
    customer_name: str | None = None
    customer_mobile: str | None = None


class BillsRepo:
    """
    Sales bills + their immutable line items.

    Key behavior:
      - create_bill() writes the bill and every line item in ONE immediate
        transaction; readers never see a bill with some items missing.
      - Stock is not decremented anywhere: the projection reads bill_items.
      - amount_paid + credit_remaining == total at creation.
      - Optional stock bound: with enforce_stock=True the injected
        stock_lookup is consulted and InsufficientStock raised before writing.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        stock_lookup: Optional[StockLookup] = None,
        enforce_stock: bool = False,
    ):
        conn.row_factory = sqlite3.Row
        self.conn = conn
        self.stock_lookup = stock_lookup
        self.enforce_stock = enforce_stock

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

    # ---------------------------------------------------------------------
    # WRITE
    # ---------------------------------------------------------------------
    @staticmethod
    def _split_payment(draft: BillDraft, total: float) -> tuple[float, float]:
        """(amount_paid, credit_remaining) honoring amount_paid + credit_remaining == total."""
        if draft.payment_method == PAYMENT_CASH:
            return total, 0.0
        if draft.amount_paid is not None:
            paid = float(draft.amount_paid)
        elif draft.credit_remaining is not None:
            paid = total - float(draft.credit_remaining)
        else:
            paid = 0.0
        paid = round(min(max(0.0, paid), total), 2)
        return paid, round(total - paid, 2)

    def _validate(self, draft: BillDraft) -> list[BillItem] | None:
        if draft.payment_method not in PAYMENT_METHODS:
            _log.warning("Bill rejected: unknown payment method %r", draft.payment_method)
            return None
        if draft.total is None or float(draft.total) <= 0:
            _log.warning("Bill rejected: total must be positive (got %r)", draft.total)
            return None
        items = list(draft.items or [])
        if not items:
            _log.warning("Bill rejected: no line items")
            return None
        for it in items:
            if it.quantity is None or it.quantity <= 0 or it.unit_price is None or it.unit_price < 0:
                _log.warning("Bill rejected: invalid line %r", it)
                return None
        return items

    def _check_stock(self, items: Iterable[BillItem]) -> None:
        if not self.enforce_stock or self.stock_lookup is None:
            return
        wanted: dict[int, float] = {}
        for it in items:
            wanted[int(it.product_id)] = wanted.get(int(it.product_id), 0) + it.quantity
        for pid, qty in wanted.items():
            available = self.stock_lookup(pid)
            if qty > available:
                raise InsufficientStock(pid, qty, available)

    def create_bill(self, draft: BillDraft) -> int | None:
        """
        Persist a completed sale. Returns the new bill id, or None when the
        draft is rejected (non-positive total, no items, bad line or method).
        """
        items = self._validate(draft)
        if items is None:
            return None
        self._check_stock(items)

        total = round(float(draft.total), 2)
        amount_paid, credit_remaining = self._split_payment(draft, total)
        is_credit = draft.payment_method == PAYMENT_CREDIT
        customer_name = ((draft.customer_name or "").strip() or None) if is_credit else None
        customer_mobile = ((draft.customer_mobile or "").strip() or None) if is_credit else None

        with self._immediate_tx():
            cur = self.conn.execute(
                """
                INSERT INTO bills (
                    bill_date, payment_method, total, amount_paid, credit_remaining,
                    printed, customer_name, customer_mobile
                ) VALUES (?, ?, ?, ?, ?, 0, ?, ?)
                """,
                (
                    now_str(),
                    draft.payment_method,
                    total,
                    amount_paid,
                    credit_remaining,
                    customer_name,
                    customer_mobile,
                ),
            )
            bill_id = int(cur.lastrowid)
            written: list[tuple[BillItem, int, float]] = []
            for it in items:
                line_total = round(float(it.unit_price) * it.quantity, 2)
                icur = self.conn.execute(
                    """
                    INSERT INTO bill_items (bill_id, product_id, quantity, unit_price, line_total)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (bill_id, it.product_id, it.quantity, it.unit_price, line_total),
                )
                written.append((it, int(icur.lastrowid), line_total))

        # items only learn their ids once the bill is committed
        for it, item_id, line_total in written:
            it.id, it.bill_id, it.line_total = item_id, bill_id, line_total

        _log.info(
            "Bill #%s created: %s total=%.2f paid=%.2f remaining=%.2f items=%d",
            bill_id, draft.payment_method, total, amount_paid, credit_remaining, len(items),
        )
        return bill_id

    def set_printed(self, bill_id: int) -> None:
        """Flip printed 0 -> 1. Never flips back; unknown ids are ignored."""
        with self._immediate_tx():
            self.conn.execute("UPDATE bills SET printed=1 WHERE id=? AND printed=0", (bill_id,))

    # ---------------------------------------------------------------------
    # READ
    # ---------------------------------------------------------------------
    def get(self, bill_id: int) -> dict | None:
        row = self.conn.execute("SELECT * FROM bills WHERE id=?", (bill_id,)).fetchone()
        return dict(row) if row else None

    def list_bills(self, *, from_date: Optional[str] = None, to_date: Optional[str] = None) -> list[dict]:
        where: list[str] = []
        params: list = []
        if from_date:
            where.append("DATE(bill_date) >= DATE(?)")
            params.append(from_date)
        if to_date:
            where.append("DATE(bill_date) <= DATE(?)")
            params.append(to_date)
        sql = "SELECT * FROM bills"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY bill_date DESC, id DESC"
        return [dict(r) for r in self.conn.execute(sql, params).fetchall()]

    def list_items(self, bill_id: int) -> list[dict]:
        sql = """
        SELECT bi.id, bi.bill_id, bi.product_id,
               COALESCE(p.name, ?) AS product_name,
               bi.quantity,
               CAST(bi.unit_price AS REAL) AS unit_price,
               CAST(bi.line_total AS REAL) AS line_total
        FROM bill_items bi
        LEFT JOIN products p ON p.id = bi.product_id
        WHERE bi.bill_id = ?
        ORDER BY bi.id
        """
        return [dict(r) for r in self.conn.execute(sql, (MISSING_PRODUCT_NAME, bill_id)).fetchall()]

    def sales_summary(
        self,
        *,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        date: Optional[str] = None,
    ) -> list[dict]:
        """
        One row per sold line with its bill header and
        profit = (unit_price - purchase_price) * quantity.
        A deleted product contributes a purchase price of 0.
        """
        where: list[str] = []
        params: list = [MISSING_PRODUCT_NAME]
        if date:
            where.append("DATE(b.bill_date) = DATE(?)")
            params.append(date)
        if from_date:
            where.append("DATE(b.bill_date) >= DATE(?)")
            params.append(from_date)
        if to_date:
            where.append("DATE(b.bill_date) <= DATE(?)")
            params.append(to_date)
        sql = """
        SELECT bi.bill_id, b.bill_date, b.payment_method,
               CAST(b.total AS REAL)            AS total,
               CAST(b.amount_paid AS REAL)      AS amount_paid,
               CAST(b.credit_remaining AS REAL) AS credit_remaining,
               bi.product_id,
               COALESCE(p.name, ?)              AS product_name,
               bi.quantity,
               CAST(bi.unit_price AS REAL)      AS unit_price,
               CAST(bi.line_total AS REAL)      AS line_total,
               CAST(COALESCE(p.purchase_price, 0) AS REAL) AS purchase_price,
               (bi.unit_price - COALESCE(p.purchase_price, 0)) * bi.quantity AS profit
        FROM bill_items bi
        JOIN bills b         ON b.id = bi.bill_id
        LEFT JOIN products p ON p.id = bi.product_id
        """
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY b.bill_date DESC, bi.bill_id DESC, bi.id"
        return [dict(r) for r in self.conn.execute(sql, params).fetchall()]


def summarize_sales(rows: Iterable[dict]) -> dict:
    """
    Totals for a sales summary listing:
      quantity  = units sold across all lines
      revenue   = sum of each bill's total (counted once per bill)
      profit    = sum of line profits
      bills     = number of distinct bills
    """
    quantity = 0
    profit = 0.0
    totals: dict[int, float] = {}
    for r in rows:
        quantity += r["quantity"] or 0
        profit += float(r["profit"] or 0.0)
        totals.setdefault(int(r["bill_id"]), float(r["total"] or 0.0))
    return {
        "quantity": quantity,
        "revenue": round(sum(totals.values()), 2),
        "profit": round(profit, 2),
        "bills": len(totals),
    }
