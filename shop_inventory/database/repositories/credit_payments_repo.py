from __future__ import annotations

from contextlib import contextmanager
import logging
import sqlite3
from typing import Optional

from ...constants import PAYMENT_CREDIT
from .bills_repo import now_str

_log = logging.getLogger(__name__)


class CreditPaymentsRepo:
    """
    Repository for partial payments against credit bills (rows in credit_payments).

    Rules enforced here:
      • amount must be > 0; anything else is rejected without writing.
      • Payment against a missing bill is a silent no-op.
      • bills.amount_paid grows by the full amount; bills.credit_remaining
        shrinks but is clamped at 0. Capping the amount at the remaining
        balance is the caller's convention, not enforced here.
      • A bill is "outstanding" while payment_method='credit' AND
        credit_remaining > 0; there is no separate closed flag.
    """

    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row
        self.conn = conn

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

    # --- writes -------------------------------------------------------------

    def record_payment(self, bill_id: int, amount: float, payment_date: Optional[str] = None) -> int | None:
        """
        Apply `amount` to the bill and append a history row, atomically.
        Returns the credit_payments id, or None when nothing was written.
        """
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            _log.warning("Credit payment rejected: amount %r is not a number", amount)
            return None
        if amount <= 0:
            _log.warning("Credit payment rejected: amount must be positive (got %s)", amount)
            return None

        with self._immediate_tx():
            bill = self.conn.execute(
                "SELECT id, amount_paid, credit_remaining FROM bills WHERE id=?",
                (bill_id,),
            ).fetchone()
            if bill is None:
                _log.debug("Credit payment ignored: bill #%s not found", bill_id)
                return None
            new_paid = round(float(bill["amount_paid"] or 0.0) + amount, 2)
            new_remaining = round(max(0.0, float(bill["credit_remaining"] or 0.0) - amount), 2)
            cur = self.conn.execute(
                "INSERT INTO credit_payments (bill_id, amount, payment_date) VALUES (?, ?, ?)",
                (bill_id, amount, payment_date or now_str()),
            )
            self.conn.execute(
                "UPDATE bills SET amount_paid=?, credit_remaining=? WHERE id=?",
                (new_paid, new_remaining, bill_id),
            )
            payment_id = int(cur.lastrowid)

        _log.info(
            "Credit payment #%s on bill #%s: %.2f (remaining %.2f)",
            payment_id, bill_id, amount, new_remaining,
        )
        return payment_id

    # --- reads --------------------------------------------------------------

    def list_outstanding_bills(self) -> list[dict]:
        rows = self.conn.execute(
            """
            SELECT * FROM bills
            WHERE payment_method = ? AND credit_remaining > 0
            ORDER BY bill_date, id
            """,
            (PAYMENT_CREDIT,),
        ).fetchall()
        return [dict(r) for r in rows]

    def list_by_bill(self, bill_id: int) -> list[dict]:
        rows = self.conn.execute(
            """
            SELECT id, bill_id, CAST(amount AS REAL) AS amount, payment_date
            FROM credit_payments
            WHERE bill_id = ?
            ORDER BY payment_date, id
            """,
            (bill_id,),
        ).fetchall()
        return [dict(r) for r in rows]
