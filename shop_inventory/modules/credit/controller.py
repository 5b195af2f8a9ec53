import logging
import sqlite3

from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .form import CreditPaymentDialog
from .model import CreditBillsModel, CreditItemsModel, CreditPaymentsModel
from .view import CreditView
from ...database.ledger import LedgerStore
from ...utils.helpers import fmt_money
from ...utils.ui_helpers import error, info

_log = logging.getLogger(__name__)


class CreditController(BaseModule):
    """Outstanding credit bills, their items and payment history."""

    def __init__(self, store: LedgerStore):
        super().__init__()
        self.store = store
        self.view = CreditView()
        self.bills = CreditBillsModel()
        self.items = CreditItemsModel()
        self.payments = CreditPaymentsModel()
        self.view.tbl_bills.setModel(self.bills)
        self.view.tbl_items.setModel(self.items)
        self.view.tbl_payments.setModel(self.payments)
        self._busy = False
        self.view.tbl_bills.selectionModel().selectionChanged.connect(self._on_selection)
        self.view.btn_pay.clicked.connect(self._pay)
        self.view.tbl_bills.doubleClicked.connect(lambda _idx: self._pay())
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def refresh(self):
        rows = self.store.get_bills_with_credit()
        self.bills.replace(rows)
        self.view.tbl_bills.resizeColumnsToContents()
        outstanding = sum(float(r["credit_remaining"] or 0) for r in rows)
        self.view.lbl_outstanding.setText(f"Outstanding: {fmt_money(outstanding)}")
        if rows:
            self.view.tbl_bills.selectRow(0)
        self._on_selection()

    def _selected(self) -> dict | None:
        idx = self.view.tbl_bills.selected_index()
        if idx is None:
            return None
        return self.bills.at(idx.row())

    def _on_selection(self, *_):
        bill = self._selected()
        if bill is None:
            self.items.replace([])
            self.payments.replace([])
            self.view.btn_pay.setEnabled(False)
            return
        self.items.replace(self.store.get_bill_items(bill["id"]))
        self.payments.replace(self.store.get_credit_payments(bill["id"]))
        self.view.btn_pay.setEnabled(not self._busy)

    def _pay(self):
        bill = self._selected()
        if bill is None:
            info(self.view, "Select", "Please select a credit bill.")
            return
        dlg = CreditPaymentDialog(self.view, bill_id=bill["id"], remaining=bill["credit_remaining"])
        if not dlg.exec():
            return
        self.pay(bill["id"], dlg.value())

    def pay(self, bill_id: int, amount: float) -> int | None:
        """Record one payment; guarded against double submission."""
        if self._busy:
            return None
        self._busy = True
        self.view.btn_pay.setEnabled(False)
        payment_id = None
        try:
            payment_id = self.store.add_credit_payment(bill_id, amount)
        except sqlite3.Error as e:
            _log.exception("Credit payment on bill #%s failed", bill_id)
            error(self.view, "Error", f"Could not record the payment. Nothing was changed.\n{e}")
        finally:
            self._busy = False
        self.refresh()
        return payment_id
