from PySide6.QtCore import QSortFilterProxyModel
from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .model import SalesLinesModel
from .view import SalesView
from ...database.ledger import LedgerStore
from ...database.repositories.bills_repo import summarize_sales
from ...utils.helpers import fmt_money
from ...utils.ui_helpers import info
from ...widgets.receipt_preview import ReceiptPreview


class SalesController(BaseModule):
    def __init__(self, store: LedgerStore):
        super().__init__()
        self.store = store
        self.view = SalesView()
        self.model = SalesLinesModel([])
        self.proxy = QSortFilterProxyModel(self.view)
        self.proxy.setSourceModel(self.model)
        self.view.tbl.setModel(self.proxy)
        self.view.btn_apply.clicked.connect(self.refresh)
        self.view.btn_receipt.clicked.connect(self._show_receipt)
        self.summary: dict = {}
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def refresh(self):
        from_date, to_date = self.view.date_range()
        rows = self.store.get_sales_summary(from_date=from_date, to_date=to_date)
        self.model.replace(rows)
        self.view.tbl.resizeColumnsToContents()
        self.summary = summarize_sales(rows)
        self.view.lbl_summary.setText(
            f"Bills: {self.summary['bills']}   |   "
            f"Total quantity sold: {self.summary['quantity']}   |   "
            f"Total revenue: {fmt_money(self.summary['revenue'])}   |   "
            f"Total profit: {fmt_money(self.summary['profit'])}"
        )

    def _show_receipt(self):
        idx = self.view.tbl.selected_index()
        if idx is None:
            info(self.view, "Select", "Please select a sale line first.")
            return
        bill_id = int(self.model.at(self.proxy.mapToSource(idx).row())["bill_id"])
        bill = self.store.get_bill(bill_id)
        if bill is None:
            return
        ReceiptPreview(
            bill,
            self.store.get_bill_items(bill_id),
            parent=self.view,
            on_printed=lambda: self.store.set_bill_printed(bill_id),
        ).exec()
