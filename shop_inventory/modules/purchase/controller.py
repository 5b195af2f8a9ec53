import logging
import math
import sqlite3

from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .view import PurchaseView
from .form import MODE_EDIT, MODE_EXISTING, MODE_NEW, PurchaseForm
from .model import PurchasesTableModel
from ...constants import PURCHASE_PAGE_SIZE
from ...database.ledger import LedgerStore
from ...utils.ui_helpers import confirm, error, info

_log = logging.getLogger(__name__)


class PurchaseController(BaseModule):
    def __init__(self, store: LedgerStore):
        super().__init__()
        self.store = store
        self.view = PurchaseView()
        self.page = 1
        self.total_count = 0
        self.model = PurchasesTableModel([])
        self.view.tbl.setModel(self.model)
        self._wire()
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def _wire(self):
        self.view.btn_add_new.clicked.connect(self._add_new)
        self.view.btn_add_existing.clicked.connect(self._add_existing)
        self.view.btn_edit.clicked.connect(self._edit)
        self.view.btn_del.clicked.connect(self._delete)
        self.view.btn_apply.clicked.connect(self._apply_filter)
        self.view.btn_prev.clicked.connect(self._prev)
        self.view.btn_next.clicked.connect(self._next)
        self.view.tbl.doubleClicked.connect(lambda _idx: self._edit())

    # ---------- paging ----------
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_count / PURCHASE_PAGE_SIZE))

    def refresh(self):
        date = self.view.selected_date()
        self.total_count = self.store.get_purchases_count(date=date)
        self.page = min(max(1, self.page), self.total_pages())
        rows = self.store.get_purchases(
            date=date,
            limit=PURCHASE_PAGE_SIZE,
            offset=(self.page - 1) * PURCHASE_PAGE_SIZE,
        )
        self.model.replace(rows)
        self.view.tbl.resizeColumnsToContents()
        self.view.lbl_count.setText(f"{self.total_count} purchase(s)")
        self.view.lbl_page.setText(f"Page {self.page} of {self.total_pages()}")
        self.view.btn_prev.setEnabled(self.page > 1)
        self.view.btn_next.setEnabled(self.page < self.total_pages())

    def _apply_filter(self):
        self.page = 1
        self.refresh()

    def _prev(self):
        if self.page > 1:
            self.page -= 1
            self.refresh()

    def _next(self):
        if self.page < self.total_pages():
            self.page += 1
            self.refresh()

    def _selected(self) -> dict | None:
        idx = self.view.tbl.selected_index()
        if idx is None:
            return None
        return self.model.at(idx.row())

    # ---------- actions ----------
    def _add_new(self):
        dlg = PurchaseForm(self.view, mode=MODE_NEW)
        if not dlg.exec():
            return
        data = dlg.payload()
        try:
            _product_id, purchase_id = self.store.record_intake(**data)
        except sqlite3.Error as e:
            _log.exception("Recording purchase failed")
            error(self.view, "Error", f"Could not record the purchase:\n{e}")
            return
        info(self.view, "Saved", f"Purchase #{purchase_id} recorded.")
        self.refresh()

    def _add_existing(self):
        products = self.store.get_products_from_purchases()
        if not products:
            info(self.view, "No items", "No previously purchased items yet. Use “Add New Item”.")
            return
        dlg = PurchaseForm(self.view, mode=MODE_EXISTING, products=products)
        if not dlg.exec():
            return
        data = dlg.payload()
        try:
            purchase_id = self.store.add_purchase(**data)
        except sqlite3.Error as e:
            _log.exception("Recording purchase failed")
            error(self.view, "Error", f"Could not record the purchase:\n{e}")
            return
        info(self.view, "Saved", f"Purchase #{purchase_id} recorded.")
        self.refresh()

    def _edit(self):
        row = self._selected()
        if not row:
            info(self.view, "Select", "Please select a purchase to edit.")
            return
        dlg = PurchaseForm(self.view, mode=MODE_EDIT, initial=row)
        if not dlg.exec():
            return
        data = dlg.payload()
        try:
            self.store.update_purchase(row["id"], **data)
        except sqlite3.Error as e:
            _log.exception("Updating purchase #%s failed", row["id"])
            error(self.view, "Error", f"Could not update the purchase:\n{e}")
            return
        self.refresh()

    def _delete(self):
        row = self._selected()
        if not row:
            info(self.view, "Select", "Please select a purchase to delete.")
            return
        if not confirm(self.view, "Delete", f"Delete purchase #{row['id']}?"):
            return
        try:
            self.store.delete_purchase(row["id"])
        except sqlite3.Error as e:
            _log.exception("Deleting purchase #%s failed", row["id"])
            error(self.view, "Error", f"Could not delete the purchase:\n{e}")
            return
        self.refresh()
