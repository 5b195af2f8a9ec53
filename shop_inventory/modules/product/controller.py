import logging
import sqlite3

from PySide6.QtCore import Qt, QRegularExpression
from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .view import ProductView
from .form import ProductForm
from .model import ProductsTableModel, ProductFilterProxy
from ...database.ledger import LedgerStore
from ...utils.ui_helpers import confirm, error, info

_log = logging.getLogger(__name__)


class ProductController(BaseModule):
    def __init__(self, store: LedgerStore):
        super().__init__()
        self.store = store
        self.view = ProductView()
        self._wired = False  # ensure signals are connected only once
        self._build_model()
        self._connect_signals()

    def get_widget(self) -> QWidget:
        return self.view

    def _connect_signals(self):
        if self._wired:
            return
        self.view.btn_add.clicked.connect(self._add)
        self.view.btn_edit.clicked.connect(self._edit)
        self.view.btn_del.clicked.connect(self._delete)
        self.view.search.textChanged.connect(self._apply_filter)
        self.view.table.doubleClicked.connect(lambda _idx: self._edit())
        self._wired = True

    def _build_model(self):
        self.base_model = ProductsTableModel(self.store.get_products())
        self.proxy = ProductFilterProxy(self.view)
        self.proxy.setSourceModel(self.base_model)
        self.proxy.setFilterCaseSensitivity(Qt.CaseInsensitive)
        self.view.table.setModel(self.proxy)
        self.view.table.resizeColumnsToContents()
        self._update_stock_label()

    def refresh(self):
        self.base_model.replace(self.store.get_products())
        self._update_stock_label()

    def _update_stock_label(self):
        products = self.base_model.rowCount()
        in_stock = len(self.store.get_stock_with_quantity())
        self.view.lbl_stock.setText(f"{products} product(s), {in_stock} in stock")

    def _apply_filter(self, text: str):
        self.proxy.setFilterRegularExpression(
            QRegularExpression(QRegularExpression.escape(text), QRegularExpression.CaseInsensitiveOption)
        )

    def _selected_id(self) -> int | None:
        idx = self.view.table.selected_index()
        if idx is None:
            return None
        src_index = self.proxy.mapToSource(idx)
        return self.base_model.at(src_index.row()).id

    def _add(self):
        dlg = ProductForm(self.view)
        if not dlg.exec():
            return
        data = dlg.payload()
        if not data:
            return
        try:
            pid = self.store.add_product(**data)
        except sqlite3.Error as e:
            _log.exception("Saving product failed")
            error(self.view, "Error", f"Could not save the product:\n{e}")
            return
        info(self.view, "Saved", f"Product #{pid} created.")
        self.refresh()

    def _edit(self):
        pid = self._selected_id()
        if not pid:
            info(self.view, "Select", "Please select a product to edit.")
            return
        current = self.store.get_product_by_id(pid)
        if current is None:
            self.refresh()
            return
        dlg = ProductForm(self.view, initial_product=current)
        if not dlg.exec():
            return
        data = dlg.payload()
        if not data:
            return
        try:
            self.store.update_product(pid, **data)
        except sqlite3.Error as e:
            _log.exception("Updating product #%s failed", pid)
            error(self.view, "Error", f"Could not update the product:\n{e}")
            return
        info(self.view, "Saved", f"Product #{pid} updated.")
        self.refresh()

    def _delete(self):
        """
        Delete the selected product. Purchases and bills that mention it stay;
        they show the product as missing afterwards.
        """
        pid = self._selected_id()
        if not pid:
            info(self.view, "Select", "Please select a product to delete.")
            return
        if not confirm(self.view, "Delete", "Delete this product?"):
            return
        try:
            self.store.delete_product(pid)
        except sqlite3.Error as e:
            _log.exception("Deleting product #%s failed", pid)
            error(self.view, "Error", f"Could not delete the product:\n{e}")
            return
        info(self.view, "Deleted", f"Product #{pid} deleted.")
        self.refresh()
