import logging
import sqlite3

from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .model import BillLinesModel, max_quantity
from .payment_form import BillPaymentDialog
from .view import BillView
from ...database.ledger import LedgerStore
from ...database.repositories.errors import InsufficientStock
from ...utils.helpers import fmt_money
from ...utils.ui_helpers import error, info
from ...widgets.receipt_preview import ReceiptPreview

_log = logging.getLogger(__name__)


class BillController(BaseModule):
    """
    Point-of-sale screen. Products come from sellable stock (in stock and not
    near expiry); a bill is written only once, guarded by a busy flag while
    the ledger call is in flight.
    """

    def __init__(self, store: LedgerStore):
        super().__init__()
        self.store = store
        self.view = BillView()
        self.lines = BillLinesModel()
        self.view.tbl.setModel(self.lines)
        self._stock = {}
        self._busy = False
        self._wire()
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def _wire(self):
        self.view.cmb_product.currentIndexChanged.connect(self._on_product_changed)
        self.view.btn_add.clicked.connect(self._add_line)
        self.view.btn_remove.clicked.connect(self._remove_line)
        self.view.btn_clear.clicked.connect(self._clear)
        self.view.btn_complete.clicked.connect(self._complete)
        self.lines.rowsInserted.connect(self._update_total)
        self.lines.rowsRemoved.connect(self._update_total)
        self.lines.modelReset.connect(self._update_total)
        self.lines.dataChanged.connect(self._update_total)

    # ---------- stock picker ----------
    def refresh(self):
        levels = self.store.get_sellable_stock()
        self._stock = {lv.id: lv for lv in levels}
        cmb = self.view.cmb_product
        cmb.blockSignals(True)
        cmb.clear()
        cmb.addItem("Select product", None)
        for lv in levels:
            cmb.addItem(f"{lv.name} ({fmt_money(lv.sale_price)})", lv.id)
        cmb.blockSignals(False)
        self._on_product_changed()
        self._update_total()

    def _on_product_changed(self, *_):
        level = self._stock.get(self.view.cmb_product.currentData())
        if level is None:
            self.view.spin_qty.setRange(1, 1)
            self.view.lbl_available.setText("")
            self.view.btn_add.setEnabled(False)
            return
        in_cart = sum(l.quantity for l in self.lines.lines() if l.product_id == level.id)
        room = max_quantity(level.quantity) - in_cart
        self.view.spin_qty.setRange(1, max(1, room))
        self.view.lbl_available.setText(f"{level.quantity:g} in stock")
        self.view.btn_add.setEnabled(room > 0)

    def _add_line(self):
        level = self._stock.get(self.view.cmb_product.currentData())
        if level is None:
            return
        self.lines.add(level, self.view.spin_qty.value())
        self.view.spin_qty.setValue(1)
        self._on_product_changed()

    def _remove_line(self):
        idx = self.view.tbl.selected_index()
        if idx is not None:
            self.lines.remove(idx.row())
            self._on_product_changed()

    def _clear(self):
        self.lines.clear()
        self._on_product_changed()

    def _update_total(self, *_):
        total = self.lines.total()
        self.view.lbl_total.setText(f"Total: {fmt_money(total)}")
        self.view.btn_complete.setEnabled(total > 0 and not self._busy)

    # ---------- completing a bill ----------
    def _complete(self):
        if self._busy:
            return
        total = self.lines.total()
        if total <= 0:
            info(self.view, "Bill", "Add at least one item first.")
            return
        dlg = BillPaymentDialog(self.view, total=total)
        if not dlg.exec():
            return
        payment = dict(dlg.payload())
        do_print = payment.pop("print", False)
        bill_id = self.submit(**payment)
        if bill_id is not None and do_print:
            self.show_receipt(bill_id)

    def submit(self, payment_method: str, **payment) -> int | None:
        """
        Write the current cart as one bill. Returns the bill id; on failure
        the cart is kept so the user can retry.
        """
        if self._busy:
            _log.debug("Bill submit ignored: already in flight")
            return None
        self._busy = True
        self.view.btn_complete.setEnabled(False)
        bill_id = None
        try:
            bill_id = self.store.create_bill(
                payment_method,
                self.lines.total(),
                self.lines.items(),
                **payment,
            )
        except InsufficientStock as e:
            error(self.view, "Not enough stock", str(e))
        except sqlite3.Error as e:
            _log.exception("Saving bill failed")
            error(self.view, "Error", f"Could not save the bill. Nothing was recorded.\n{e}")
        else:
            if bill_id is None:
                error(self.view, "Bill", "The bill was rejected. Check the items and try again.")
        finally:
            self._busy = False

        if bill_id is None:
            self._update_total()
            return None
        self.lines.clear()
        self.refresh()
        return bill_id

    def show_receipt(self, bill_id: int):
        bill = self.store.get_bill(bill_id)
        if bill is None:
            return
        dlg = ReceiptPreview(
            bill,
            self.store.get_bill_items(bill_id),
            parent=self.view,
            on_printed=lambda: self.store.set_bill_printed(bill_id),
        )
        dlg.exec()
