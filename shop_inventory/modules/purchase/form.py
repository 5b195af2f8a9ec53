from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QDateEdit, QDialog, QDialogButtonBox, QDoubleSpinBox,
    QFormLayout, QHBoxLayout, QLabel, QLineEdit, QSpinBox, QVBoxLayout,
)

from ...constants import MAX_PURCHASE_QUANTITY
from ...utils.helpers import fmt_money
from ...utils.validators import non_empty, try_parse_float

MODE_NEW = "new"
MODE_EXISTING = "existing"
MODE_EDIT = "edit"


def _date_edit(iso: str | None = None) -> QDateEdit:
    w = QDateEdit()
    w.setCalendarPopup(True)
    w.setDisplayFormat("yyyy-MM-dd")
    d = QDate.fromString((iso or "")[:10], "yyyy-MM-dd")
    w.setDate(d if d.isValid() else QDate.currentDate())
    return w


class PurchaseForm(QDialog):
    """
    One dialog, three modes:
      new       product typed by name (matched or created by the ledger)
      existing  product picked from items already purchased before
      edit      quantity / value / dates / sale price of a recorded purchase
    """

    def __init__(self, parent=None, *, mode: str = MODE_NEW, products=None, initial: dict | None = None):
        super().__init__(parent)
        self.mode = mode
        self.setWindowTitle({
            MODE_NEW: "Add New Item",
            MODE_EXISTING: "Add Existing Item",
            MODE_EDIT: "Edit Purchase",
        }[mode])
        self.setModal(True)
        self._payload = None
        root = QVBoxLayout(self)
        form = QFormLayout()

        self.name = QLineEdit()
        self.cmb_product = QComboBox()
        if mode == MODE_NEW:
            self.name.setPlaceholderText("Enter product name")
            form.addRow("Name*", self.name)
        elif mode == MODE_EXISTING:
            self.cmb_product.addItem("Select product…", None)
            for p in products or []:
                self.cmb_product.addItem(p.name, p.id)
            form.addRow("Product*", self.cmb_product)
        else:
            form.addRow("Product", QLabel((initial or {}).get("product_name") or ""))

        init = initial or {}
        self.quantity = QSpinBox()
        self.quantity.setRange(1, MAX_PURCHASE_QUANTITY)
        self.quantity.setValue(int(init.get("quantity") or 1))
        form.addRow("Quantity", self.quantity)

        self.total_value = QDoubleSpinBox()
        self.total_value.setDecimals(2)
        self.total_value.setRange(0.0, 1_000_000_000.0)
        self.total_value.setValue(float(init.get("total_value") or 0.0))
        form.addRow("Total value*", self.total_value)

        self.lbl_unit = QLabel()
        form.addRow("Purchase price (single)", self.lbl_unit)

        self.sale_price = QLineEdit()
        self.sale_price.setPlaceholderText("Optional")
        if init.get("sale_price") is not None:
            self.sale_price.setText(f"{float(init['sale_price']):.2f}")
        form.addRow("Sale price (single)", self.sale_price)

        self.purchase_date = _date_edit(init.get("purchase_date"))
        form.addRow("Purchase date", self.purchase_date)

        self.chk_expiry = QCheckBox("Has expiry date")
        self.expiry_date = _date_edit(init.get("expiry_date"))
        self.chk_expiry.toggled.connect(self.expiry_date.setEnabled)
        self.chk_expiry.setChecked(bool(init.get("expiry_date")))
        self.expiry_date.setEnabled(self.chk_expiry.isChecked())
        expiry_row = QHBoxLayout()
        expiry_row.addWidget(self.chk_expiry)
        expiry_row.addWidget(self.expiry_date, 1)
        form.addRow("Expiry", expiry_row)

        root.addLayout(form)
        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet("color: red;")
        root.addWidget(self.lbl_error)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)   # overridden accept()
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

        self.quantity.valueChanged.connect(self._update_unit)
        self.total_value.valueChanged.connect(self._update_unit)
        self._update_unit()

    def _update_unit(self, *_):
        qty = self.quantity.value()
        self.lbl_unit.setText(fmt_money(self.total_value.value() / qty) if qty else "")

    # ---------- payload & validation ----------
    def get_payload(self) -> dict | None:
        self.lbl_error.clear()
        data = {
            "quantity": self.quantity.value(),
            "total_value": round(self.total_value.value(), 2),
            "purchase_date": self.purchase_date.date().toString("yyyy-MM-dd"),
            "expiry_date": (
                self.expiry_date.date().toString("yyyy-MM-dd") if self.chk_expiry.isChecked() else None
            ),
            "sale_price": None,
        }
        if data["total_value"] <= 0:
            self.lbl_error.setText("Total value must be greater than zero.")
            self.total_value.setFocus()
            return None
        txt = self.sale_price.text().strip()
        if txt:
            ok, val = try_parse_float(txt)
            if not ok or val < 0:
                self.lbl_error.setText("Sale price must be a non-negative number.")
                self.sale_price.setFocus()
                return None
            data["sale_price"] = round(val, 2)

        if self.mode == MODE_NEW:
            if not non_empty(self.name.text()):
                self.lbl_error.setText("Name is required.")
                self.name.setFocus()
                return None
            data["name"] = self.name.text().strip()
        elif self.mode == MODE_EXISTING:
            pid = self.cmb_product.currentData()
            if pid is None:
                self.lbl_error.setText("Select a product.")
                self.cmb_product.setFocus()
                return None
            data["product_id"] = int(pid)
        return data

    def accept(self):
        payload = self.get_payload()
        if payload is None:
            return
        self._payload = payload
        super().accept()

    def payload(self):
        return self._payload
