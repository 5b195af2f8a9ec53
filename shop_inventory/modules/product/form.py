from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QCheckBox, QDateEdit, QDialog, QDialogButtonBox, QDoubleSpinBox, QFormLayout,
    QHBoxLayout, QLabel, QLineEdit, QVBoxLayout,
)

from ...utils.validators import non_empty


def _date_edit(iso: str | None = None) -> QDateEdit:
    w = QDateEdit()
    w.setCalendarPopup(True)
    w.setDisplayFormat("yyyy-MM-dd")
    d = QDate.fromString((iso or "")[:10], "yyyy-MM-dd")
    w.setDate(d if d.isValid() else QDate.currentDate())
    return w


def _money_spin(value: float = 0.0) -> QDoubleSpinBox:
    w = QDoubleSpinBox()
    w.setDecimals(2)
    w.setRange(0.0, 1_000_000_000.0)
    w.setValue(float(value or 0.0))
    return w


class ProductForm(QDialog):
    """
    Add / edit a product. Quantity is shown but not edited: stock comes
    from purchases and sales.
    """

    def __init__(self, parent=None, initial_product=None):
        super().__init__(parent)
        self.setWindowTitle("Edit Product" if initial_product else "Add Product")
        self.setModal(True)
        self._payload = None
        root = QVBoxLayout(self)

        p = initial_product
        self.name = QLineEdit(p.name if p else "")
        self.name.setPlaceholderText("Product name")
        self.name_error = QLabel()
        self.name_error.setStyleSheet("color: red;")

        self.purchase_price = _money_spin(p.purchase_price if p else 0.0)
        self.sale_price = _money_spin(p.sale_price if p else 0.0)
        self.stock_entry_date = _date_edit(p.stock_entry_date if p else None)

        self.chk_expiry = QCheckBox("Has expiry date")
        self.expiry_date = _date_edit(p.expiry_date if p else None)
        self.chk_expiry.toggled.connect(self.expiry_date.setEnabled)
        self.chk_expiry.setChecked(bool(p and p.expiry_date))
        self.expiry_date.setEnabled(self.chk_expiry.isChecked())

        form = QFormLayout()
        name_row = QHBoxLayout()
        name_row.addWidget(self.name, 1)
        name_row.addWidget(self.name_error)
        form.addRow("Name*", name_row)
        if p is not None:
            form.addRow("Quantity", QLabel(str(p.quantity)))
        form.addRow("Purchase price", self.purchase_price)
        form.addRow("Sale price", self.sale_price)
        form.addRow("Stock entry date", self.stock_entry_date)
        expiry_row = QHBoxLayout()
        expiry_row.addWidget(self.chk_expiry)
        expiry_row.addWidget(self.expiry_date, 1)
        form.addRow("Expiry", expiry_row)
        root.addLayout(form)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)   # overridden accept()
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

    # ---------- payload & validation ----------
    def get_product_payload(self) -> dict | None:
        self.name_error.clear()
        if not non_empty(self.name.text()):
            self.name_error.setText("Name is required")
            self.name.setFocus()
            return None
        return {
            "name": self.name.text().strip(),
            "purchase_price": round(self.purchase_price.value(), 2),
            "sale_price": round(self.sale_price.value(), 2),
            "stock_entry_date": self.stock_entry_date.date().toString("yyyy-MM-dd"),
            "expiry_date": (
                self.expiry_date.date().toString("yyyy-MM-dd") if self.chk_expiry.isChecked() else None
            ),
        }

    def accept(self):
        payload = self.get_product_payload()
        if payload is None:
            # keep dialog open; controller won't lose user input
            return
        self._payload = payload
        super().accept()

    def payload(self):
        return self._payload
