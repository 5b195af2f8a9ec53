from PySide6.QtWidgets import (
    QButtonGroup, QCheckBox, QDialog, QDialogButtonBox, QDoubleSpinBox, QFormLayout,
    QGroupBox, QHBoxLayout, QLabel, QLineEdit, QRadioButton, QVBoxLayout,
)

from ...constants import PAYMENT_CASH, PAYMENT_CREDIT
from ...utils.helpers import fmt_money


class BillPaymentDialog(QDialog):
    """
    Payment step of a bill: cash (paid in full) or credit with an optional
    amount paid now and the customer's name / mobile.
    """

    def __init__(self, parent=None, *, total: float):
        super().__init__(parent)
        self.setWindowTitle("Payment method")
        self.setModal(True)
        self._total = float(total)
        self._payload = None

        root = QVBoxLayout(self)
        root.addWidget(QLabel(f"<b>Total: {fmt_money(self._total)}</b>"))

        methods = QHBoxLayout()
        self.rb_cash = QRadioButton("Cash")
        self.rb_credit = QRadioButton("Credit")
        self.rb_cash.setChecked(True)
        self.group = QButtonGroup(self)
        self.group.addButton(self.rb_cash)
        self.group.addButton(self.rb_credit)
        methods.addWidget(self.rb_cash)
        methods.addWidget(self.rb_credit)
        methods.addStretch(1)
        root.addLayout(methods)

        self.credit_box = QGroupBox("Credit")
        form = QFormLayout(self.credit_box)
        self.paid_now = QDoubleSpinBox()
        self.paid_now.setDecimals(2)
        self.paid_now.setRange(0.0, self._total)
        self.lbl_remaining = QLabel()
        self.customer_name = QLineEdit()
        self.customer_name.setPlaceholderText("Optional")
        self.customer_mobile = QLineEdit()
        self.customer_mobile.setPlaceholderText("Optional")
        form.addRow("Paid now", self.paid_now)
        form.addRow("Remaining", self.lbl_remaining)
        form.addRow("Customer name", self.customer_name)
        form.addRow("Mobile", self.customer_mobile)
        root.addWidget(self.credit_box)

        self.chk_print = QCheckBox("Print receipt")
        self.chk_print.setChecked(True)
        root.addWidget(self.chk_print)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

        self.rb_credit.toggled.connect(self._sync)
        self.paid_now.valueChanged.connect(self._sync)
        self._sync()

    def method(self) -> str:
        return PAYMENT_CREDIT if self.rb_credit.isChecked() else PAYMENT_CASH

    def _sync(self, *_):
        credit = self.rb_credit.isChecked()
        self.credit_box.setEnabled(credit)
        self.lbl_remaining.setText(fmt_money(self._total - self.paid_now.value()))

    def get_payload(self) -> dict:
        if self.method() == PAYMENT_CASH:
            return {"payment_method": PAYMENT_CASH, "print": self.chk_print.isChecked()}
        return {
            "payment_method": PAYMENT_CREDIT,
            "amount_paid": round(self.paid_now.value(), 2),
            "customer_name": self.customer_name.text().strip() or None,
            "customer_mobile": self.customer_mobile.text().strip() or None,
            "print": self.chk_print.isChecked(),
        }

    def accept(self):
        self._payload = self.get_payload()
        super().accept()

    def payload(self):
        return self._payload
