from PySide6.QtWidgets import (
    QDialog, QDialogButtonBox, QDoubleSpinBox, QFormLayout, QLabel, QVBoxLayout,
)

from ...utils.helpers import fmt_money


class CreditPaymentDialog(QDialog):
    """Amount to pay against one credit bill; never more than what remains."""

    def __init__(self, parent=None, *, bill_id: int, remaining: float):
        super().__init__(parent)
        self.setWindowTitle(f"Add payment - Bill #{bill_id}")
        self.setModal(True)
        self._remaining = round(float(remaining), 2)

        root = QVBoxLayout(self)
        form = QFormLayout()
        form.addRow("Remaining", QLabel(fmt_money(self._remaining)))
        self.amount = QDoubleSpinBox()
        self.amount.setDecimals(2)
        self.amount.setRange(0.01, max(0.01, self._remaining))
        self.amount.setValue(max(0.01, self._remaining))
        form.addRow("Amount to pay", self.amount)
        root.addLayout(form)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.button(QDialogButtonBox.Ok).setText("Pay")
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

    def value(self) -> float:
        return min(round(self.amount.value(), 2), self._remaining)
