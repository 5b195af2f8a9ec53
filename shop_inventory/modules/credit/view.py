from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox, QHBoxLayout, QLabel, QPushButton, QSplitter, QVBoxLayout, QWidget,
)
from ...widgets.table_view import TableView


class CreditView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.addWidget(QLabel("<h2>Credit</h2>"))
        intro = QLabel(
            "Bills on credit. Add a payment to reduce the remaining amount; "
            "a bill stays here until nothing remains."
        )
        intro.setWordWrap(True)
        root.addWidget(intro)

        row = QHBoxLayout()
        self.btn_pay = QPushButton("Add Payment")
        row.addWidget(self.btn_pay)
        row.addStretch(1)
        self.lbl_outstanding = QLabel()
        row.addWidget(self.lbl_outstanding)
        root.addLayout(row)

        split = QSplitter(Qt.Vertical)
        self.tbl_bills = TableView()
        split.addWidget(self.tbl_bills)

        lower = QWidget()
        lower_lay = QHBoxLayout(lower)
        lower_lay.setContentsMargins(0, 0, 0, 0)
        items_box = QGroupBox("Items")
        self.tbl_items = TableView()
        QVBoxLayout(items_box).addWidget(self.tbl_items)
        pays_box = QGroupBox("Payments")
        self.tbl_payments = TableView()
        QVBoxLayout(pays_box).addWidget(self.tbl_payments)
        lower_lay.addWidget(items_box, 3)
        lower_lay.addWidget(pays_box, 2)
        split.addWidget(lower)
        split.setStretchFactor(0, 3)
        split.setStretchFactor(1, 2)
        root.addWidget(split, 1)
