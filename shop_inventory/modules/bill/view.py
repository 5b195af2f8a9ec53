from PySide6.QtWidgets import (
    QComboBox, QHBoxLayout, QLabel, QPushButton, QSpinBox, QVBoxLayout, QWidget,
)
from ...widgets.table_view import TableView


class BillView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.addWidget(QLabel("<h2>Bill</h2>"))

        # product picker
        row = QHBoxLayout()
        self.cmb_product = QComboBox()
        self.cmb_product.setMinimumWidth(260)
        self.spin_qty = QSpinBox()
        self.spin_qty.setRange(1, 1)
        self.lbl_available = QLabel()
        self.btn_add = QPushButton("Add item")
        row.addWidget(QLabel("Product:"))
        row.addWidget(self.cmb_product, 2)
        row.addWidget(QLabel("Qty:"))
        row.addWidget(self.spin_qty)
        row.addWidget(self.lbl_available)
        row.addWidget(self.btn_add)
        row.addStretch(1)
        root.addLayout(row)

        self.tbl = TableView()
        self.tbl.setSortingEnabled(False)
        root.addWidget(self.tbl, 1)

        bottom = QHBoxLayout()
        self.btn_remove = QPushButton("Remove")
        self.btn_clear = QPushButton("Clear")
        bottom.addWidget(self.btn_remove)
        bottom.addWidget(self.btn_clear)
        bottom.addStretch(1)
        self.lbl_total = QLabel()
        self.lbl_total.setStyleSheet("font-size: 16px; font-weight: bold;")
        bottom.addWidget(self.lbl_total)
        self.btn_complete = QPushButton("Complete bill")
        bottom.addWidget(self.btn_complete)
        root.addLayout(bottom)
