from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLineEdit, QLabel
from ...widgets.table_view import TableView


class ProductView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("<h2>Products / Stock</h2>"))

        row = QHBoxLayout()
        self.btn_add = QPushButton("Add")
        self.btn_edit = QPushButton("Edit")
        self.btn_del = QPushButton("Delete")
        for b in (self.btn_add, self.btn_edit, self.btn_del):
            row.addWidget(b)
        row.addStretch(1)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search by name, id or date…")
        row.addWidget(QLabel("Search:"))
        row.addWidget(self.search, 2)
        layout.addLayout(row)

        # quantity is derived from purchases minus sales
        self.lbl_stock = QLabel()
        self.lbl_stock.setStyleSheet("color: #555;")
        layout.addWidget(self.lbl_stock)

        self.table = TableView()
        layout.addWidget(self.table, 1)
