from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QCheckBox, QDateEdit, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget,
)
from ...widgets.table_view import TableView


class PurchaseView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.addWidget(QLabel("<h2>Purchases</h2>"))

        # actions
        row = QHBoxLayout()
        self.btn_add_new = QPushButton("Add New Item")
        self.btn_add_existing = QPushButton("Add Existing Item")
        self.btn_edit = QPushButton("Edit")
        self.btn_del = QPushButton("Delete")
        for b in (self.btn_add_new, self.btn_add_existing, self.btn_edit, self.btn_del):
            row.addWidget(b)
        row.addStretch(1)

        # date filter
        self.chk_date = QCheckBox("Only date:")
        self.filter_date = QDateEdit(QDate.currentDate())
        self.filter_date.setCalendarPopup(True)
        self.filter_date.setDisplayFormat("yyyy-MM-dd")
        self.filter_date.setEnabled(False)
        self.chk_date.toggled.connect(self.filter_date.setEnabled)
        self.btn_apply = QPushButton("Apply")
        row.addWidget(self.chk_date)
        row.addWidget(self.filter_date)
        row.addWidget(self.btn_apply)
        root.addLayout(row)

        self.tbl = TableView()
        self.tbl.setSortingEnabled(False)  # rows arrive newest first, one page at a time
        root.addWidget(self.tbl, 1)

        # paging
        pager = QHBoxLayout()
        self.lbl_count = QLabel()
        pager.addWidget(self.lbl_count)
        pager.addStretch(1)
        self.btn_prev = QPushButton("‹ Prev")
        self.lbl_page = QLabel()
        self.btn_next = QPushButton("Next ›")
        pager.addWidget(self.btn_prev)
        pager.addWidget(self.lbl_page)
        pager.addWidget(self.btn_next)
        root.addLayout(pager)

    def selected_date(self) -> str | None:
        if not self.chk_date.isChecked():
            return None
        return self.filter_date.date().toString("yyyy-MM-dd")
