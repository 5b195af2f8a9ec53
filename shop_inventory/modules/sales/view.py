from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QCheckBox, QDateEdit, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget,
)
from ...widgets.table_view import TableView


def _date_filter(label: str) -> tuple[QCheckBox, QDateEdit]:
    chk = QCheckBox(label)
    edit = QDateEdit(QDate.currentDate())
    edit.setCalendarPopup(True)
    edit.setDisplayFormat("yyyy-MM-dd")
    edit.setEnabled(False)
    chk.toggled.connect(edit.setEnabled)
    return chk, edit


class SalesView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.addWidget(QLabel("<h2>Sales</h2>"))

        # filters
        row = QHBoxLayout()
        self.chk_from, self.from_date = _date_filter("From:")
        self.chk_to, self.to_date = _date_filter("To:")
        self.btn_apply = QPushButton("Apply")
        for w in (self.chk_from, self.from_date, self.chk_to, self.to_date, self.btn_apply):
            row.addWidget(w)
        row.addStretch(1)
        self.btn_receipt = QPushButton("Show Receipt")
        row.addWidget(self.btn_receipt)
        root.addLayout(row)

        # summary
        self.lbl_summary = QLabel()
        self.lbl_summary.setStyleSheet("font-weight: bold;")
        root.addWidget(self.lbl_summary)

        self.tbl = TableView()
        root.addWidget(self.tbl, 1)

    def date_range(self) -> tuple[str | None, str | None]:
        from_date = self.from_date.date().toString("yyyy-MM-dd") if self.chk_from.isChecked() else None
        to_date = self.to_date.date().toString("yyyy-MM-dd") if self.chk_to.isChecked() else None
        return from_date, to_date
