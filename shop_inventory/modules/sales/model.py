from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QBrush, QColor
from ...constants import PAYMENT_CREDIT
from ...utils.helpers import fmt_money


class SalesLinesModel(QAbstractTableModel):
    """One row per sold line (sales summary), newest bill first."""
    HEADERS = ["Bill", "Date", "Method", "Product", "Qty", "Unit price", "Line total", "Profit"]

    def __init__(self, rows: list[dict]):
        super().__init__()
        self._rows = rows

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        r = self._rows[index.row()]
        c = index.column()
        if role in (Qt.DisplayRole, Qt.EditRole):
            mapping = [
                f"#{r['bill_id']}",
                (r["bill_date"] or "")[:16],
                r["payment_method"].capitalize(),
                r["product_name"],
                r["quantity"],
                fmt_money(r["unit_price"]),
                fmt_money(r["line_total"]),
                fmt_money(r["profit"]),
            ]
            return mapping[c]
        if role == Qt.TextAlignmentRole and c >= 4:
            return Qt.AlignRight | Qt.AlignVCenter
        if role == Qt.ForegroundRole and c == 7 and float(r["profit"] or 0) < 0:
            return QBrush(QColor("#b10000"))
        if role == Qt.ToolTipRole and r["payment_method"] == PAYMENT_CREDIT and r["credit_remaining"]:
            return f"Credit remaining: {fmt_money(r['credit_remaining'])}"
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> dict:
        return self._rows[row]

    def replace(self, rows: list[dict]):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()
