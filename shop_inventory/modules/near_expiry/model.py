from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QBrush, QColor

from ...utils.helpers import fmt_date, fmt_money
from ...utils.stock import NearExpiryItem


def days_label(days: int) -> str:
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day"
    return f"{days} days"


class NearExpiryModel(QAbstractTableModel):
    HEADERS = ["No", "Product", "Quantity", "Purchase price", "Sale price", "Expiry date", "Days until expiry"]

    def __init__(self, rows: list[NearExpiryItem] | None = None):
        super().__init__()
        self._rows = list(rows or [])

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        item = self._rows[index.row()]
        lv = item.level
        if role in (Qt.DisplayRole, Qt.EditRole):
            return [
                index.row() + 1,
                lv.name,
                f"{lv.quantity:g}",
                fmt_money(lv.purchase_price),
                fmt_money(lv.sale_price),
                fmt_date(lv.expiry_date),
                days_label(item.days_left),
            ][index.column()]
        # urgent rows (7 days or less)
        if role == Qt.ForegroundRole and item.urgent:
            return QBrush(QColor("#b10000"))
        if role == Qt.BackgroundRole and item.urgent:
            return QBrush(QColor("#fcebea"))
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> NearExpiryItem:
        return self._rows[row]

    def replace(self, rows: list[NearExpiryItem]):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()
