from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from ...constants import MISSING_PRODUCT_NAME
from ...utils.helpers import fmt_date, fmt_money


class PurchasesTableModel(QAbstractTableModel):
    HEADERS = ["ID", "Product", "Quantity", "Total value", "Unit cost", "Sale price", "Purchase date", "Expiry date"]

    def __init__(self, rows: list[dict]):
        super().__init__()
        self._rows = rows

    def rowCount(self, parent=QModelIndex()): return len(self._rows)

    def columnCount(self, parent=QModelIndex()): return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid(): return None
        r = self._rows[index.row()]
        if role in (Qt.DisplayRole, Qt.EditRole):
            qty = r["quantity"] or 0
            unit_cost = float(r["total_value"] or 0) / qty if qty else 0.0
            sale = r.get("sale_price")
            mapping = [
                r["id"],
                r.get("product_name") or MISSING_PRODUCT_NAME,
                qty,
                fmt_money(r["total_value"]),
                fmt_money(unit_cost),
                fmt_money(sale) if sale is not None else MISSING_PRODUCT_NAME,
                fmt_date(r["purchase_date"]),
                fmt_date(r.get("expiry_date")),
            ]
            return mapping[index.column()]
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
