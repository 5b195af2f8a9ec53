from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from ...constants import MISSING_PRODUCT_NAME
from ...utils.helpers import fmt_money


class _RowsModel(QAbstractTableModel):
    HEADERS: list[str] = []

    def __init__(self, rows: list[dict] | None = None):
        super().__init__()
        self._rows = list(rows or [])

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def row_values(self, r: dict) -> list:
        raise NotImplementedError

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        if role in (Qt.DisplayRole, Qt.EditRole):
            return self.row_values(self._rows[index.row()])[index.column()]
        return None

    def at(self, row: int) -> dict:
        return self._rows[row]

    def replace(self, rows: list[dict]):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()


class CreditBillsModel(_RowsModel):
    HEADERS = ["Bill", "Date", "Customer", "Mobile", "Total", "Paid", "Remaining"]

    def row_values(self, r: dict) -> list:
        return [
            f"#{r['id']}",
            (r["bill_date"] or "")[:16],
            r.get("customer_name") or MISSING_PRODUCT_NAME,
            r.get("customer_mobile") or MISSING_PRODUCT_NAME,
            fmt_money(r["total"]),
            fmt_money(r["amount_paid"]),
            fmt_money(r["credit_remaining"]),
        ]


class CreditItemsModel(_RowsModel):
    HEADERS = ["Product", "Qty", "Total Price"]

    def row_values(self, r: dict) -> list:
        return [r["product_name"], r["quantity"], fmt_money(r["line_total"])]


class CreditPaymentsModel(_RowsModel):
    HEADERS = ["Date", "Amount"]

    def row_values(self, r: dict) -> list:
        return [(r["payment_date"] or "")[:16], fmt_money(r["amount"])]
