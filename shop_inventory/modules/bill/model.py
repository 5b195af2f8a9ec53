from dataclasses import dataclass

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex

from ...constants import MAX_LINE_QUANTITY
from ...utils.helpers import fmt_money
from ...utils.stock import StockLevel


@dataclass
class CartLine:
    product_id: int
    name: str
    unit_price: float
    quantity: int
    available: float

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


def max_quantity(available: float) -> int:
    """Largest quantity the bill screen offers for one product."""
    return max(0, min(int(available), MAX_LINE_QUANTITY))


class BillLinesModel(QAbstractTableModel):
    """
    The bill being rung up. Adding a product already in the cart merges the
    lines; quantities never exceed what the stock projection has on hand.
    """
    HEADERS = ["#", "Product", "Qty", "Price", "Line Total"]

    def __init__(self, rows: list[CartLine] | None = None):
        super().__init__()
        self._rows = list(rows or [])

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
            return [index.row() + 1, r.name, r.quantity, fmt_money(r.unit_price), fmt_money(r.line_total)][c]
        if role == Qt.TextAlignmentRole and c >= 2:
            return Qt.AlignRight | Qt.AlignVCenter
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    # ---- cart operations ----
    def lines(self) -> list[CartLine]:
        return list(self._rows)

    def add(self, level: StockLevel, quantity: int) -> int:
        """
        Put `quantity` units of `level` in the cart. Returns the quantity now
        on the product's line (after capping), 0 when nothing could be added.
        """
        cap = max_quantity(level.quantity)
        for i, line in enumerate(self._rows):
            if line.product_id == level.id:
                line.quantity = min(cap, line.quantity + int(quantity))
                line.available = level.quantity
                self.dataChanged.emit(self.index(i, 0), self.index(i, len(self.HEADERS) - 1))
                return line.quantity
        qty = min(cap, int(quantity))
        if qty <= 0:
            return 0
        self.beginInsertRows(QModelIndex(), len(self._rows), len(self._rows))
        self._rows.append(
            CartLine(
                product_id=level.id,
                name=level.name,
                unit_price=level.sale_price,
                quantity=qty,
                available=level.quantity,
            )
        )
        self.endInsertRows()
        return qty

    def remove(self, row: int) -> None:
        if 0 <= row < len(self._rows):
            self.beginRemoveRows(QModelIndex(), row, row)
            del self._rows[row]
            self.endRemoveRows()

    def clear(self) -> None:
        self.beginResetModel()
        self._rows = []
        self.endResetModel()

    def total(self) -> float:
        return round(sum(line.line_total for line in self._rows), 2)

    def items(self) -> list[dict]:
        """Line items in the shape the ledger's create_bill expects."""
        return [
            {
                "product_id": line.product_id,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "line_total": line.line_total,
            }
            for line in self._rows
        ]
