from PySide6.QtCore import QModelIndex
from PySide6.QtWidgets import QTableView


class TableView(QTableView):
    """Row-selecting table shared by every page."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSortingEnabled(True)
        self.setAlternatingRowColors(True)
        self.setSelectionBehavior(QTableView.SelectRows)
        self.setSelectionMode(QTableView.SingleSelection)
        self.setEditTriggers(QTableView.NoEditTriggers)
        self.verticalHeader().setVisible(False)
        self.horizontalHeader().setStretchLastSection(True)

    def selected_index(self) -> QModelIndex | None:
        """First selected row as a view index (map through a proxy if one is set)."""
        sm = self.selectionModel()
        if sm is None:
            return None
        rows = sm.selectedRows()
        return rows[0] if rows else None
