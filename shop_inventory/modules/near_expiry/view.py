from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from ...constants import NEAR_EXPIRY_DAYS
from ...widgets.table_view import TableView


class NearExpiryView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        self.lbl_title = QLabel()
        root.addWidget(self.lbl_title)
        self.lbl_empty = QLabel(
            f"No near-expiry items. All stocked products have expiry dates more than "
            f"{NEAR_EXPIRY_DAYS} days away or no expiry set."
        )
        self.lbl_empty.setWordWrap(True)
        root.addWidget(self.lbl_empty)
        self.tbl = TableView()
        self.tbl.setSortingEnabled(False)  # already ranked by urgency
        root.addWidget(self.tbl, 1)
