from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .model import NearExpiryModel
from .view import NearExpiryView
from ...database.ledger import LedgerStore


class NearExpiryController(BaseModule):
    """Stock expiring within the window, most urgent first. Read-only."""

    def __init__(self, store: LedgerStore):
        super().__init__()
        self.store = store
        self.view = NearExpiryView()
        self.model = NearExpiryModel()
        self.view.tbl.setModel(self.model)
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def refresh(self):
        items = self.store.get_near_expiry()
        self.model.replace(items)
        self.view.tbl.resizeColumnsToContents()
        self.view.lbl_title.setText(f"<h2>Near expiry items ({len(items)})</h2>")
        self.view.lbl_empty.setVisible(not items)
        self.view.tbl.setVisible(bool(items))
