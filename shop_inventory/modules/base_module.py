from PySide6.QtCore import QObject
from PySide6.QtWidgets import QWidget


class BaseModule(QObject):
    def get_widget(self) -> QWidget:
        raise NotImplementedError

    def refresh(self) -> None:
        """Reload data from the ledger; called whenever the page is shown."""
