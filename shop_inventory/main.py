from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QListWidget,
    QListWidgetItem,
    QStackedWidget,
    QHBoxLayout,
    QSizePolicy,
)
from PySide6.QtCore import Qt
from pathlib import Path
import logging
import sys

from .config import ENFORCE_STOCK_ON_BILL
from .constants import APP_NAME, SHOP_NAME, STYLE_FILE
from .database import get_connection
from .database.ledger import LedgerStore
from .modules.base_module import BaseModule
from .modules.bill.controller import BillController
from .modules.credit.controller import CreditController
from .modules.login.controller import LoginController
from .modules.near_expiry.controller import NearExpiryController
from .modules.product.controller import ProductController
from .modules.purchase.controller import PurchaseController
from .modules.sales.controller import SalesController
from .utils.loggers import get_logger

_log = logging.getLogger(__name__)

# (nav title, controller class) in display order
PAGES = [
    ("Bill", BillController),
    ("Products", ProductController),
    ("Purchases", PurchaseController),
    ("Sales", SalesController),
    ("Credit", CreditController),
    ("Near Expiry", NearExpiryController),
]


def load_qss() -> str:
    qss = ""
    f = Path(__file__).resolve().parent / STYLE_FILE
    if f.exists():
        qss = f.read_text(encoding="utf-8")
    return qss


class MainWindow(QMainWindow):
    def __init__(self, store: LedgerStore, current_user: dict | None = None):
        super().__init__()
        self.setWindowTitle(f"{SHOP_NAME} - {APP_NAME}")
        self.setWindowFlag(Qt.WindowMinimizeButtonHint, True)
        self.setWindowFlag(Qt.WindowMaximizeButtonHint, True)
        self.setMinimumSize(820, 520)

        self.store = store
        self.user = current_user or {}

        # ---- Central layout: left nav + stacked pages ----
        central = QWidget(self)
        layout = QVBoxLayout(central)
        self.setCentralWidget(central)

        self.nav = QListWidget()
        self.nav.setObjectName("nav")
        self.nav.setFixedWidth(130)
        self.nav.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)

        self.stack = QStackedWidget()

        row = QWidget()
        row_lay = QHBoxLayout(row)
        row_lay.addWidget(self.nav)
        row_lay.addWidget(self.stack, 1)
        layout.addWidget(row, 1)

        self.modules: list[tuple[str, BaseModule]] = []
        for title, controller_cls in PAGES:
            self.add_module(title, controller_cls(self.store))

        self.nav.currentRowChanged.connect(self._on_nav_item_changed)
        if self.nav.count():
            self.nav.setCurrentRow(0)

    def add_module(self, title: str, module: BaseModule):
        page = module.get_widget()
        item = QListWidgetItem(title)
        self.nav.addItem(item)
        self.stack.addWidget(page)
        self.modules.append((title, module))

    def module(self, title: str) -> BaseModule | None:
        for t, m in self.modules:
            if t == title:
                return m
        return None

    def _on_nav_item_changed(self, index: int):
        """Show the page and reload it, so it reflects writes made on other pages."""
        if index < 0 or index >= len(self.modules):
            return
        self.modules[index][1].refresh()
        self.stack.setCurrentIndex(index)


def main():
    get_logger("shop_inventory")

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    # DB connection (ensure schema, etc.)
    conn = get_connection()
    store = LedgerStore(conn, enforce_stock=ENFORCE_STOCK_ON_BILL)
    store.products.sync_quantity_cache()

    # ---- Sign-in gate ----
    user = LoginController().prompt()
    if not user:
        _log.info("Sign-in cancelled; exiting")
        conn.close()
        return

    qss = load_qss()
    if qss:
        app.setStyleSheet(qss)

    win = MainWindow(store, current_user=user)
    win.resize(1000, 620)
    win.show()

    code = app.exec()
    conn.close()
    sys.exit(code)


if __name__ == "__main__":
    main()
