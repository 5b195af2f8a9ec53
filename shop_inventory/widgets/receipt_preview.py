from pathlib import Path
import logging
from typing import Callable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from PySide6.QtGui import QKeySequence, QShortcut, QTextDocument
from PySide6.QtPrintSupport import QPrintDialog, QPrinter
from PySide6.QtWidgets import QDialog, QDialogButtonBox, QTextBrowser, QVBoxLayout

from ..constants import PAYMENT_CREDIT, RECEIPT_TEMPLATE, SHOP_NAME
from ..utils.helpers import fmt_money

_log = logging.getLogger(__name__)

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent
_template_path = _PACKAGE_ROOT / RECEIPT_TEMPLATE
_env = Environment(
    loader=FileSystemLoader(str(_template_path.parent)),
    autoescape=select_autoescape(["html"]),
)


def render_receipt(bill: dict, items: list[dict]) -> str:
    """HTML receipt for a saved bill and its line items."""
    template = _env.get_template(_template_path.name)
    return template.render(
        shop_name=SHOP_NAME,
        bill=bill,
        items=items,
        method_label="Credit" if bill.get("payment_method") == PAYMENT_CREDIT else "Cash",
        money=fmt_money,
    )


class ReceiptPreview(QDialog):
    """
    Shows the rendered receipt and prints it through the system print dialog.
    `on_printed` runs once the print dialog was accepted and the document sent.
    """

    def __init__(
        self,
        bill: dict,
        items: list[dict],
        parent=None,
        on_printed: Optional[Callable[[], None]] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle(f"Receipt - Bill #{bill.get('id')}")
        self.resize(480, 600)
        self.bill = bill
        self.on_printed = on_printed

        layout = QVBoxLayout(self)
        self.browser = QTextBrowser()
        self.browser.setHtml(render_receipt(bill, items))
        layout.addWidget(self.browser, 1)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Close)
        self.btn_print = self.buttons.addButton("Print", QDialogButtonBox.ActionRole)
        self.btn_print.clicked.connect(self.print_receipt)
        self.buttons.rejected.connect(self.reject)
        layout.addWidget(self.buttons)

        QShortcut(QKeySequence("Ctrl+P"), self).activated.connect(self.print_receipt)

    def print_receipt(self):
        printer = QPrinter(QPrinter.HighResolution)
        printer.setDocName(f"Bill_{self.bill.get('id')}")
        dlg = QPrintDialog(printer, self)
        if dlg.exec() != QDialog.Accepted:
            return
        self.print_to(printer)

    def print_to(self, printer: QPrinter) -> None:
        doc = QTextDocument()
        doc.setHtml(self.browser.toHtml())
        doc.print_(printer)
        _log.info("Receipt for bill #%s sent to printer", self.bill.get("id"))
        if self.on_printed is not None:
            self.on_printed()
