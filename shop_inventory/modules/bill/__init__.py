# shop_inventory/modules/bill/__init__.py

"""
Bill (point of sale) module package exports.

- BillController: picks sellable stock, builds the cart, records the bill.
- BillView, BillPaymentDialog: UI parts.
- BillLinesModel, CartLine: the cart.
"""

from .controller import BillController
from .model import BillLinesModel, CartLine
from .payment_form import BillPaymentDialog
from .view import BillView

__all__ = [
    "BillController",
    "BillView",
    "BillPaymentDialog",
    "BillLinesModel",
    "CartLine",
]
