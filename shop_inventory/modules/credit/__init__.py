# shop_inventory/modules/credit/__init__.py

"""
Credit module package exports.

- CreditController: outstanding credit bills and partial payments.
- CreditView, CreditPaymentDialog and the table models: UI parts.
"""

from .controller import CreditController
from .form import CreditPaymentDialog
from .model import CreditBillsModel, CreditItemsModel, CreditPaymentsModel
from .view import CreditView

__all__ = [
    "CreditController",
    "CreditView",
    "CreditPaymentDialog",
    "CreditBillsModel",
    "CreditItemsModel",
    "CreditPaymentsModel",
]
