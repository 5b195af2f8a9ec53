# shop_inventory/modules/purchase/__init__.py

"""
Purchase module package exports.

- PurchaseController: stock intake (new / existing item), edit, delete,
  single-day filter and paging.
- PurchaseView, PurchaseForm, PurchasesTableModel: UI parts.
"""

from .controller import PurchaseController
from .form import PurchaseForm
from .model import PurchasesTableModel
from .view import PurchaseView

__all__ = [
    "PurchaseController",
    "PurchaseView",
    "PurchasesTableModel",
    "PurchaseForm",
]
