# shop_inventory/modules/sales/__init__.py

"""
Sales module package exports.

- SalesController: sold lines for a date range with quantity / revenue /
  profit totals, and receipt reprint.
- SalesView, SalesLinesModel: UI parts.
"""

from .controller import SalesController
from .model import SalesLinesModel
from .view import SalesView

__all__ = [
    "SalesController",
    "SalesView",
    "SalesLinesModel",
]
