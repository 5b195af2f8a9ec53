# shop_inventory/modules/product/__init__.py

"""
Product module package exports.

- ProductController: product add / edit / delete and search.
- ProductView, ProductForm: the page and its add/edit dialog.
- ProductsTableModel, ProductFilterProxy: table model + search proxy.
"""

from .controller import ProductController
from .form import ProductForm
from .model import ProductFilterProxy, ProductsTableModel
from .view import ProductView

__all__ = [
    "ProductController",
    "ProductView",
    "ProductForm",
    "ProductsTableModel",
    "ProductFilterProxy",
]
