# database/repositories/__init__.py
"""
Repository layer public API.

Usage:
    from shop_inventory.database.repositories import (
        # Products + stock projection
        ProductsRepo, Product,
        # Purchases (stock intake)
        PurchasesRepo, Purchase,
        # Bills
        BillsRepo, BillDraft, BillItem, summarize_sales,
        # Credit
        CreditPaymentsRepo,
        # Errors
        DomainError, InsufficientStock,
    )
"""

# ---------------- Errors -------------------
from .errors import DomainError, InsufficientStock

# ---------------- Products -----------------
from .products_repo import ProductsRepo, Product

# ---------------- Purchases ----------------
from .purchases_repo import PurchasesRepo, Purchase

# ------------------ Bills ------------------
from .bills_repo import BillsRepo, BillDraft, BillItem, summarize_sales

# ----------------- Credit ------------------
from .credit_payments_repo import CreditPaymentsRepo

__all__ = [
    # errors
    "DomainError",
    "InsufficientStock",
    # products_repo
    "ProductsRepo",
    "Product",
    # purchases_repo
    "PurchasesRepo",
    "Purchase",
    # bills_repo
    "BillsRepo",
    "BillDraft",
    "BillItem",
    "summarize_sales",
    # credit_payments_repo
    "CreditPaymentsRepo",
]
