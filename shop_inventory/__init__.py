# shop_inventory/__init__.py
"""
Single-shop point-of-sale and stock ledger (PySide6 + SQLite).
"""

__version__ = "1.0.0"
