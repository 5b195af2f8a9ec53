# shop_inventory/modules/login/__init__.py

"""
Login module package exports.

- LoginController: runs the sign-in gate (fixed shop credentials).
- LoginForm: username/password dialog (Qt).
- check_credentials: the gate itself, usable without Qt.
"""

from .controller import LoginController, check_credentials
from .form import LoginForm

__all__ = [
    "LoginController",
    "LoginForm",
    "check_credentials",
]
