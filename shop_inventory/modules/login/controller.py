# shop_inventory/modules/login/controller.py
from __future__ import annotations

import hmac
import logging
from typing import Optional

from ...constants import LOGIN_PASSWORD, LOGIN_USERNAME

_log = logging.getLogger(__name__)


def check_credentials(username: str | None, password: str | None) -> bool:
    """
    The shop has one fixed account. Username is compared after trimming,
    password exactly; both in constant time.
    """
    user = (username or "").strip().encode("utf-8")
    pw = (password or "").encode("utf-8")
    user_ok = hmac.compare_digest(user, LOGIN_USERNAME.encode("utf-8"))
    pw_ok = hmac.compare_digest(pw, LOGIN_PASSWORD.encode("utf-8"))
    return user_ok and pw_ok


class LoginController:
    """
    Sign-in gate shown before the main window.

    Public attrs (set after each prompt()):
      - last_error_code: "cancelled" | "empty_fields" | "invalid_credentials" | None
      - last_error_message: str | None
      - last_username: str | None
    """

    def __init__(self, parent=None) -> None:
        self.parent = parent
        self.last_error_code: Optional[str] = None
        self.last_error_message: Optional[str] = None
        self.last_username: Optional[str] = None

    def prompt(self) -> Optional[dict]:
        """
        Show the dialog until the user signs in or cancels.
        Returns {"username": ...} on success, None on cancel.
        """
        self._reset_last_error()

        from .form import LoginForm  # lazy import to keep UI deps local
        dlg = LoginForm(self.parent)
        while True:
            if not dlg.exec():
                self._fail("cancelled", "Login cancelled by user.")
                return None
            result = self.attempt(*dlg.get_values())
            if result is not None:
                return result
            dlg.set_error(self.last_error_message)
            dlg.password.clear()
            dlg.password.setFocus()

    def attempt(self, username: str, password: str) -> Optional[dict]:
        """One sign-in attempt without any UI."""
        self._reset_last_error()
        self.last_username = (username or "").strip()
        if not self.last_username or not password:
            self._fail("empty_fields", "Please enter both username and password.")
            return None
        if not check_credentials(username, password):
            self._fail("invalid_credentials", "Invalid username or password.")
            _log.warning("Failed sign-in for %r", self.last_username)
            return None
        _log.info("Signed in as %s", self.last_username)
        return {"username": self.last_username}

    # ----------------------------- Internals -----------------------------

    def _reset_last_error(self) -> None:
        self.last_error_code = None
        self.last_error_message = None

    def _fail(self, code: str, message: str) -> None:
        self.last_error_code = code
        self.last_error_message = message
