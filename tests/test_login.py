# tests/test_login.py
import pytest
from PySide6.QtWidgets import QLineEdit

from shop_inventory.constants import LOGIN_PASSWORD, LOGIN_USERNAME
from shop_inventory.modules.login import LoginController, LoginForm, check_credentials


@pytest.mark.parametrize(
    "username, password, ok",
    [
        (LOGIN_USERNAME, LOGIN_PASSWORD, True),
        (f"  {LOGIN_USERNAME}  ", LOGIN_PASSWORD, True),
        (LOGIN_USERNAME.lower(), LOGIN_PASSWORD, False),
        (LOGIN_USERNAME, f" {LOGIN_PASSWORD}", False),
        (LOGIN_USERNAME, "wrong", False),
        ("", "", False),
        (None, None, False),
    ],
)
def test_check_credentials(username, password, ok):
    assert check_credentials(username, password) is ok


def test_attempt_success():
    ctl = LoginController()
    assert ctl.attempt(f" {LOGIN_USERNAME} ", LOGIN_PASSWORD) == {"username": LOGIN_USERNAME}
    assert ctl.last_error_code is None


def test_attempt_empty_fields():
    ctl = LoginController()
    assert ctl.attempt("   ", LOGIN_PASSWORD) is None
    assert ctl.last_error_code == "empty_fields"
    assert ctl.attempt(LOGIN_USERNAME, "") is None
    assert ctl.last_error_code == "empty_fields"


def test_attempt_invalid_credentials():
    ctl = LoginController()
    assert ctl.attempt(LOGIN_USERNAME, "0000") is None
    assert ctl.last_error_code == "invalid_credentials"
    assert ctl.last_error_message


def test_error_code_resets_on_next_attempt():
    ctl = LoginController()
    ctl.attempt(LOGIN_USERNAME, "0000")
    ctl.attempt(LOGIN_USERNAME, LOGIN_PASSWORD)
    assert ctl.last_error_code is None


# ---------------------------------------------------------------------
# dialog
# ---------------------------------------------------------------------

def test_login_form_values_and_error(qtbot):
    dlg = LoginForm()
    qtbot.addWidget(dlg)

    dlg.username.setText("  Iamuser ")
    dlg.password.setText(" 9876")
    assert dlg.get_values() == ("Iamuser", " 9876")

    dlg.set_error("Invalid username or password.")
    assert not dlg.lbl_error.isHidden()
    assert dlg.lbl_error.text() == "Invalid username or password."
    dlg.set_error(None)
    assert dlg.lbl_error.isHidden()


def test_login_form_show_password_toggle(qtbot):
    dlg = LoginForm()
    qtbot.addWidget(dlg)
    dlg.chk_show.setChecked(True)
    assert dlg.password.echoMode() == QLineEdit.EchoMode.Normal
    dlg.chk_show.setChecked(False)
    assert dlg.password.echoMode() == QLineEdit.EchoMode.Password
