from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox, QDialog, QDialogButtonBox, QFormLayout, QHBoxLayout, QLabel,
    QLineEdit, QVBoxLayout, QWidget,
)

from ...constants import SHOP_NAME


class LoginForm(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Sign in")
        self.setModal(True)

        root = QVBoxLayout(self)
        title = QLabel(f"<b>{SHOP_NAME}</b>")
        title.setAlignment(Qt.AlignCenter)
        root.addWidget(title)

        self.lbl_error = QLabel()
        self.lbl_error.setWordWrap(True)
        self.lbl_error.setVisible(False)
        self.lbl_error.setStyleSheet(
            "QLabel {background:#fcebea; color:#b10000; border:1px solid #f5c6cb; border-radius:6px; padding:6px;}"
        )
        root.addWidget(self.lbl_error)

        lay = QFormLayout()
        self.username = QLineEdit()
        self.username.setPlaceholderText("Username")
        self.password = QLineEdit()
        self.password.setEchoMode(QLineEdit.Password)
        self.password.setPlaceholderText("Password")

        pw_row = QHBoxLayout()
        pw_row.setContentsMargins(0, 0, 0, 0)
        pw_row.addWidget(self.password, 1)
        self.chk_show = QCheckBox("Show")
        self.chk_show.toggled.connect(
            lambda on: self.password.setEchoMode(QLineEdit.Normal if on else QLineEdit.Password)
        )
        pw_row.addWidget(self.chk_show)
        pw_host = QWidget()
        pw_host.setLayout(pw_row)

        lay.addRow("Username", self.username)
        lay.addRow("Password", pw_host)
        root.addLayout(lay)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)
        self.username.setFocus()

    def get_values(self) -> tuple[str, str]:
        return self.username.text().strip(), self.password.text()

    def set_error(self, msg: str | None) -> None:
        self.lbl_error.setText(msg or "")
        self.lbl_error.setVisible(bool(msg))
