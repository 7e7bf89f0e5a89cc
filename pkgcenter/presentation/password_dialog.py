from PySide6.QtWidgets import QInputDialog, QLineEdit, QWidget

from pkgcenter.application.privilege_session import PrivilegeSession


def prompt_for_password(parent: QWidget | None = None) -> PrivilegeSession | None:
    """Asks once for the sudo password used by this session.

    Returns:
        A session holding the password, or None if the user cancelled or left the
        field empty.
    """
    text, accepted = QInputDialog.getText(
        parent,
        "Authentication Required",
        "Please enter your sudo password.\n"
        "It is used for installs, removals and cleanup during this session.",
        QLineEdit.EchoMode.Password,
    )
    if not accepted or not text:
        return None
    return PrivilegeSession(text)
