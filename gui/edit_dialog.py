"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           gui/edit_dialog.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Small dialog to edit the title and URL of a shortcut from the
                grid's context menu.
------------------------------------------------------------------------------
"""

from PyQt6.QtWidgets import QDialog, QDialogButtonBox, QLabel, QLineEdit, QVBoxLayout

from startgrid.models.item import Shortcut


class EditShortcutDialog(QDialog):
    def __init__(self, shortcut: Shortcut, parent=None):
        super().__init__(parent)
        self._shortcut = shortcut
        self.setWindowTitle(self.tr("Edit Shortcut"))
        self.resize(360, 150)

        layout = QVBoxLayout(self)

        layout.addWidget(QLabel(self.tr("Title:")))
        self.input_title = QLineEdit(shortcut.title)
        layout.addWidget(self.input_title)

        layout.addWidget(QLabel(self.tr("URL:")))
        self.input_url = QLineEdit(shortcut.url)
        self.input_url.setPlaceholderText("https://")
        layout.addWidget(self.input_url)

        self.buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        layout.addWidget(self.buttons)

        self.input_url.textChanged.connect(self._update_ok)
        self._update_ok()

    def _update_ok(self) -> None:
        ok = self.buttons.button(QDialogButtonBox.StandardButton.Ok)
        ok.setEnabled(bool(self.input_url.text().strip()))

    def get_shortcut(self) -> Shortcut:
        """Copy of the edited shortcut; id and icon are kept."""
        return self._shortcut.model_copy(update={
            "title": self.input_title.text().strip(),
            "url": self.input_url.text().strip(),
        })
