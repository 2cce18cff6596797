# SPDX-License-Identifier: GPL-3.0-or-later
#
# DeskFences - Desktop fences for your shortcuts
# Copyright (C) 2025 Tasteron
#
# This project is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# deskfences/edit_shortcut_ui.py
from __future__ import annotations
import logging
import os
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QWidget, QLabel, QLineEdit, QPushButton,
    QMessageBox, QFileDialog,
)

from .config.model import LogCategory
from .logsink import category
from .shortcuts.base import ShortcutError
from .shortcuts.editor import ShortcutEditor, DEFAULT_ICON
from .ui_common import ModernCard, calc_ui_scale, modern_stylesheet

logger = logging.getLogger(__name__)


class EditShortcutDialog(QDialog):
    """
    Per-shortcut editor for display name and icon.

    Browse only changes the icon shown here; the shortcut file is touched by
    Save or Default. After accept(), `new_display_name` holds the name to store
    for the fence item.
    """

    def __init__(self, shortcut_path: str, current_display_name: str = "",
                 editor: Optional[ShortcutEditor] = None, parent=None):
        super().__init__(parent)
        self.shortcut_path = str(shortcut_path)
        self.editor = editor or ShortcutEditor()
        self.new_display_name: Optional[str] = None
        self._icon_path = DEFAULT_ICON
        self._ui_scale = calc_ui_scale()

        self.setWindowTitle("Edit Shortcut")
        self.setWindowFlags(Qt.Dialog | Qt.WindowCloseButtonHint)
        self.setModal(True)
        self.setMinimumWidth(self._dp(460))

        self._setup_ui()
        self.setStyleSheet(modern_stylesheet(self._ui_scale))
        self.le_name.setText(current_display_name or self.editor.set_display_name(self.shortcut_path, ""))
        self._load_icon()

        self.btn_browse.clicked.connect(self._on_browse_clicked)
        self.btn_default.clicked.connect(self._on_default_clicked)
        self.btn_save.clicked.connect(self._on_save_clicked)
        self.btn_cancel.clicked.connect(self.reject)

    def _dp(self, px: int) -> int:
        return int(round(px * self._ui_scale))

    def _setup_ui(self):
        main = QVBoxLayout(self); main.setContentsMargins(0, 0, 0, 0); main.setSpacing(0)

        body = QWidget(); bl = QVBoxLayout(body)
        bl.setContentsMargins(self._dp(20), self._dp(20), self._dp(20), self._dp(20))
        card = ModernCard(os.path.basename(self.shortcut_path))

        r1 = QHBoxLayout(); r1.setSpacing(self._dp(12))
        lb = QLabel("Name:"); lb.setObjectName("settingLabel"); r1.addWidget(lb)
        self.le_name = QLineEdit(); r1.addWidget(self.le_name, 1)
        card.content_layout.addLayout(r1)

        r2 = QHBoxLayout(); r2.setSpacing(self._dp(12))
        lb = QLabel("Icon:"); lb.setObjectName("settingLabel"); r2.addWidget(lb)
        self.lbl_icon = QLabel(DEFAULT_ICON); self.lbl_icon.setTextInteractionFlags(Qt.TextSelectableByMouse)
        r2.addWidget(self.lbl_icon, 1)
        self.btn_browse = QPushButton("Browse…"); self.btn_browse.setObjectName("secondaryButton"); r2.addWidget(self.btn_browse)
        card.content_layout.addLayout(r2)
        bl.addWidget(card)
        main.addWidget(body, 1)

        footer = QWidget(); footer.setObjectName("footerWidget")
        fl = QHBoxLayout(footer); fl.setContentsMargins(self._dp(20), self._dp(12), self._dp(20), self._dp(12)); fl.setSpacing(self._dp(12))
        self.btn_default = QPushButton("Default"); self.btn_default.setObjectName("secondaryButton"); fl.addWidget(self.btn_default)
        fl.addStretch()
        self.btn_cancel = QPushButton("Cancel"); self.btn_cancel.setObjectName("secondaryButton"); fl.addWidget(self.btn_cancel)
        self.btn_save = QPushButton("Save"); self.btn_save.setObjectName("primaryButton"); self.btn_save.setDefault(True); fl.addWidget(self.btn_save)
        main.addWidget(footer)

    @property
    def icon_indicator(self) -> str:
        return self._icon_path

    def _set_icon_indicator(self, value: str):
        self._icon_path = value or DEFAULT_ICON
        self.lbl_icon.setText(self._icon_path)
        self.lbl_icon.setToolTip(self._icon_path)

    def _load_icon(self):
        try:
            self._set_icon_indicator(self.editor.read_icon(self.shortcut_path))
        except ShortcutError as ex:
            logger.error("Failed to read icon of %s: %s", self.shortcut_path, ex, extra=category(LogCategory.ERROR))
            self._set_icon_indicator(DEFAULT_ICON)
            QMessageBox.warning(self, "Edit Shortcut", f"Could not read the shortcut:\n{ex}")

    def _on_browse_clicked(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Select Icon", "",
            "Icon files (*.ico *.png *.svg *.xpm *.exe *.dll);;All files (*)"
        )
        if path:
            self._set_icon_indicator(path)

    def _on_default_clicked(self):
        result = self.editor.restore_default(self.shortcut_path)
        if not result.saved:
            QMessageBox.critical(self, "Error", f"Failed to restore defaults: {result.error}")
            return
        self.le_name.setText(result.display_name or "")
        self._set_icon_indicator(result.icon or DEFAULT_ICON)

    def _on_save_clicked(self):
        result = self.editor.set_custom_icon(self.shortcut_path, self._icon_path)
        if not result.saved:
            QMessageBox.critical(self, "Error", f"Failed to save changes: {result.error}")
            return
        self.new_display_name = self.editor.set_display_name(self.shortcut_path, self.le_name.text())
        logger.info("Edited shortcut %s, display name '%s'", self.shortcut_path, self.new_display_name,
                    extra=category(LogCategory.ICON_HANDLING))
        self.accept()
