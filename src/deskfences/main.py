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

import os
os.environ.setdefault("QT_AUTO_SCREEN_SCALE_FACTOR", "1")
os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
os.environ.setdefault("QT_SCALE_FACTOR_ROUNDING_POLICY", "PassThrough")
import logging
import sys
from typing import Dict, List, Optional

from PyQt5.QtCore import Qt, QObject
from PyQt5.QtGui import QGuiApplication
from PyQt5.QtWidgets import QApplication, QDialog

from deskfences.config.io import ConfigStore, get_app_dir
from deskfences.config.model import FenceColor, GlobalSettings, LogCategory
from deskfences.edit_shortcut_ui import EditShortcutDialog
from deskfences.fences.snap import Rect
from deskfences.fences.store import FenceRecord, FenceStore
from deskfences.fences.window import FenceWindow
from deskfences.logsink import category, configure_logging
from deskfences.options_ui import OptionsDialog
from deskfences.propagation import apply_to_all_open_fences
from deskfences.shortcuts.editor import ShortcutEditor

logger = logging.getLogger(__name__)

DEFAULT_FENCE_TITLE = "Fences"


class FenceApp(QObject):
    """
    Owns the settings store, the fence store and the live fence windows, and
    routes requests from the windows to the dialogs.
    """

    def __init__(self, config: Optional[ConfigStore] = None, fences: Optional[FenceStore] = None,
                 editor: Optional[ShortcutEditor] = None, parent=None):
        super().__init__(parent)
        self.config = config or ConfigStore()
        self.fence_store = fences or FenceStore()
        self.editor = editor or ShortcutEditor()
        self.windows: Dict[str, FenceWindow] = {}

    @property
    def settings(self) -> GlobalSettings:
        return self.config.settings

    def start(self, log_dir=None, show: bool = True):
        self.config.load()
        configure_logging(self.settings, log_dir if log_dir is not None else self.config.path.parent)
        logger.info("DeskFences starting", extra=category(LogCategory.GENERAL))

        records = self.fence_store.load()
        if not records:
            self.fence_store.records.append(FenceRecord(title=DEFAULT_FENCE_TITLE))
            self.fence_store.save()
            logger.info("Created default fence '%s'", DEFAULT_FENCE_TITLE,
                        extra=category(LogCategory.FENCE_CREATION))
        for rec in self.fence_store.records:
            self._create_window(rec)

        self.broadcast()
        if show:
            for w in self.windows.values():
                w.show()

    def _create_window(self, record: FenceRecord) -> FenceWindow:
        w = FenceWindow(record, self.settings, editor=self.editor, snap_targets=self._snap_targets)
        w.optionsRequested.connect(self.show_options)
        w.editRequested.connect(self.edit_shortcut)
        w.geometryCommitted.connect(self._on_geometry_committed)
        w.colorChosen.connect(self.set_fence_color)
        self.windows[record.title] = w
        logger.debug("Window created for fence '%s'", record.title, extra=category(LogCategory.FENCE_CREATION))
        return w

    def _snap_targets(self, moving: FenceWindow) -> List[Rect]:
        return [w.rect_on_screen() for w in self.windows.values() if w is not moving and w.isVisible()]

    # ---------- Settings propagation ----------
    def broadcast(self) -> int:
        """Push the current settings to every open fence."""
        n = apply_to_all_open_fences(self.settings, self.fence_store.records, self.windows.values())
        for w in self.windows.values():
            w.apply_behavior()
        return n

    def on_settings_saved(self, _settings: GlobalSettings):
        self.broadcast()

    def show_options(self):
        dlg = OptionsDialog(self.config, on_saved=self.on_settings_saved)
        dlg.exec_()

    # ---------- Per-fence edits ----------
    def set_fence_color(self, title: str, color_name: str):
        color = FenceColor(color_name) if color_name else None
        if not self.fence_store.set_custom_color(title, color):
            logger.error("Could not store color for fence '%s'", title, extra=category(LogCategory.ERROR))
        self.broadcast()

    def edit_shortcut(self, title: str, filename: str):
        rec = self.fence_store.find(title)
        current = ""
        if rec is not None:
            for item in rec.items:
                if item.filename == filename:
                    current = item.display_name
                    break
        dlg = EditShortcutDialog(filename, current, editor=self.editor)
        if dlg.exec_() == QDialog.Accepted and dlg.new_display_name is not None:
            self.fence_store.set_display_name(title, filename, dlg.new_display_name)
        # Default writes the icon immediately, so refresh even when cancelled
        w = self.windows.get(title)
        if w is not None:
            w.refresh_item(filename)

    def _on_geometry_committed(self, title: str):
        w = self.windows.get(title)
        if w is None:
            return
        g = w.geometry()
        self.fence_store.set_geometry(title, g.x(), g.y(), g.width(), g.height())


def main():
    QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)
    try:
        QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
            Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
        )
    except AttributeError:
        pass
    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)
    fences = FenceApp()
    fences.start(log_dir=get_app_dir())
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
