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
# deskfences/options_ui.py
from __future__ import annotations
import copy
import logging
from typing import Callable, Dict, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QWidget, QLabel, QTabWidget, QComboBox,
    QSpinBox, QSlider, QPushButton, QMessageBox, QCheckBox, QScrollArea, QFrame,
)

from .config.io import ConfigStore
from .config.model import (
    GlobalSettings, FenceColor, LaunchEffect, LogLevel, LogCategory, TINT_MIN, TINT_MAX,
)
from .logsink import category
from .ui_common import ModernCard, calc_ui_scale, modern_stylesheet

logger = logging.getLogger(__name__)

_CATEGORY_LABELS = {
    LogCategory.GENERAL: "General",
    LogCategory.FENCE_CREATION: "Fence Creation",
    LogCategory.FENCE_UPDATE: "Fence Update",
    LogCategory.UI: "User Interface",
    LogCategory.ICON_HANDLING: "Icon Handling",
    LogCategory.ERROR: "Errors",
    LogCategory.IMPORT_EXPORT: "Import / Export",
    LogCategory.SETTINGS: "Settings",
}


class OptionsDialog(QDialog):
    """
    Global options editor.

    Edits a private copy of the shared settings. Nothing reaches the shared
    record, the disk or the open fences until Save succeeds; Cancel or closing
    the window drops the copy.
    """

    def __init__(self, store: ConfigStore, on_saved: Optional[Callable[[GlobalSettings], None]] = None,
                 parent=None):
        super().__init__(parent)
        self._store = store
        self._pending = copy.deepcopy(store.settings)
        self.on_saved = on_saved
        self._ui_scale = calc_ui_scale()

        self.setWindowTitle("Options")
        self.setWindowFlags(Qt.Dialog | Qt.WindowCloseButtonHint)
        self.setModal(True)
        self.setMinimumSize(self._dp(560), self._dp(480))

        self._setup_ui()
        self.setStyleSheet(modern_stylesheet(self._ui_scale))
        self._load_from_settings(self._pending)
        self._connect_signals()

    @property
    def pending(self) -> GlobalSettings:
        return self._pending

    def _dp(self, px: int) -> int:
        return int(round(px * self._ui_scale))

    # ---------- Layout ----------
    def _setup_ui(self):
        main = QVBoxLayout(self); main.setContentsMargins(0, 0, 0, 0); main.setSpacing(0)

        header = QWidget(); header.setObjectName("headerWidget"); header.setFixedHeight(self._dp(72))
        hl = QHBoxLayout(header); hl.setContentsMargins(self._dp(24), self._dp(14), self._dp(24), self._dp(14))
        tl = QVBoxLayout(); tl.setSpacing(self._dp(4))
        t = QLabel("Options"); t.setObjectName("headerTitle"); tl.addWidget(t)
        st = QLabel("Settings shared by all fences"); st.setObjectName("headerSubtitle"); tl.addWidget(st)
        hl.addLayout(tl); hl.addStretch(); main.addWidget(header)

        self.tabs = QTabWidget(); self.tabs.setObjectName("mainTabs")
        self.tabs.tabBar().setFocusPolicy(Qt.NoFocus)
        main.addWidget(self.tabs, 1)

        self._create_general_tab()
        self._create_appearance_tab()
        self._create_log_tab()

        footer = QWidget(); footer.setObjectName("footerWidget"); footer.setFixedHeight(self._dp(68))
        fl = QHBoxLayout(footer); fl.setContentsMargins(self._dp(24), self._dp(14), self._dp(24), self._dp(14)); fl.setSpacing(self._dp(12))
        self.btn_defaults = QPushButton("Restore Defaults"); self.btn_defaults.setObjectName("secondaryButton"); fl.addWidget(self.btn_defaults)
        fl.addStretch()
        self.btn_cancel = QPushButton("Cancel"); self.btn_cancel.setObjectName("secondaryButton"); fl.addWidget(self.btn_cancel)
        self.btn_save = QPushButton("Save"); self.btn_save.setObjectName("primaryButton"); self.btn_save.setDefault(True); fl.addWidget(self.btn_save)
        main.addWidget(footer)

    def _label(self, text: str) -> QLabel:
        lb = QLabel(text); lb.setObjectName("settingLabel"); return lb

    def _tab_page(self, title: str) -> QVBoxLayout:
        scroll = QScrollArea(); scroll.setWidgetResizable(True); scroll.setFrameStyle(QFrame.NoFrame)
        w = QWidget(); l = QVBoxLayout(w)
        l.setContentsMargins(self._dp(20), self._dp(20), self._dp(20), self._dp(20)); l.setSpacing(self._dp(18))
        scroll.setWidget(w)
        self.tabs.addTab(scroll, title)
        return l

    def _create_general_tab(self):
        l = self._tab_page("General")
        card = ModernCard("Behavior")
        self.cb_snap = QCheckBox("Snap fences to each other")
        card.content_layout.addWidget(self.cb_snap)
        self.cb_single_click = QCheckBox("Launch shortcuts with a single click")
        card.content_layout.addWidget(self.cb_single_click)

        r = QHBoxLayout(); r.setSpacing(self._dp(16))
        r.addWidget(self._label("Launch Effect:"))
        self.cb_effect = QComboBox(); self.cb_effect.setMinimumWidth(self._dp(180))
        for eff in LaunchEffect:
            self.cb_effect.addItem(eff.value, eff.value)
        r.addWidget(self.cb_effect); r.addStretch()
        card.content_layout.addLayout(r)

        l.addWidget(card); l.addStretch()

    def _create_appearance_tab(self):
        l = self._tab_page("Appearance")
        card = ModernCard("Fence Background")
        r1 = QHBoxLayout(); r1.setSpacing(self._dp(16))
        r1.addWidget(self._label("Color:"))
        self.cb_color = QComboBox(); self.cb_color.setMinimumWidth(self._dp(160))
        for c in FenceColor:
            self.cb_color.addItem(c.value, c.value)
        r1.addWidget(self.cb_color); r1.addStretch()
        card.content_layout.addLayout(r1)

        r2 = QHBoxLayout(); r2.setSpacing(self._dp(16))
        r2.addWidget(self._label("Tint:"))
        self.sl_tint = QSlider(Qt.Horizontal); self.sl_tint.setRange(TINT_MIN, TINT_MAX); self.sl_tint.setMinimumWidth(self._dp(200))
        self.sb_tint = QSpinBox(); self.sb_tint.setRange(TINT_MIN, TINT_MAX); self.sb_tint.setSuffix(" %")
        r2.addWidget(self.sl_tint, 1); r2.addWidget(self.sb_tint)
        card.content_layout.addLayout(r2)

        l.addWidget(card); l.addStretch()

    def _create_log_tab(self):
        l = self._tab_page("Log")
        card = ModernCard("Diagnostics")
        self.cb_log = QCheckBox("Write diagnostic events to DeskFences.log")
        card.content_layout.addWidget(self.cb_log)

        r = QHBoxLayout(); r.setSpacing(self._dp(16))
        r.addWidget(self._label("Minimum Level:"))
        self.cb_level = QComboBox(); self.cb_level.setMinimumWidth(self._dp(140))
        for lvl in LogLevel:
            self.cb_level.addItem(lvl.value, lvl.value)
        r.addWidget(self.cb_level); r.addStretch()
        card.content_layout.addLayout(r)
        l.addWidget(card)

        cats = ModernCard("Categories")
        self.category_boxes: Dict[LogCategory, QCheckBox] = {}
        for cat in LogCategory:
            box = QCheckBox(_CATEGORY_LABELS.get(cat, cat.value))
            self.category_boxes[cat] = box
            cats.content_layout.addWidget(box)
        l.addWidget(cats); l.addStretch()

    # ---------- Signals ----------
    def _connect_signals(self):
        self.btn_cancel.clicked.connect(self.reject)
        self.btn_save.clicked.connect(self._on_save_clicked)
        self.btn_defaults.clicked.connect(self._on_defaults_clicked)

        self.sl_tint.valueChanged.connect(self.sb_tint.setValue)
        self.sb_tint.valueChanged.connect(self.sl_tint.setValue)
        self.cb_log.toggled.connect(self._update_enabled_states)

    def _update_enabled_states(self):
        on = self.cb_log.isChecked()
        self.cb_level.setEnabled(on)
        for box in self.category_boxes.values():
            box.setEnabled(on)

    @staticmethod
    def _select_data(combo: QComboBox, value: str):
        idx = combo.findData(value)
        if idx >= 0:
            combo.setCurrentIndex(idx)

    # ---------- Data ----------
    def _load_from_settings(self, s: GlobalSettings):
        """Fill the form from `s`."""
        self.cb_snap.setChecked(bool(s.snap_enabled))
        self.cb_single_click.setChecked(bool(s.single_click_to_launch))
        self._select_data(self.cb_effect, s.launch_effect.value)

        self._select_data(self.cb_color, s.selected_color.value)
        self.sl_tint.setValue(int(s.tint_value)); self.sb_tint.setValue(int(s.tint_value))

        self.cb_log.setChecked(bool(s.log_enabled))
        self._select_data(self.cb_level, s.min_log_level.value)
        enabled = set(s.enabled_log_categories)
        for cat, box in self.category_boxes.items():
            box.setChecked(cat in enabled)
        self._update_enabled_states()

    def _read_form(self):
        """Copy form values into the pending settings."""
        s = self._pending
        s.snap_enabled = bool(self.cb_snap.isChecked())
        s.single_click_to_launch = bool(self.cb_single_click.isChecked())
        s.launch_effect = LaunchEffect(self.cb_effect.currentData())
        s.selected_color = FenceColor(self.cb_color.currentData())
        s.tint_value = int(self.sb_tint.value())
        s.log_enabled = bool(self.cb_log.isChecked())
        s.min_log_level = LogLevel(self.cb_level.currentData())
        s.enabled_log_categories = [cat for cat, box in self.category_boxes.items() if box.isChecked()]

    def _on_defaults_clicked(self):
        """Fill the form with default values; nothing is saved until Save."""
        reply = QMessageBox.question(
            self, "Restore Defaults",
            "Do you want to reset all options to their default values?",
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No
        )
        if reply != QMessageBox.Yes: return
        self._load_from_settings(GlobalSettings())

    def _on_save_clicked(self):
        self._read_form()
        if not self._store.commit(self._pending):
            QMessageBox.critical(self, "Save Error",
                                 f"Options could not be saved:\n{self._store.last_error}")
            return
        logger.info("Options saved successfully", extra=category(LogCategory.SETTINGS))
        if callable(self.on_saved):
            try:
                self.on_saved(self._store.settings)
            except Exception as e:
                logger.exception("Applying options to open fences failed", extra=category(LogCategory.ERROR))
                QMessageBox.warning(self, "Apply Error", f"Options were saved but could not be applied:\n{e}")
        self.accept()
