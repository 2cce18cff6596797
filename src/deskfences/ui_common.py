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
# deskfences/ui_common.py
"""Look and scaling shared by the options and edit-shortcut dialogs."""
import os
from PyQt5.QtGui import QGuiApplication
from PyQt5.QtWidgets import QApplication, QFrame, QLabel, QVBoxLayout


class ModernCard(QFrame):
    def __init__(self, title="", parent=None):
        super().__init__(parent)
        self.setFrameStyle(QFrame.NoFrame)
        self.setObjectName("modernCard")
        layout = QVBoxLayout(self); layout.setContentsMargins(20, 16, 20, 20); layout.setSpacing(12)
        if title:
            t = QLabel(title); t.setObjectName("cardTitle"); layout.addWidget(t)
        self.content_layout = QVBoxLayout(); self.content_layout.setSpacing(10); layout.addLayout(self.content_layout)


def calc_ui_scale() -> float:
    """UI scale factor from $APP_UI_SCALE or the primary screen's DPI."""
    try:
        env_scale = float(os.getenv("APP_UI_SCALE", "").strip() or 0)
        if env_scale > 0:
            return max(0.9, min(env_scale, 2.5))
    except ValueError:
        pass
    screen = QGuiApplication.primaryScreen()
    dpi = screen.logicalDotsPerInch() if screen else 96.0
    scale = dpi / 96.0
    if not (0.3 < scale < 4.0):
        scale = 1.0
    return float(max(0.9, min(scale, 2.5)))


def is_dark_palette() -> bool:
    app = QApplication.instance()
    if app is None:
        return False
    c = app.palette().color(app.palette().Window)
    return (0.299 * c.red() + 0.587 * c.green() + 0.114 * c.blue()) < 128


def modern_stylesheet(s: float) -> str:
    """Dialog style sheet for UI scale `s`, following the desktop's dark/light palette."""
    if is_dark_palette():
        bg_primary = "#1a1a1a"; bg_secondary = "#2d2d30"; bg_tertiary = "#3c3c3c"
        text_primary = "#ffffff"; text_secondary = "#b3b3b3"
        accent = "#007acc"; accent_hover = "#106ebe"; border = "#404040"
    else:
        bg_primary = "#ffffff"; bg_secondary = "#f8f9fa"; bg_tertiary = "#e9ecef"
        text_primary = "#212529"; text_secondary = "#495057"
        accent = "#007acc"; accent_hover = "#0056b3"; border = "#dee2e6"

    fs_header_title = int(round(22 * s))
    fs_card_title = int(round(15 * s))
    fs_body = int(round(14 * s))
    pad_sm = max(6, int(round(8 * s)))
    pad_md = max(8, int(round(10 * s)))
    br_small = max(6, int(round(8 * s)))
    br_medium = max(8, int(round(12 * s)))
    min_h_btn = int(round(34 * s))

    return f"""
    QDialog {{ background-color: {bg_primary}; color: {text_primary}; font-size: {fs_body}px; }}
    #headerWidget {{ background-color: {bg_secondary}; border-bottom: 1px solid {border}; }}
    #headerTitle {{ font-size: {fs_header_title}px; font-weight: 600; color: {text_primary}; }}
    #headerSubtitle {{ color: {text_secondary}; }}
    #mainTabs::pane {{ border: none; background-color: {bg_primary}; }}
    #mainTabs QTabBar::tab {{
        background-color: transparent; border: none; padding: {pad_md}px {pad_md}px;
        margin: 0 2px; border-radius: {br_medium}px; color: {text_secondary}; min-width: {int(round(100*s))}px;
    }}
    #mainTabs QTabBar::tab:selected {{ background-color: {bg_tertiary}; color: {text_primary}; }}
    #modernCard {{ background-color: {bg_secondary}; border: 1px solid {border}; border-radius: {br_medium}px; margin: 4px; }}
    #cardTitle {{ font-size: {fs_card_title}px; font-weight: 600; color: {text_primary}; }}
    #settingLabel {{ font-weight: 500; color: {text_primary}; min-width: {int(round(140*s))}px; }}
    QLineEdit, QComboBox, QSpinBox {{
        background-color: {bg_primary}; border: 2px solid {border}; border-radius: {br_small}px;
        padding: {pad_sm}px {pad_md}px; color: {text_primary};
    }}
    QLineEdit:focus, QComboBox:focus, QSpinBox:focus {{ border-color: {accent}; }}
    #primaryButton {{
        background-color: {accent}; color: white; border: none; border-radius: {br_medium}px;
        padding: {pad_sm}px {int(round(24*s))}px; font-weight: 600; min-height: {min_h_btn}px;
    }}
    #primaryButton:hover {{ background-color: {accent_hover}; }}
    #secondaryButton {{
        background-color: {bg_tertiary}; color: {text_primary}; border: 1px solid {border}; border-radius: {br_medium}px;
        padding: {pad_sm}px {int(round(20*s))}px; min-height: {min_h_btn}px;
    }}
    #secondaryButton:hover {{ border-color: {accent}; }}
    QSlider::groove:horizontal {{ height: {max(4,int(round(6*s)))}px; background-color: {bg_tertiary}; border-radius: 3px; }}
    QSlider::handle:horizontal {{
        background-color: {accent}; width: {int(round(20*s))}px; margin: -{int(round(7*s))}px 0; border-radius: {int(round(10*s))}px;
    }}
    #footerWidget {{ background-color: {bg_secondary}; border-top: 1px solid {border}; }}
    """
