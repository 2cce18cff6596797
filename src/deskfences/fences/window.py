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
# deskfences/fences/window.py
from __future__ import annotations
import logging
import os
from typing import Callable, Dict, List, Optional

from PyQt5.QtCore import Qt, QEvent, QPoint, QPointF, QRectF, QUrl, QAbstractAnimation, pyqtSignal, pyqtProperty
from PyQt5.QtGui import QIcon, QPainter, QDesktopServices, QFont, QColor
from PyQt5.QtWidgets import (
    QWidget, QFrame, QLabel, QVBoxLayout, QGridLayout, QMenu, QStyle, QApplication
)

from ..config.model import FenceColor, GlobalSettings, LogCategory
from ..effects.registry import registry
from ..logsink import category
from ..shortcuts.base import ShortcutError
from ..shortcuts.editor import ShortcutEditor, DEFAULT_ICON
from ..styling import FenceStyle
from .snap import Rect, snap_position
from .store import FenceItem, FenceRecord

logger = logging.getLogger(__name__)

ICON_SIZE = 40
CELL_W, CELL_H = 76, 78
ICONS_PER_ROW = 3


def _icon_for(path: str, editor: ShortcutEditor) -> QIcon:
    """
    Icon of a fence item: the shortcut's icon file or theme name, else the
    target's generic file icon.
    """
    icon_id = DEFAULT_ICON
    try:
        icon_id = editor.read_icon(path)
    except ShortcutError:
        pass
    if icon_id != DEFAULT_ICON:
        if os.path.isabs(icon_id) and os.path.exists(icon_id):
            ic = QIcon(icon_id)
            if not ic.isNull(): return ic
        ic = QIcon.fromTheme(icon_id)
        if not ic.isNull(): return ic
    style = QApplication.style()
    return style.standardIcon(QStyle.SP_DirIcon if os.path.isdir(path) else QStyle.SP_FileIcon)


class IconButton(QWidget):
    """
    Shortcut tile. The scale/angle/offset/opacity properties exist so launch
    effects can animate them; paintEvent applies them to the icon only.
    """
    activated = pyqtSignal(str)
    editRequested = pyqtSignal(str)

    def __init__(self, item: FenceItem, icon: QIcon, parent=None):
        super().__init__(parent)
        self.item = item
        self._icon = icon
        self._scale = 1.0; self._angle = 0.0
        self._dx = 0.0; self._dy = 0.0
        self._opacity = 1.0
        self.single_click = True
        self.setFixedSize(CELL_W, CELL_H)
        self.setCursor(Qt.PointingHandCursor)
        self.setToolTip(item.filename)

    def _prop(name):
        attr = "_" + name
        def getter(self): return getattr(self, attr)
        def setter(self, v):
            setattr(self, attr, float(v)); self.update()
        return getter, setter

    scale = pyqtProperty(float, *_prop("scale"))
    angle = pyqtProperty(float, *_prop("angle"))
    offsetX = pyqtProperty(float, *_prop("dx"))
    offsetY = pyqtProperty(float, *_prop("dy"))
    opacity = pyqtProperty(float, *_prop("opacity"))
    del _prop

    def set_icon(self, icon: QIcon):
        self._icon = icon; self.update()

    def paintEvent(self, _):
        p = QPainter(self)
        p.setRenderHint(QPainter.SmoothPixmapTransform, True)
        p.setRenderHint(QPainter.Antialiasing, True)
        p.save()
        p.setOpacity(max(0.0, min(1.0, self._opacity)))
        cx = self.width() / 2.0 + self._dx
        cy = 6 + ICON_SIZE / 2.0 + self._dy
        p.translate(cx, cy)
        p.rotate(self._angle)
        p.scale(self._scale, self._scale)
        pm = self._icon.pixmap(ICON_SIZE, ICON_SIZE)
        p.drawPixmap(QPointF(-ICON_SIZE / 2.0, -ICON_SIZE / 2.0), pm)
        p.restore()
        p.setPen(QColor("#FFFFFF"))
        f = QFont(self.font()); f.setPointSizeF(max(7.0, f.pointSizeF() * 0.9)); p.setFont(f)
        rect = QRectF(2, 10 + ICON_SIZE, self.width() - 4, self.height() - ICON_SIZE - 10)
        text = p.fontMetrics().elidedText(self.item.label(), Qt.ElideRight, int(rect.width()))
        p.drawText(rect, Qt.AlignHCenter | Qt.AlignTop, text)
        p.end()

    def mousePressEvent(self, e):
        if e.button() == Qt.LeftButton and self.single_click:
            self.activated.emit(self.item.filename)
        super().mousePressEvent(e)

    def mouseDoubleClickEvent(self, e):
        if e.button() == Qt.LeftButton and not self.single_click:
            self.activated.emit(self.item.filename)
        super().mouseDoubleClickEvent(e)

    def contextMenuEvent(self, e):
        menu = QMenu(self)
        act_edit = menu.addAction("Edit…")
        if menu.exec_(e.globalPos()) is act_edit:
            self.editRequested.emit(self.item.filename)


class FenceWindow(QWidget):
    """
    Frameless panel hosting the shortcuts of one fence record.
    `title` and `apply_style` are what the settings broadcaster relies on.
    """
    optionsRequested = pyqtSignal()
    editRequested = pyqtSignal(str, str)       # fence title, item filename
    geometryCommitted = pyqtSignal(str)         # fence title
    colorChosen = pyqtSignal(str, str)          # fence title, colour name or "" to inherit

    def __init__(self, record: FenceRecord, settings: GlobalSettings,
                 editor: Optional[ShortcutEditor] = None,
                 snap_targets: Optional[Callable[["FenceWindow"], List[Rect]]] = None,
                 parent=None):
        super().__init__(parent)
        self.title = record.title
        self._settings = settings
        self._editor = editor or ShortcutEditor()
        self._snap_targets = snap_targets
        self._style: Optional[FenceStyle] = None
        self._drag_from: Optional[QPoint] = None
        self._buttons: Dict[str, IconButton] = {}

        self.setWindowTitle(record.title)
        self.setWindowFlags(Qt.FramelessWindowHint | Qt.Tool | Qt.WindowStaysOnBottomHint)
        self.setAttribute(Qt.WA_TranslucentBackground, True)
        self.setGeometry(record.x, record.y, record.width, record.height)

        outer = QVBoxLayout(self); outer.setContentsMargins(0, 0, 0, 0)
        self._frame = QFrame(self); self._frame.setObjectName("fenceFrame")
        outer.addWidget(self._frame)
        fl = QVBoxLayout(self._frame); fl.setContentsMargins(6, 4, 6, 6); fl.setSpacing(4)
        self._title_label = QLabel(record.title); self._title_label.setObjectName("fenceTitle")
        self._title_label.setAlignment(Qt.AlignCenter)
        self._title_label.setStyleSheet("color: white; font-weight: 600;")
        self._title_label.installEventFilter(self)
        fl.addWidget(self._title_label)
        self._grid = QGridLayout(); self._grid.setSpacing(2)
        fl.addLayout(self._grid); fl.addStretch()
        self.set_items(record.items)

    # ---------- Style ----------
    def apply_style(self, style: FenceStyle):
        self._style = style
        self._frame.setStyleSheet(
            f"#fenceFrame {{ background-color: {style.rgba()}; border-radius: 8px; }}"
        )
        logger.debug("Style of %s: %s", self.title, style, extra=category(LogCategory.UI))

    def current_style(self) -> Optional[FenceStyle]:
        return self._style

    # ---------- Items ----------
    def set_items(self, items: List[FenceItem]):
        for btn in self._buttons.values():
            self._grid.removeWidget(btn); btn.deleteLater()
        self._buttons = {}
        for i, item in enumerate(items):
            btn = IconButton(item, _icon_for(item.filename, self._editor), self._frame)
            btn.single_click = self._settings.single_click_to_launch
            btn.activated.connect(self.launch)
            btn.editRequested.connect(lambda fn, t=self.title: self.editRequested.emit(t, fn))
            self._grid.addWidget(btn, i // ICONS_PER_ROW, i % ICONS_PER_ROW)
            self._buttons[item.filename] = btn

    def refresh_item(self, filename: str):
        btn = self._buttons.get(filename)
        if btn is not None:
            btn.set_icon(_icon_for(filename, self._editor))

    def apply_behavior(self):
        """Re-read click behaviour after a settings change."""
        for btn in self._buttons.values():
            btn.single_click = self._settings.single_click_to_launch

    def button(self, filename: str) -> Optional[IconButton]:
        return self._buttons.get(filename)

    def launch(self, filename: str):
        btn = self._buttons.get(filename)
        if btn is not None:
            anim = registry.get(self._settings.launch_effect).start(btn)
            if anim is not None:
                anim.start(QAbstractAnimation.DeleteWhenStopped)
        if not os.path.exists(filename):
            logger.warning("Launch target missing: %s", filename, extra=category(LogCategory.ICON_HANDLING))
            return
        logger.info("Launching %s", filename, extra=category(LogCategory.GENERAL))
        QDesktopServices.openUrl(QUrl.fromLocalFile(filename))

    # ---------- Drag / snap ----------
    def rect_on_screen(self) -> Rect:
        g = self.frameGeometry()
        return Rect(g.x(), g.y(), g.width(), g.height())

    def eventFilter(self, source, event):
        if source is self._title_label:
            t = event.type()
            if t == QEvent.MouseButtonPress and event.button() == Qt.LeftButton:
                self._drag_from = event.globalPos() - self.frameGeometry().topLeft()
                return True
            if t == QEvent.MouseMove and self._drag_from is not None:
                self.move(event.globalPos() - self._drag_from)
                return True
            if t == QEvent.MouseButtonRelease and self._drag_from is not None:
                self._drag_from = None
                self._finish_drag()
                return True
        return super().eventFilter(source, event)

    def _finish_drag(self):
        others = self._snap_targets(self) if self._snap_targets else []
        x, y = snap_position(self.rect_on_screen(), others, self._settings.snap_enabled)
        self.move(x, y)
        self.geometryCommitted.emit(self.title)

    def contextMenuEvent(self, e):
        menu = QMenu(self)
        colors = menu.addMenu("Color")
        act_inherit = colors.addAction("Default")
        act_inherit.setData("")
        colors.addSeparator()
        for c in FenceColor:
            colors.addAction(c.value).setData(c.value)
        menu.addSeparator()
        act_opts = menu.addAction("Options…")
        act_exit = menu.addAction("Exit")
        chosen = menu.exec_(e.globalPos())
        if chosen is act_opts:
            self.optionsRequested.emit()
        elif chosen is act_exit:
            QApplication.quit()
        elif chosen is not None and chosen.data() is not None:
            self.colorChosen.emit(self.title, chosen.data())
