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
# deskfences/shortcuts/editor.py
"""
Icon and display-name editing for shortcut files.

Only the icon location is ever written to the shortcut. Display names are
computed here and stored by the caller (the fence store owns them).
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Type

from .base import (
    ShortcutFile, ShortcutError, ShortcutTargetError, UnsupportedShortcutError,
)
from .desktop_entry import DesktopEntryShortcut
from .url_file import UrlShortcut
from .wsh import WshShortcut
from ..config.model import LogCategory
from ..logsink import category

logger = logging.getLogger(__name__)

DEFAULT_ICON = "Default"

BACKENDS: Dict[str, Type[ShortcutFile]] = {
    ".desktop": DesktopEntryShortcut,
    ".url": UrlShortcut,
    ".lnk": WshShortcut,
}


def open_shortcut(path) -> ShortcutFile:
    suffix = Path(path).suffix.lower()
    backend = BACKENDS.get(suffix)
    if backend is None:
        raise UnsupportedShortcutError(f"Unsupported shortcut type: {suffix or Path(path).name}")
    return backend(path)

def base_name(path) -> str:
    """File name without directory and extension."""
    return os.path.splitext(os.path.basename(str(path)))[0]

def _is_readable_file(p: str) -> bool:
    return bool(p) and os.path.isfile(p) and os.access(p, os.R_OK)


@dataclass
class ShortcutEditResult:
    shortcut_path: str
    display_name: Optional[str] = None  # set by restore_default
    icon: Optional[str] = None          # indicator to show; None = unchanged
    icon_changed: bool = False
    error: Optional[str] = None

    @property
    def saved(self) -> bool:
        return self.error is None


class ShortcutEditor:

    def __init__(self, opener: Callable[[object], ShortcutFile] = open_shortcut):
        self._open = opener

    def read_icon(self, shortcut_path) -> str:
        """Icon path without its ",index" suffix, or "Default" when none is set. Raises ShortcutError."""
        loc = (self._open(shortcut_path).icon_location or "").strip()
        first = loc.split(",")[0].strip()
        return first or DEFAULT_ICON

    def read_target(self, shortcut_path) -> str:
        return self._open(shortcut_path).target_path()

    @staticmethod
    def is_valid_icon_source(icon_file_path: Optional[str]) -> bool:
        candidate = (icon_file_path or "").strip()
        if not candidate or candidate == DEFAULT_ICON:
            return False
        return os.path.isfile(candidate)

    def set_custom_icon(self, shortcut_path, icon_file_path: Optional[str]) -> ShortcutEditResult:
        result = ShortcutEditResult(str(shortcut_path))
        if not self.is_valid_icon_source(icon_file_path):
            logger.info("No new icon selected for %s, keeping existing", shortcut_path,
                        extra=category(LogCategory.ICON_HANDLING))
            return result
        icon_file_path = icon_file_path.strip()
        try:
            sc = self._open(shortcut_path)
            sc.icon_location = icon_file_path
            sc.save()
        except ShortcutError as ex:
            logger.error("Failed to save icon for %s: %s", shortcut_path, ex, extra=category(LogCategory.ERROR))
            result.error = str(ex)
            return result
        logger.info("Set icon of %s to %s", shortcut_path, icon_file_path,
                    extra=category(LogCategory.ICON_HANDLING))
        result.icon = icon_file_path
        result.icon_changed = True
        return result

    def restore_default(self, shortcut_path) -> ShortcutEditResult:
        """
        Point the icon back at the shortcut's target and recompute the display name.
        A missing or unreadable target leaves the icon as it is.
        """
        result = ShortcutEditResult(str(shortcut_path), display_name=base_name(shortcut_path))
        try:
            sc = self._open(shortcut_path)
            try:
                target = sc.target_path()
            except ShortcutTargetError as ex:
                logger.warning("%s", ex, extra=category(LogCategory.ICON_HANDLING))
                target = ""
            if _is_readable_file(target):
                sc.icon_location = target
                sc.save()
                result.icon_changed = True
                logger.info("Set icon of %s to target %s", shortcut_path, target,
                            extra=category(LogCategory.ICON_HANDLING))
            else:
                logger.warning("Target '%s' of %s is missing, icon left unchanged", target, shortcut_path,
                               extra=category(LogCategory.ICON_HANDLING))
        except ShortcutError as ex:
            logger.error("Failed to restore defaults for %s: %s", shortcut_path, ex,
                         extra=category(LogCategory.ERROR))
            result.error = str(ex)
            return result
        result.icon = DEFAULT_ICON
        return result

    @staticmethod
    def set_display_name(shortcut_path, proposed_name: Optional[str]) -> str:
        if proposed_name is None or not proposed_name.strip():
            return base_name(shortcut_path)
        return proposed_name
