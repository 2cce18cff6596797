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
# deskfences/shortcuts/wsh.py
"""Windows shell links (``.lnk``) through the WScript.Shell COM object (pywin32)."""
from __future__ import annotations
import os
import shutil

from .base import (
    ShortcutFile, ShortcutError, ShortcutTargetError, UnsupportedShortcutError,
)


def _shell():
    try:
        import win32com.client
    except ImportError as ex:
        raise UnsupportedShortcutError(".lnk shortcuts can only be edited on Windows (pywin32)") from ex
    return win32com.client.Dispatch("WScript.Shell")


class WshShortcut(ShortcutFile):

    def __init__(self, path):
        super().__init__(path)
        self._require_existing()
        self._shell = _shell()
        try:
            link = self._shell.CreateShortcut(str(self.path))
            self._icon = str(link.IconLocation or "")
        except Exception as ex:  # pywintypes.com_error
            raise ShortcutError(f"Cannot open {self.path}: {ex}") from ex

    @property
    def icon_location(self) -> str:
        return self._icon

    @icon_location.setter
    def icon_location(self, value: str) -> None:
        self._icon = value or ""

    def target_path(self) -> str:
        try:
            return str(self._shell.CreateShortcut(str(self.path)).TargetPath or "")
        except Exception as ex:
            raise ShortcutTargetError(f"Cannot resolve target of {self.path}: {ex}") from ex

    def save(self) -> None:
        # IWshShortcut.Save writes in place; edit a copy and swap it in.
        self._require_existing()
        tmp = self.path.with_name(self.path.stem + ".tmp.lnk")
        try:
            shutil.copy2(self.path, tmp)
            link = self._shell.CreateShortcut(str(tmp))
            link.IconLocation = self._icon
            link.Save()
            os.replace(tmp, self.path)
        except Exception as ex:
            try:
                os.remove(tmp)
            except OSError:
                pass
            raise ShortcutError(f"Cannot save {self.path}: {ex}") from ex
