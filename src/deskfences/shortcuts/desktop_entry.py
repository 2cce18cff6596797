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
# deskfences/shortcuts/desktop_entry.py
"""
freedesktop.org ``.desktop`` launchers.

Only the ``[Desktop Entry]`` group is interpreted; every other line, comment
and localized key is written back untouched.
"""
from __future__ import annotations
import os
import shlex
import shutil
from typing import Optional

from .base import IniText, ShortcutFile, write_text_atomic

_ENTRY_GROUP = "Desktop Entry"


class DesktopEntryShortcut(ShortcutFile):

    def __init__(self, path):
        super().__init__(path)
        self._ini = IniText(self.path, _ENTRY_GROUP)

    def get(self, key: str) -> Optional[str]:
        return self._ini.get(key)

    def set(self, key: str, value: str) -> None:
        self._ini.set(key, value)

    @property
    def name(self) -> str:
        return self.get("Name") or ""

    @property
    def icon_location(self) -> str:
        return self.get("Icon") or ""

    @icon_location.setter
    def icon_location(self, value: str) -> None:
        self.set("Icon", value)

    def target_path(self) -> str:
        """TryExec, else the program of Exec, resolved on $PATH; URL for Type=Link."""
        if (self.get("Type") or "").lower() == "link":
            return self.get("URL") or ""
        cmd = self.get("TryExec") or ""
        if not cmd:
            exec_line = self.get("Exec") or ""
            try:
                argv = shlex.split(exec_line)
            except ValueError:
                argv = exec_line.split()
            cmd = argv[0] if argv else ""
        if not cmd:
            return ""
        cmd = os.path.expanduser(cmd)
        if os.path.isabs(cmd):
            return cmd
        return shutil.which(cmd) or cmd

    def save(self) -> None:
        self._require_existing()
        write_text_atomic(self.path, self._ini.dump())
