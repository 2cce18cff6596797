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
# deskfences/shortcuts/url_file.py
"""
Windows Internet shortcuts (``.url``): an INI file with an [InternetShortcut] group.

These are usually written in the ANSI code page, so the file is edited line by
line and every byte outside the touched keys is kept.
"""
from __future__ import annotations
from urllib.parse import urlparse, unquote

from .base import IniText, ShortcutFile, write_text_atomic

_GROUP = "InternetShortcut"


def from_file_uri(uri: str) -> str:
    if not uri:
        return uri
    if uri.startswith("file://"):
        return unquote(urlparse(uri).path, errors="surrogateescape")
    return uri


class UrlShortcut(ShortcutFile):

    def __init__(self, path):
        super().__init__(path)
        self._ini = IniText(self.path, _GROUP)

    @property
    def icon_location(self) -> str:
        icon = self._ini.get("IconFile") or ""
        if not icon:
            return ""
        index = self._ini.get("IconIndex") or ""
        return f"{icon},{index}" if index else icon

    @icon_location.setter
    def icon_location(self, value: str) -> None:
        path, _, index = (value or "").partition(",")
        self._ini.set("IconFile", path)
        self._ini.set("IconIndex", index.strip() or "0")

    def target_path(self) -> str:
        return from_file_uri(self._ini.get("URL") or "")

    def save(self) -> None:
        self._require_existing()
        write_text_atomic(self.path, self._ini.dump())
