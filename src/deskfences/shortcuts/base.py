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
# deskfences/shortcuts/base.py
from __future__ import annotations
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"  # keeps ANSI code page bytes intact across a rewrite


class ShortcutError(Exception):
    """A shortcut file could not be opened, parsed or written."""


class ShortcutNotFoundError(ShortcutError):
    pass


class UnsupportedShortcutError(ShortcutError):
    pass


class ShortcutTargetError(ShortcutError):
    """The shortcut opened fine but its target could not be resolved."""


class ShortcutFile(ABC):
    """
    One opened shortcut. Backends expose the icon location (read/write) and
    the target (read-only); `save()` must replace the file in one step.
    """

    def __init__(self, path):
        self.path = Path(path)

    @property
    @abstractmethod
    def icon_location(self) -> str: ...

    @icon_location.setter
    @abstractmethod
    def icon_location(self, value: str) -> None: ...

    @abstractmethod
    def target_path(self) -> str: ...

    @abstractmethod
    def save(self) -> None: ...

    def _require_existing(self) -> None:
        if not self.path.is_file():
            raise ShortcutNotFoundError(f"Shortcut not found: {self.path}")


def write_text_atomic(path: Path, text: str) -> None:
    """
    Write next to `path` and swap it in; the original stays intact on failure.
    Undecodable bytes carried as surrogates by IniText are written back unchanged.
    """
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_bytes(text.encode(_ENCODING, _ERRORS))
        os.replace(tmp, path)
    except (OSError, UnicodeError) as ex:
        try:
            tmp.unlink()
        except OSError:
            pass
        raise ShortcutError(f"Cannot write {path}: {ex}") from ex


class IniText:
    """
    Line-preserving view of one group of an INI-style file.

    Only the lines of keys that are set change; comments, other groups,
    key order, undecodable bytes and the newline style are written back as read.
    """

    def __init__(self, path: Path, group: str):
        self.path = path
        self.group = group
        try:
            data = path.read_bytes()
        except FileNotFoundError as ex:
            raise ShortcutNotFoundError(f"Shortcut not found: {path}") from ex
        except OSError as ex:
            raise ShortcutError(f"Cannot read {path}: {ex}") from ex
        text = data.decode(_ENCODING, _ERRORS)
        self.newline = "\r\n" if "\r\n" in text else "\n"
        self._trailing_newline = text.endswith(("\n", "\r"))
        self.lines: List[str] = text.splitlines()
        if self._range() is None:
            raise ShortcutError(f"{path.name} has no [{group}] group")

    def _range(self) -> Optional[Tuple[int, int]]:
        start = None
        header = f"[{self.group}]".lower()
        for i, raw in enumerate(self.lines):
            line = raw.strip()
            if not line.startswith("["):
                continue
            if start is not None:
                return start, i
            if line.lower() == header:
                start = i + 1
        return (start, len(self.lines)) if start is not None else None

    def get(self, key: str) -> Optional[str]:
        start, end = self._range()
        for raw in self.lines[start:end]:
            line = raw.strip()
            if not line or line.startswith(("#", ";")) or "=" not in line:
                continue
            k, v = line.split("=", 1)
            if k.strip() == key:
                return v.strip()
        return None

    def set(self, key: str, value: str) -> None:
        start, end = self._range()
        for i in range(start, end):
            line = self.lines[i].strip()
            if "=" in line and not line.startswith(("#", ";")) and line.split("=", 1)[0].strip() == key:
                self.lines[i] = f"{key}={value}"
                return
        # append after the last non-blank line of the group
        insert_at = end
        while insert_at > start and not self.lines[insert_at - 1].strip():
            insert_at -= 1
        self.lines.insert(insert_at, f"{key}={value}")

    def dump(self) -> str:
        text = self.newline.join(self.lines)
        return text + self.newline if self._trailing_newline else text
