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
# deskfences/fences/store.py
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..config.io import read_json, write_json_atomic, get_fences_path, coerce_enum
from ..config.model import FenceColor, LogCategory
from ..logsink import category

logger = logging.getLogger(__name__)

DEFAULT_GEOMETRY = (100, 100, 230, 130)  # x, y, width, height


@dataclass
class FenceItem:
    filename: str
    display_name: str = ""

    def label(self) -> str:
        """Text shown under the icon: the stored display name or the file's base name."""
        if self.display_name.strip():
            return self.display_name
        return os.path.splitext(os.path.basename(self.filename))[0]


@dataclass
class FenceRecord:
    title: str
    custom_color: Optional[str] = None  # None => inherit the global colour
    x: int = DEFAULT_GEOMETRY[0]
    y: int = DEFAULT_GEOMETRY[1]
    width: int = DEFAULT_GEOMETRY[2]
    height: int = DEFAULT_GEOMETRY[3]
    items: List[FenceItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "customColor": self.custom_color,
            "x": self.x, "y": self.y, "width": self.width, "height": self.height,
            "items": [{"filename": i.filename, "displayName": i.display_name} for i in self.items],
        }


def _int_or(val: object, default: int) -> int:
    if isinstance(val, bool):
        return default
    try:
        return int(val)
    except (TypeError, ValueError, OverflowError):
        return default

def _record_from_dict(raw: dict, index: int) -> FenceRecord:
    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        title = f"Fence {index + 1}"
    rec = FenceRecord(title=title)

    color = raw.get("customColor")
    if isinstance(color, str) and color.strip():
        member = coerce_enum(color, FenceColor, None)
        if member is None:
            logger.info("Invalid customColor '%s' in %s, resetting to default", color, title,
                        extra=category(LogCategory.FENCE_UPDATE))
        rec.custom_color = member.value if member else None

    rec.x = _int_or(raw.get("x"), rec.x)
    rec.y = _int_or(raw.get("y"), rec.y)
    rec.width = max(1, _int_or(raw.get("width"), rec.width))
    rec.height = max(1, _int_or(raw.get("height"), rec.height))

    items = raw.get("items")
    for it in items if isinstance(items, list) else []:
        if not isinstance(it, dict):
            continue
        fn = it.get("filename")
        if not isinstance(fn, str) or not fn:
            continue
        name = it.get("displayName")
        rec.items.append(FenceItem(fn, name if isinstance(name, str) else ""))
    return rec


class FenceStore:
    """
    fences.json: one record per fence, read tolerantly and written atomically.
    The store is also where resolved shortcut display names are kept.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else get_fences_path()
        self.records: List[FenceRecord] = []

    def load(self) -> List[FenceRecord]:
        raw = read_json(self.path) if self.path.exists() else []
        if isinstance(raw, dict):
            raw = [raw]  # a single fence written as a bare object
        if not isinstance(raw, list):
            raw = []
        records: List[FenceRecord] = []
        seen = set()
        for i, entry in enumerate(raw):
            if not isinstance(entry, dict):
                continue
            rec = _record_from_dict(entry, i)
            if rec.title in seen:
                logger.warning("Duplicate fence title '%s' skipped", rec.title,
                               extra=category(LogCategory.FENCE_CREATION))
                continue
            seen.add(rec.title)
            records.append(rec)
        self.records = records
        logger.info("Loaded %d fence(s) from %s", len(records), self.path,
                    extra=category(LogCategory.FENCE_CREATION))
        return self.records

    def save(self) -> bool:
        try:
            write_json_atomic(self.path, [r.to_dict() for r in self.records])
        except (OSError, TypeError, ValueError) as ex:
            logger.error("Error saving fences to %s: %s", self.path, ex, extra=category(LogCategory.ERROR))
            return False
        return True

    def find(self, title: str) -> Optional[FenceRecord]:
        for r in self.records:
            if r.title == title:
                return r
        return None

    def set_custom_color(self, title: str, color: Optional[FenceColor]) -> bool:
        rec = self.find(title)
        if rec is None:
            return False
        rec.custom_color = color.value if color else None
        logger.info("Color of %s set to %s", title, rec.custom_color or "Default",
                    extra=category(LogCategory.FENCE_UPDATE))
        return self.save()

    def set_display_name(self, title: str, filename: str, name: str) -> bool:
        rec = self.find(title)
        if rec is None:
            return False
        for item in rec.items:
            if item.filename == filename:
                item.display_name = name
                logger.info("Updated display name for %s to %s", filename, name,
                            extra=category(LogCategory.ICON_HANDLING))
                return self.save()
        return False

    def set_geometry(self, title: str, x: int, y: int, width: int, height: int) -> bool:
        rec = self.find(title)
        if rec is None:
            return False
        rec.x, rec.y, rec.width, rec.height = int(x), int(y), max(1, int(width)), max(1, int(height))
        return self.save()
