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
# deskfences/styling.py
"""
Effective style of a fence: its own colour override when it has one, the
global colour otherwise. Tint is always global.
"""
from __future__ import annotations
from typing import NamedTuple, Optional

from .config.io import coerce_enum
from .config.model import GlobalSettings, FenceColor, COLOR_HEX


class FenceStyle(NamedTuple):
    color: str      # colour name, e.g. "Gray"
    hex: str        # "#RRGGBB"
    tint: int       # 1–100 %
    alpha: int      # 0–255 background alpha derived from tint

    def rgba(self) -> str:
        """Qt style sheet colour, e.g. ``rgba(110, 110, 110, 153)``."""
        h = self.hex.lstrip("#")
        r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
        return f"rgba({r}, {g}, {b}, {self.alpha})"


def effective_color(record, settings: GlobalSettings) -> str:
    """The record's customColor if set and non-empty, else the global selectedColor."""
    custom = getattr(record, "custom_color", None) if record is not None else None
    if isinstance(custom, str) and custom.strip():
        return custom
    return settings.selected_color.value

def effective_tint(settings: GlobalSettings) -> int:
    return settings.tint_value

def _hex_for(color_name: str, fallback: FenceColor) -> str:
    member: Optional[FenceColor] = coerce_enum(color_name, FenceColor, None)
    return COLOR_HEX[member or fallback]

def resolve_style(record, settings: GlobalSettings) -> FenceStyle:
    """Style for `record`; pass None for the plain global style."""
    color = effective_color(record, settings)
    tint = effective_tint(settings)
    alpha = int(round(tint * 255 / 100.0))
    return FenceStyle(color, _hex_for(color, settings.selected_color), tint, alpha)
