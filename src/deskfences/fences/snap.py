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
# deskfences/fences/snap.py
from __future__ import annotations
import logging
from typing import Iterable, NamedTuple, Tuple

from ..config.model import LogCategory
from ..logsink import category

logger = logging.getLogger(__name__)

SNAP_THRESHOLD = 30
INTERNAL_SNAP_THRESHOLD = 15   # used when the fence lies within the other fence's span
MIN_GAP = 8


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h


def snap_position(moving: Rect, others: Iterable[Rect], enabled: bool = True) -> Tuple[int, int]:
    """
    Position for `moving` after snapping to the edges of nearby fences.
    Later fences win when several are in range; the result is clamped to >= 0.
    """
    if not enabled:
        return moving.x, moving.y
    x, y = moving.x, moving.y
    for o in others:
        h_thr = INTERNAL_SNAP_THRESHOLD if (moving.x >= o.x and moving.right <= o.right) else SNAP_THRESHOLD
        v_thr = INTERNAL_SNAP_THRESHOLD if (moving.y >= o.y and moving.bottom <= o.bottom) else SNAP_THRESHOLD

        if abs(moving.right - o.x) <= h_thr:
            x = o.x - moving.w - MIN_GAP
        elif abs(moving.x - o.right) <= h_thr:
            x = o.right + MIN_GAP

        if abs(moving.bottom - o.y) <= v_thr:
            y = o.y - moving.h - MIN_GAP
        elif abs(moving.y - o.bottom) <= v_thr:
            y = o.bottom + MIN_GAP
    x, y = max(0, x), max(0, y)
    if (x, y) != (moving.x, moving.y):
        logger.debug("Snapped (%d, %d) -> (%d, %d)", moving.x, moving.y, x, y, extra=category(LogCategory.UI))
    return x, y
