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
# deskfences/effects/plugins/utils.py
from typing import Optional, Sequence

from PyQt5.QtCore import QEasingCurve, QPropertyAnimation

def keyframes(target, prop: bytes, duration_ms: int, values: Sequence[float],
              easing: Optional[QEasingCurve.Type] = None) -> QPropertyAnimation:
    """Animation through `values` at evenly spaced key times, parented to `target`."""
    anim = QPropertyAnimation(target, prop, target)
    anim.setDuration(max(1, int(duration_ms)))
    last = max(1, len(values) - 1)
    for i, v in enumerate(values):
        anim.setKeyValueAt(i / last, float(v))
    if easing is not None:
        anim.setEasingCurve(easing)
    return anim
