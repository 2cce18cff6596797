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
# deskfences/propagation.py
from __future__ import annotations
import logging
from typing import Iterable, Mapping, Protocol, Union

from .config.model import GlobalSettings, LogCategory
from .fences.store import FenceRecord
from .logsink import category
from .styling import FenceStyle, resolve_style

logger = logging.getLogger(__name__)


class LiveFence(Protocol):
    title: str

    def apply_style(self, style: FenceStyle) -> None: ...


def _index(records: Union[Mapping[str, FenceRecord], Iterable[FenceRecord]]) -> Mapping[str, FenceRecord]:
    if isinstance(records, Mapping):
        return records
    return {r.title: r for r in records}

def apply_to_all_open_fences(settings: GlobalSettings, records, windows: Iterable[LiveFence]) -> int:
    """
    Push the current colour/tint to every live fence window.

    `records` is either a title->FenceRecord mapping or an iterable of records.
    A window without a matching record gets the global style. Returns the
    number of windows styled.
    """
    by_title = _index(records)
    count = 0
    for win in list(windows):
        title = getattr(win, "title", None)
        if callable(title):
            title = title()
        rec = by_title.get(title)
        if rec is None:
            logger.warning("No fence record for window '%s', applying global style", title,
                           extra=category(LogCategory.FENCE_UPDATE))
        style = resolve_style(rec, settings)
        win.apply_style(style)
        logger.debug("Applied %s/%d%% to %s", style.color, style.tint, title,
                     extra=category(LogCategory.SETTINGS))
        count += 1
    return count
