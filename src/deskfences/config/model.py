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

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class FenceColor(Enum):
    """Background colours a fence can take, persisted by name."""
    GRAY = "Gray"
    BLACK = "Black"
    WHITE = "White"
    GREEN = "Green"
    PURPLE = "Purple"
    YELLOW = "Yellow"
    RED = "Red"
    BLUE = "Blue"


class LaunchEffect(Enum):
    """Animation played on a shortcut icon when it is launched."""
    ZOOM = "Zoom"
    BOUNCE = "Bounce"
    FADE_OUT = "FadeOut"
    SLIDE_UP = "SlideUp"
    ROTATE = "Rotate"
    AGITATE = "Agitate"


class LogLevel(Enum):
    DEBUG = "Debug"
    INFO = "Info"
    WARN = "Warn"
    ERROR = "Error"


class LogCategory(Enum):
    GENERAL = "General"
    FENCE_CREATION = "FenceCreation"
    FENCE_UPDATE = "FenceUpdate"
    UI = "UI"
    ICON_HANDLING = "IconHandling"
    ERROR = "Error"
    IMPORT_EXPORT = "ImportExport"
    SETTINGS = "Settings"


# Rendered values for each colour name
COLOR_HEX = {
    FenceColor.GRAY: "#6E6E6E",
    FenceColor.BLACK: "#0B0B0C",
    FenceColor.WHITE: "#F1F1F6",
    FenceColor.GREEN: "#06491A",
    FenceColor.PURPLE: "#3A0B50",
    FenceColor.YELLOW: "#C1C708",
    FenceColor.RED: "#9E052E",
    FenceColor.BLUE: "#012162",
}

TINT_MIN = 1
TINT_MAX = 100

DEFAULT_LOG_CATEGORIES = (
    LogCategory.GENERAL,
    LogCategory.ERROR,
    LogCategory.IMPORT_EXPORT,
    LogCategory.SETTINGS,
)


@dataclass
class GlobalSettings:
    # ---- Behavior ----
    snap_enabled: bool = True
    single_click_to_launch: bool = True
    launch_effect: LaunchEffect = LaunchEffect.ZOOM

    # ---- Appearance ----
    tint_value: int = 60                   # 1–100 %
    selected_color: FenceColor = FenceColor.GRAY

    # ---- Log ----
    log_enabled: bool = False
    min_log_level: LogLevel = LogLevel.INFO
    enabled_log_categories: List[LogCategory] = field(
        default_factory=lambda: list(DEFAULT_LOG_CATEGORIES)
    )

    def to_dict(self) -> dict:
        """Serializable form, keyed by the names used in options.json."""
        return {
            "snapEnabled": self.snap_enabled,
            "tintValue": self.tint_value,
            "selectedColor": self.selected_color.value,
            "logEnabled": self.log_enabled,
            "singleClickToLaunch": self.single_click_to_launch,
            "launchEffect": self.launch_effect.value,
            "minLogLevel": self.min_log_level.value,
            "enabledLogCategories": [c.value for c in self.enabled_log_categories],
        }
