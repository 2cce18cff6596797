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
# deskfences/config/io.py
from __future__ import annotations
import copy
import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Iterable, List, Optional, Type, TypeVar

from .model import (
    GlobalSettings, FenceColor, LaunchEffect, LogLevel, LogCategory,
    TINT_MIN, TINT_MAX,
)
from ..logsink import category

logger = logging.getLogger(__name__)

_E = TypeVar("_E")
# -------------------------------------------------
# Paths
# -------------------------------------------------
SETTINGS_FILE_NAME = "options.json"
FENCES_FILE_NAME = "fences.json"

def get_app_dir() -> Path:
    """
    Directory holding options.json, fences.json and the logs:
      $DESKFENCES_HOME
      or the directory of the frozen executable
      or the installed package directory
    """
    x = os.environ.get("DESKFENCES_HOME")
    if x:
        return Path(x).expanduser()
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]
def get_config_path() -> Path:
    return get_app_dir() / SETTINGS_FILE_NAME
def get_fences_path() -> Path:
    return get_app_dir() / FENCES_FILE_NAME
# -------------------------------------------------
# JSON I/O Helpers
# -------------------------------------------------
def _ensure_parent_dir(p: Path) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
def read_json(p: Path) -> Optional[object]:
    """Parsed content of `p`, or None when it cannot be read or parsed."""
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as ex:
        logger.warning("Cannot read %s: %s", p, ex, extra=category(LogCategory.ERROR))
        return None
def write_json_atomic(p: Path, obj: object) -> None:
    _ensure_parent_dir(p)
    tmp = p.with_suffix(p.suffix + ".tmp")
    try:
        tmp.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(p)
    except BaseException:
        try:
            tmp.unlink()
        except OSError:
            pass
        raise
# -------------------------------------------------
# Coercion
# -------------------------------------------------
def _coerce_bool(val: object, default: bool) -> bool:
    return val if isinstance(val, bool) else default
def _coerce_int(val: object, lo: int, hi: int, default: int) -> int:
    if isinstance(val, bool):
        return default
    try:
        iv = int(val)
        if lo <= iv <= hi:
            return iv
    except (TypeError, ValueError, OverflowError):
        pass
    return default
def coerce_enum(val: object, enum_cls: Type[_E], default: Optional[_E]) -> Optional[_E]:
    """Enum member whose symbolic name matches `val` (case-insensitive), else `default`."""
    if isinstance(val, enum_cls):
        return val
    if not isinstance(val, str):
        return default
    key = val.strip().lower()
    for member in enum_cls:
        if member.value.lower() == key:
            return member
    return default
def _coerce_enum_list(val: object, enum_cls: Type[_E], default: Iterable[_E]) -> List[_E]:
    if not isinstance(val, list):
        return list(default)
    out: List[_E] = []
    for v in val:
        m = coerce_enum(v, enum_cls, None)
        if m is not None and m not in out:
            out.append(m)
    return out
def settings_from_dict(raw: dict) -> GlobalSettings:
    """
    Build settings from a parsed options.json object.
    Each field absent or of the wrong shape keeps its default; unknown keys are ignored.
    """
    s = GlobalSettings()  # Defaults
    s.snap_enabled = _coerce_bool(raw.get("snapEnabled"), s.snap_enabled)
    s.tint_value = _coerce_int(raw.get("tintValue"), TINT_MIN, TINT_MAX, s.tint_value)
    s.selected_color = coerce_enum(raw.get("selectedColor"), FenceColor, s.selected_color)
    s.log_enabled = _coerce_bool(raw.get("logEnabled"), s.log_enabled)
    s.single_click_to_launch = _coerce_bool(raw.get("singleClickToLaunch"), s.single_click_to_launch)
    s.launch_effect = coerce_enum(raw.get("launchEffect"), LaunchEffect, s.launch_effect)
    s.min_log_level = coerce_enum(raw.get("minLogLevel"), LogLevel, s.min_log_level)
    s.enabled_log_categories = _coerce_enum_list(
        raw.get("enabledLogCategories"), LogCategory, s.enabled_log_categories
    )
    return s
# -------------------------------------------------
# Public API
# -------------------------------------------------
class ConfigStore:
    """
    Owner of options.json and of the process-wide GlobalSettings record.

    `settings` is the shared record handed to every component; load/commit
    update it in place so references held elsewhere stay current.
    """

    def __init__(self, path: Optional[Path] = None, settings: Optional[GlobalSettings] = None):
        self.path = Path(path) if path is not None else get_config_path()
        self.settings = settings if settings is not None else GlobalSettings()
        self.last_error: Optional[str] = None

    def _assign(self, src: GlobalSettings) -> None:
        for f in fields(GlobalSettings):
            setattr(self.settings, f.name, copy.copy(getattr(src, f.name)))

    def load(self) -> GlobalSettings:
        raw = read_json(self.path) if self.path.exists() else None
        if isinstance(raw, dict):
            self._assign(settings_from_dict(raw))
            logger.info("Settings loaded from %s", self.path, extra=category(LogCategory.SETTINGS))
            return self.settings
        if self.path.exists():
            logger.warning("Settings file %s is corrupt, restoring defaults", self.path,
                           extra=category(LogCategory.SETTINGS))
        else:
            logger.info("No settings file at %s, writing defaults", self.path,
                        extra=category(LogCategory.SETTINGS))
        self._assign(GlobalSettings())
        self.save()
        return self.settings

    def save(self) -> bool:
        try:
            write_json_atomic(self.path, self.settings.to_dict())
        except (OSError, TypeError, ValueError) as ex:
            self.last_error = str(ex)
            logger.error("Error saving settings to %s: %s", self.path, ex,
                         extra=category(LogCategory.SETTINGS))
            return False
        self.last_error = None
        logger.debug("Settings saved to %s", self.path, extra=category(LogCategory.SETTINGS))
        return True

    def commit(self, pending: GlobalSettings) -> bool:
        """Take over an edited copy and persist it; rolled back if the write fails."""
        previous = copy.deepcopy(self.settings)
        self._assign(pending)
        if self.save():
            return True
        self._assign(previous)
        return False

    def reset_to_defaults(self) -> bool:
        return self.commit(GlobalSettings())
