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
# deskfences/logsink.py
"""
Diagnostic log file.

Every module logs through ``logging.getLogger(__name__)`` and tags records with
a category (``extra=category(LogCategory.SETTINGS)``). A single rotating file
handler on the ``deskfences`` logger writes them as

    2025-01-31 12:00:00 [Info][Settings] Options saved

and consults the live GlobalSettings on every record, so toggling logging in
the options dialog takes effect without reconfiguring anything.
"""
from __future__ import annotations
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config.model import GlobalSettings, LogCategory, LogLevel

PACKAGE_LOGGER = "deskfences"
LOG_FILE_NAME = "DeskFences.log"
FALLBACK_FILE_NAME = "DeskFences_Fallback.log"
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 5

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}
_LEVEL_NAMES = {
    logging.DEBUG: "Debug",
    logging.INFO: "Info",
    logging.WARNING: "Warn",
    logging.ERROR: "Error",
    logging.CRITICAL: "Error",
}

def category(cat: LogCategory) -> dict:
    """`extra` mapping that tags a log record with `cat`."""
    return {"category": cat.value}

class SettingsFilter(logging.Filter):
    """Gate records on logEnabled, minLogLevel and enabledLogCategories."""

    def __init__(self, settings: GlobalSettings):
        super().__init__()
        self.settings = settings

    def filter(self, record: logging.LogRecord) -> bool:
        cat = getattr(record, "category", None) or LogCategory.GENERAL.value
        record.category = cat
        record.level_label = _LEVEL_NAMES.get(record.levelno, record.levelname.title())
        s = self.settings
        if not s.log_enabled:
            return False
        if record.levelno < _LEVELS.get(s.min_log_level, logging.INFO):
            return False
        return cat in {c.value for c in s.enabled_log_categories}

class SafeRotatingFileHandler(RotatingFileHandler):
    """Rotating handler whose write failures go to a fallback file instead of stderr."""

    def handleError(self, record: logging.LogRecord) -> None:
        try:
            fallback = Path(self.baseFilename).with_name(FALLBACK_FILE_NAME)
            with open(fallback, "a", encoding="utf-8") as f:
                f.write(f"{datetime.now():%Y-%m-%d %H:%M:%S}: log write failed | {record.getMessage()}\n")
        except Exception:
            pass

def configure_logging(settings: GlobalSettings, log_dir: Path) -> SafeRotatingFileHandler:
    """Attach (or replace) the file handler on the package logger."""
    log = logging.getLogger(PACKAGE_LOGGER)
    for h in list(log.handlers):
        if isinstance(h, SafeRotatingFileHandler):
            log.removeHandler(h)
            h.close()
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    handler = SafeRotatingFileHandler(
        str(Path(log_dir) / LOG_FILE_NAME),
        maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8", delay=True,
    )
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(level_label)s][%(category)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    handler.addFilter(SettingsFilter(settings))
    log.addHandler(handler)
    log.setLevel(logging.DEBUG)
    return handler

def current_handler() -> Optional[SafeRotatingFileHandler]:
    for h in logging.getLogger(PACKAGE_LOGGER).handlers:
        if isinstance(h, SafeRotatingFileHandler):
            return h
    return None
