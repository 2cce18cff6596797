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
from __future__ import annotations
from typing import Callable, Dict, Optional, Type, Any
import importlib, inspect, logging, pkgutil

from ..config.model import LaunchEffect, LogCategory
from ..logsink import category

_EffectFactory = Callable[[], Any]
logger = logging.getLogger(__name__)

def _dbg(msg: str):
    logger.debug("[effects] %s", msg, extra=category(LogCategory.GENERAL))

class NoopEffect:
    NAME = "none"

    def start(self, icon):
        return None

class _Registry:
    def __init__(self):
        self._factories: Dict[str, _EffectFactory | Type] = {}
        self._instances: Dict[str, Any] = {}
        self._autodiscovered: bool = False

    def register(self, name: str, factory_or_class: _EffectFactory | Type) -> None:
        key = (name or "").strip().lower()
        if not key:
            raise ValueError("Effect name must not be empty.")
        self._factories[key] = factory_or_class
        self._instances.pop(key, None)

    def _get_or_create(self, key: str) -> Any:
        if key in self._instances:
            return self._instances[key]
        inst = self._factories[key]()
        self._instances[key] = inst
        return inst

    def _is_concrete_effect_class(self, cls: Type, mod_name: str) -> bool:
        if not inspect.isclass(cls): return False
        if getattr(cls, "__module__", None) != mod_name: return False
        if inspect.isabstract(cls): return False
        if not callable(getattr(cls, "start", None)): return False
        return hasattr(cls, "NAME")

    def _register_from_module(self, mod) -> bool:
        found = False
        for obj in vars(mod).values():
            if not self._is_concrete_effect_class(obj, mod.__name__): continue
            self.register(str(obj.NAME), obj)
            found = True
        return found

    def _maybe_autodiscover(self):
        if self._autodiscovered: return
        pkg_name = __name__.rsplit(".", 1)[0] + ".plugins"
        try:
            pkg = importlib.import_module(pkg_name)
            for _, modname, ispkg in pkgutil.iter_modules(getattr(pkg, "__path__", []), pkg.__name__ + "."):
                if ispkg or modname.endswith(".utils"): continue
                try:
                    mod = importlib.import_module(modname)
                    if not self._register_from_module(mod):
                        _dbg(f"No effect class in {modname}")
                except Exception as e:
                    _dbg(f"Plugin import error {modname}: {e}")
        except ImportError as e:
            _dbg(f"No plugin package: {e}")
        self._autodiscovered = True

    def get(self, name: Optional[str | LaunchEffect]) -> Any:
        """Effect strategy for `name`; unknown names fall back to Zoom."""
        self._maybe_autodiscover()
        if isinstance(name, LaunchEffect):
            name = name.value
        key = (name or "").strip().lower() or LaunchEffect.ZOOM.value.lower()
        if key == "none": return NoopEffect()
        if key in self._factories: return self._get_or_create(key)
        fallback = LaunchEffect.ZOOM.value.lower()
        if fallback in self._factories: return self._get_or_create(fallback)
        return NoopEffect()

    def names(self) -> list[str]:
        self._maybe_autodiscover()
        return sorted(self._factories.keys())

registry = _Registry()

def register(name: str, factory_or_class: _EffectFactory | Type) -> None:
    registry.register(name, factory_or_class)
