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

from .utils import keyframes

class AgitateEffect:
    NAME = "Agitate"

    def start(self, icon):
        # shake left/right three times, 100 ms per swing
        return keyframes(icon, b"offsetX", 700, (0, -10, 10, -10, 10, -10, 10, 0))
