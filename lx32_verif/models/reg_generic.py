#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Software model of the generic clocked register (reset + clock enable)."""

from lx32_verif.config import XLEN


class RegGeneric:
    """Width-parameterized register with active-high reset and clock enable.

    Attributes:
        data_out: Current register output
        width: Register width in bits
    """

    def __init__(self, width: int = XLEN) -> None:
        if width <= 0:
            raise ValueError(f"Register width must be positive, got {width}")
        self.width = width
        self.data_out = 0

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def tick(self, rst: bool, en: bool, data_in: int) -> None:
        """Clock edge: reset wins over enable; with neither, hold."""
        if rst:
            self.data_out = 0
        elif en:
            self.data_out = data_in & self.mask
