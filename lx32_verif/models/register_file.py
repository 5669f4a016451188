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

"""Software model of the LX32 register file.

Register File
=============

    - 32 registers (x0-x31), 32 bits wide
    - x0 is hardwired to zero: it reads 0 and ignores writes
    - Two asynchronous read ports (rs1, rs2)
    - One synchronous write port, applied by ``tick`` on the clock edge
"""

from lx32_verif.config import MASK32, REG_COUNT
from lx32_verif.exceptions import RegisterAccessError
from lx32_verif.verification_types import RegisterIndex


def _check_index(index: int) -> None:
    if not 0 <= index < REG_COUNT:
        raise RegisterAccessError(
            f"Register index {index} outside x0-x{REG_COUNT - 1}"
        )


class RegisterFile:
    """32-entry register file with x0 hardwired to zero."""

    def __init__(self) -> None:
        self._regs: list[int] = [0] * REG_COUNT

    def read_rs1(self, addr: RegisterIndex) -> int:
        """Read port 1 (asynchronous)."""
        return self.get_reg(addr)

    def read_rs2(self, addr: RegisterIndex) -> int:
        """Read port 2 (asynchronous)."""
        return self.get_reg(addr)

    def tick(self, rst: bool, addr_rd: RegisterIndex, data_rd: int, we: bool) -> None:
        """Write port (synchronous).

        Args:
            rst: Clear every register
            addr_rd: Destination register index
            data_rd: Value to write
            we: Write enable; the write only lands when addr_rd != 0
        """
        if rst:
            self._regs = [0] * REG_COUNT
            return
        _check_index(addr_rd)
        if we and addr_rd != 0:
            self._regs[addr_rd] = data_rd & MASK32

    def get_reg(self, index: RegisterIndex) -> int:
        """Current value of a register, x0 always reading 0."""
        _check_index(index)
        if index == 0:
            return 0
        return self._regs[index]

    def snapshot(self) -> list[int]:
        """Values of x0-x31 as a new list."""
        return [self.get_reg(index) for index in range(REG_COUNT)]
