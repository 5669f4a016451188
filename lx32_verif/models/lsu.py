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

"""Load/store interface of the single-cycle core.

The LSU is a pure pass-through: the ALU result is the memory address, the
rs2 value is the write data and the control bundle's mem_write is the write
enable. Its output is also what every ``step`` call returns.
"""

from dataclasses import dataclass

from lx32_verif.config import MASK32


@dataclass(frozen=True)
class MemInterface:
    """Memory-interface outputs of one cycle."""

    mem_addr: int = 0
    mem_wdata: int = 0
    mem_we: bool = False

    def __str__(self) -> str:
        return (
            f"addr:0x{self.mem_addr:08x} wdata:0x{self.mem_wdata:08x} "
            f"we:{int(self.mem_we)}"
        )


IDLE_MEM_INTERFACE = MemInterface()


def lsu(alu_result: int, write_data: int, mem_write: bool) -> MemInterface:
    """Drive the memory interface from the execute-stage values."""
    return MemInterface(
        mem_addr=alu_result & MASK32,
        mem_wdata=write_data & MASK32,
        mem_we=bool(mem_write),
    )
