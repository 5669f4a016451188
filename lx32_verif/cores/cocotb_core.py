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

"""Adapter exposing a cocotb DUT handle through the step/inspect contract.

Cocotb Core
===========

Wraps the ``lx32_system`` top level inside a running HDL simulation. The
adapter starts a free-running ``Clock`` on ``clk`` and each ``step`` spans
exactly one period, so the harness sees one committed instruction per call.

Expected DUT signals:
    Inputs:   clk, rst, instr[31:0], mem_rdata[31:0]
    Outputs:  mem_addr[31:0], mem_wdata[31:0], mem_we
    Internal: pc[31:0], rf.regs_out[0:31]

Step timing::

    falling edge: drive inputs
        ReadOnly: sample mem_* outputs
     rising edge: state commits
    falling edge: step returns, pc and registers are stable

The first step waits for a falling edge to line up with the clock; every
later step starts on the falling edge the previous one ended on.
"""

from typing import Any

import cocotb
from cocotb.clock import Clock
from cocotb.triggers import FallingEdge, ReadOnly, RisingEdge

from lx32_verif.config import MASK32, REG_COUNT
from lx32_verif.exceptions import RegisterAccessError
from lx32_verif.models.lsu import MemInterface


class CocotbCore:
    """Reference core backed by a cocotb simulation handle.

    Attributes:
        dut: cocotb handle of the lx32_system top level
        clock_period_ns: Clock period driven on ``clk``
    """

    def __init__(self, dut: Any, clock_period_ns: int = 10) -> None:
        self.dut = dut
        self.clock_period_ns = clock_period_ns
        self._aligned = False
        cocotb.start_soon(Clock(dut.clk, clock_period_ns, unit="ns").start())

    async def step(self, reset: bool, instr: int, mem_rdata: int) -> MemInterface:
        if not self._aligned:
            await FallingEdge(self.dut.clk)
            self._aligned = True

        self.dut.rst.value = int(bool(reset))
        self.dut.instr.value = instr & MASK32
        self.dut.mem_rdata.value = mem_rdata & MASK32

        await ReadOnly()
        mem_if = MemInterface(
            mem_addr=int(self.dut.mem_addr.value) & MASK32,
            mem_wdata=int(self.dut.mem_wdata.value) & MASK32,
            mem_we=bool(int(self.dut.mem_we.value)),
        )

        await RisingEdge(self.dut.clk)
        await FallingEdge(self.dut.clk)
        return mem_if

    def read_pc(self) -> int:
        return int(self.dut.pc.value) & MASK32

    def read_register(self, index: int) -> int:
        if not 0 <= index < REG_COUNT:
            raise RegisterAccessError(
                f"Register index {index} outside x0-x{REG_COUNT - 1}"
            )
        return int(self.dut.rf.regs_out[index].value) & MASK32
