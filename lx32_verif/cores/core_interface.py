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

"""Step/inspect contract shared by the golden model and every reference core.

Core Interface
==============

The harness only ever talks to a core through this capability interface, so
the same comparison code runs against any conforming implementation:

    step(reset, instr, mem_rdata) -> MemInterface | None
        One clock edge. Inputs are the reset flag, the instruction word and
        the memory read data; the result is the memory-interface output of
        the cycle (address = ALU result, write data = rs2, write enable),
        or None for a core that cannot observe it.

    read_pc() -> int
    read_register(index) -> int
        Inspection after a step; x0 is expected to read 0.

``CoreHandle`` has a blocking ``step`` (golden model, ctypes adapter).
``AsyncCoreHandle`` has an awaitable ``step`` for cores that live inside the
cocotb scheduler.
"""

from collections.abc import Awaitable
from typing import Protocol, runtime_checkable

from lx32_verif.models.lsu import MemInterface


@runtime_checkable
class CoreHandle(Protocol):
    """Blocking step/inspect contract."""

    def step(self, reset: bool, instr: int, mem_rdata: int) -> MemInterface | None: ...

    def read_pc(self) -> int: ...

    def read_register(self, index: int) -> int: ...


@runtime_checkable
class AsyncCoreHandle(Protocol):
    """Step/inspect contract whose step must be awaited."""

    def step(
        self, reset: bool, instr: int, mem_rdata: int
    ) -> Awaitable[MemInterface | None]: ...

    def read_pc(self) -> int: ...

    def read_register(self, index: int) -> int: ...
