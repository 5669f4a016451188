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

"""Per-step observations of both cores and the differences between them.

Records
=======

After every lockstep cycle the runner captures one ``StateSnapshot`` per side
and pairs them in a ``ComparisonRecord``. Family comparators turn a record
into a list of ``Discrepancy`` entries; an empty list means the step matched.

Snapshots only hold the registers a family watches, so a record stays small
even for long runs; the system family watches all 32.
"""

from dataclasses import dataclass, field

from lx32_verif.config import REG_COUNT
from lx32_verif.exceptions import (
    InvariantViolation,
    MemoryMismatch,
    StateMismatch,
    VerificationError,
)
from lx32_verif.models.lsu import IDLE_MEM_INTERFACE, MemInterface


@dataclass(frozen=True)
class StateSnapshot:
    """Architectural state observed on one side after a step.

    Attributes:
        pre_pc: PC before the step
        pc: PC after the step
        registers: Watched register index -> value
        mem_if: Memory-interface outputs emitted during the step, or None
            when the core cannot report them
    """

    pre_pc: int
    pc: int
    registers: dict[int, int] = field(default_factory=dict)
    mem_if: MemInterface | None = IDLE_MEM_INTERFACE


@dataclass(frozen=True)
class ComparisonRecord:
    """Golden and reference observations of one lockstep step.

    Attributes:
        iteration: Harness iteration (0-based, reset cycles excluded)
        instr: Instruction word driven into both cores
        mem_rdata: Memory read data driven into both cores
        golden: Golden-model snapshot
        reference: Reference-core snapshot
        family: Name of the family that generated the stimulus
    """

    iteration: int
    instr: int
    mem_rdata: int
    golden: StateSnapshot
    reference: StateSnapshot
    family: str = ""

    @property
    def watched(self) -> tuple[int, ...]:
        return tuple(self.golden.registers)


@dataclass(frozen=True)
class Discrepancy:
    """One disagreement found by a comparator.

    Attributes:
        component: What disagreed ("PC", "REGFILE", "MEM_ADDR", ...)
        expected: Golden value
        actual: Reference value
        register: Register index for register-file disagreements
        error: Exception type the runner raises for this disagreement
    """

    component: str
    expected: int
    actual: int
    register: int | None = None
    error: type[VerificationError] = StateMismatch

    def describe(self) -> str:
        target = f" x{self.register}" if self.register is not None else ""
        return (
            f"{self.component}{target}: expected=0x{self.expected:08x}, "
            f"actual=0x{self.actual:08x}"
        )


def capture_snapshot(
    core, pre_pc: int, watched: tuple[int, ...], mem_if: MemInterface | None
) -> StateSnapshot:
    """Read PC and watched registers from any core after a step."""
    return StateSnapshot(
        pre_pc=pre_pc,
        pc=core.read_pc(),
        registers={index: core.read_register(index) for index in watched},
        mem_if=mem_if,
    )


def compare_pc(record: ComparisonRecord) -> list[Discrepancy]:
    if record.golden.pc == record.reference.pc:
        return []
    return [Discrepancy("PC", record.golden.pc, record.reference.pc)]


def compare_registers(record: ComparisonRecord) -> list[Discrepancy]:
    return [
        Discrepancy("REGFILE", value, record.reference.registers[index], register=index)
        for index, value in record.golden.registers.items()
        if record.reference.registers[index] != value
    ]


def compare_mem_if(record: ComparisonRecord) -> list[Discrepancy]:
    """Compare memory-interface outputs; skipped when either side has none."""
    golden, reference = record.golden.mem_if, record.reference.mem_if
    if golden is None or reference is None:
        return []
    found = []
    if golden.mem_addr != reference.mem_addr:
        found.append(
            Discrepancy("MEM_ADDR", golden.mem_addr, reference.mem_addr, error=MemoryMismatch)
        )
    if golden.mem_wdata != reference.mem_wdata:
        found.append(
            Discrepancy("MEM_WDATA", golden.mem_wdata, reference.mem_wdata, error=MemoryMismatch)
        )
    if golden.mem_we != reference.mem_we:
        found.append(
            Discrepancy(
                "MEM_WE", int(golden.mem_we), int(reference.mem_we), error=MemoryMismatch
            )
        )
    return found


def check_zero_register(golden_x0: int, reference_x0: int) -> list[Discrepancy]:
    """x0 must read 0 on both sides; expected is always 0."""
    found = []
    if golden_x0 != 0:
        found.append(
            Discrepancy("X0_GOLDEN", 0, golden_x0, register=0, error=InvariantViolation)
        )
    if reference_x0 != 0:
        found.append(
            Discrepancy("X0_REFERENCE", 0, reference_x0, register=0, error=InvariantViolation)
        )
    return found


ALL_REGISTERS = tuple(range(REG_COUNT))
