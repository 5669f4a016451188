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

"""Golden model of the single-cycle LX32 processor.

System Model
============

Composes decoder, control resolver, immediate generator, register file, ALU,
branch unit and LSU into one clock-step transition function.

Cycle Flow (RUN state)::

    instr ──► decode ──► control ──┐
                    └──► imm_gen ──┤
    regfile read (rs1, rs2) ───────┤
                                   ▼
            ALU(rs1, imm or rs2)   branch_unit(rs1, rs2) & branch
                   │                         │
                   ▼                         ▼
      write-back = mem_rdata if load      next_pc = pc + imm if taken
                   else ALU result                  else pc + 4
                   │                         │
                   └──────► commit ◄─────────┘
                              │
                   memory interface (addr = ALU result, wdata = rs2, we)

Asserting ``reset`` for a cycle forces the RESET behavior: PC goes to 0, the
register file is cleared and the memory interface is idle.

``evaluate`` computes every combinational value of a cycle without touching
state; ``step`` is ``evaluate`` followed by ``commit``. Because commit runs
only after all combinational values exist, no caller ever observes a
half-updated register file or PC.

Usage::

    core = Lx32System()
    core.step(reset=True, instr=0, mem_rdata=0)
    mem_if = core.step(reset=False, instr=0x00100093, mem_rdata=0)  # addi x1, x0, 1
    assert core.read_pc() == 4 and core.read_register(1) == 1
"""

from dataclasses import dataclass

from lx32_verif.config import MASK32, PC_INCREMENT
from lx32_verif.models.alu_model import alu_evaluate
from lx32_verif.models.branch_model import branch_unit
from lx32_verif.models.control_unit import ControlSignals, resolve_control
from lx32_verif.models.decoder import DecodedFields, decode_fields
from lx32_verif.models.imm_gen import imm_gen
from lx32_verif.models.isa import BranchOp, ResultSource
from lx32_verif.models.lsu import IDLE_MEM_INTERFACE, MemInterface, lsu
from lx32_verif.models.memory_model import MemorySim
from lx32_verif.models.register_file import RegisterFile
from lx32_verif.verification_types import Instruction, ProgramCounter, RegisterIndex


@dataclass(frozen=True)
class CycleResult:
    """Every combinational value of one RUN cycle.

    Attributes:
        fields: Decoded instruction fields
        control: Control bundle
        imm_ext: Generated immediate (unsigned 32-bit view)
        rs1_data: Register read port 1
        rs2_data: Register read port 2
        alu_b: ALU operand B after the immediate/register mux
        alu_result: ALU output
        branch_taken: Gated branch unit output
        rd_data: Write-back value
        next_pc: PC after this cycle commits
        mem_if: Memory-interface outputs
    """

    fields: DecodedFields
    control: ControlSignals
    imm_ext: int
    rs1_data: int
    rs2_data: int
    alu_b: int
    alu_result: int
    branch_taken: bool
    rd_data: int
    next_pc: int
    mem_if: MemInterface


class Lx32System:
    """Golden single-cycle core implementing the step/inspect contract.

    Attributes:
        pc: Program counter
        reg_file: Architectural register file
    """

    def __init__(self) -> None:
        self.pc = 0
        self.reg_file = RegisterFile()

    def evaluate(self, instr: Instruction, mem_rdata: int = 0) -> CycleResult:
        """Compute one RUN cycle without committing it.

        Args:
            instr: 32-bit instruction word
            mem_rdata: Data returned by the external memory for loads

        Returns:
            All combinational values of the cycle
        """
        fields = decode_fields(instr)
        control = resolve_control(fields.opcode, fields.funct3, fields.funct7_bit)
        imm_ext = imm_gen(instr)

        rs1_data = self.reg_file.read_rs1(fields.rs1)
        rs2_data = self.reg_file.read_rs2(fields.rs2)

        alu_b = imm_ext if control.alu_src_imm else rs2_data
        alu_result = alu_evaluate(rs1_data, alu_b, control.alu_op)
        branch_taken = branch_unit(
            rs1_data, rs2_data, control.branch, BranchOp.from_funct3(fields.funct3)
        )

        if control.result_src == ResultSource.MEMORY:
            rd_data = mem_rdata & MASK32
        else:
            rd_data = alu_result

        if control.branch and branch_taken:
            next_pc = (self.pc + imm_ext) & MASK32
        else:
            next_pc = (self.pc + PC_INCREMENT) & MASK32

        return CycleResult(
            fields=fields,
            control=control,
            imm_ext=imm_ext,
            rs1_data=rs1_data,
            rs2_data=rs2_data,
            alu_b=alu_b,
            alu_result=alu_result,
            branch_taken=branch_taken,
            rd_data=rd_data,
            next_pc=next_pc,
            mem_if=lsu(alu_result, rs2_data, control.mem_write),
        )

    def commit(self, cycle: CycleResult) -> None:
        """Apply the sequential updates of an evaluated cycle."""
        self.reg_file.tick(
            False, cycle.fields.rd, cycle.rd_data, cycle.control.reg_write
        )
        self.pc = cycle.next_pc

    def reset(self) -> None:
        self.pc = 0
        self.reg_file.tick(True, 0, 0, False)

    def step(self, reset: bool, instr: Instruction, mem_rdata: int) -> MemInterface:
        """Advance one clock edge.

        Args:
            reset: Reset input for this cycle
            instr: Instruction word presented this cycle
            mem_rdata: Memory read data presented this cycle

        Returns:
            Memory-interface outputs of the cycle (idle during reset)
        """
        if reset:
            self.reset()
            return IDLE_MEM_INTERFACE
        cycle = self.evaluate(instr, mem_rdata)
        self.commit(cycle)
        return cycle.mem_if

    def read_pc(self) -> ProgramCounter:
        return self.pc

    def read_register(self, index: RegisterIndex) -> int:
        return self.reg_file.get_reg(index)


def create_core() -> Lx32System:
    """Create a fresh golden core (all state zero, not yet reset)."""
    return Lx32System()


class ProgramBench:
    """Golden core with co-located memory, running a program from address 0.

    Each cycle fetches through the instruction port at PC, feeds the data
    port read at the address the cycle computes, and applies stores on the
    clock edge.

    Attributes:
        core: Golden core
        memory: Shared instruction/data memory
    """

    def __init__(
        self, core: Lx32System | None = None, memory: MemorySim | None = None
    ) -> None:
        self.core = core if core is not None else Lx32System()
        self.memory = memory if memory is not None else MemorySim()

    def reset(self, cycles: int = 1) -> None:
        for _ in range(cycles):
            self.core.step(True, 0, 0)

    def cycle(self) -> CycleResult:
        """Run one instruction and return its combinational values."""
        instr = self.memory.read_instr(self.core.read_pc())
        probe = self.core.evaluate(instr, 0)
        result = self.core.evaluate(instr, self.memory.read_data(probe.mem_if.mem_addr))
        self.core.commit(result)
        self.memory.write_data(
            result.mem_if.mem_addr, result.mem_if.mem_wdata, result.mem_if.mem_we
        )
        return result

    def run(self, cycles: int) -> list[CycleResult]:
        return [self.cycle() for _ in range(cycles)]
