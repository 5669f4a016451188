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

"""Software model of the control unit.

Control Resolver
================

Maps (opcode, funct3, funct7 bit) to the control bundle that steers the
single-cycle datapath:

    ============  ==========  =======  ======  =========  =========  ==========
    opcode        alu_op      imm src  branch  mem_write  reg_write  result src
    ============  ==========  =======  ======  =========  =========  ==========
    OP            funct3/f7   no       no      no         yes        ALU
    OP_IMM        funct3(/f7) yes      no      no         yes        ALU
    LOAD          ADD         yes      no      no         yes        MEMORY
    STORE         ADD         yes      no      yes        no         ALU
    BRANCH        SUB         no       yes     no         no         ALU
    (other)       ADD         no       no      no         no         ALU
    ============  ==========  =======  ======  =========  =========  ==========

The funct7 bit (instr[30]) picks SUB over ADD and SRA over SRL for OP, and
SRA over SRL for OP_IMM; there is no immediate subtract.

LUI, AUIPC, JAL and JALR land in the last row. The datapath has no PC input
to the ALU and the PC update only knows +4 and the branch target, so these
opcodes resolve to the inert bundle together with every reserved encoding.
The inert bundle is a safe default, not an error.

Note that reg_write is therefore not simply "everything but STORE and
BRANCH": a full RV32I core writes rd for LUI, AUIPC, JAL and JALR (the
upper immediate or the link address), while this model keeps reg_write low.
A system-family mismatch in rd on one of these four opcodes means the
reference core implements them, not that decoding here is broken.
"""

from dataclasses import dataclass

from lx32_verif.models.isa import AluOp, Opcode, ResultSource


@dataclass(frozen=True)
class ControlSignals:
    """Control bundle for one cycle.

    Attributes:
        alu_op: Operation the ALU performs
        alu_src_imm: True selects the generated immediate as ALU operand B,
            False selects the rs2 register value
        branch: Branch enable (gates the branch unit)
        mem_write: Memory write enable
        reg_write: Register file write enable
        result_src: Write-back source (ALU result or memory read data)
    """

    alu_op: AluOp = AluOp.ADD
    alu_src_imm: bool = False
    branch: bool = False
    mem_write: bool = False
    reg_write: bool = False
    result_src: ResultSource = ResultSource.ALU


INERT_CONTROL = ControlSignals()
"""No writes, no branch: the bundle for every undefined opcode."""

_FUNCT3_TO_ALU_OP = {
    0b000: AluOp.ADD,
    0b001: AluOp.SLL,
    0b010: AluOp.SLT,
    0b011: AluOp.SLTU,
    0b100: AluOp.XOR,
    0b101: AluOp.SRL,
    0b110: AluOp.OR,
    0b111: AluOp.AND,
}


def _alu_op_for(funct3: int, funct7_bit: bool, allow_sub: bool) -> AluOp:
    op = _FUNCT3_TO_ALU_OP[funct3 & 0x7]
    if funct7_bit:
        if op is AluOp.ADD and allow_sub:
            return AluOp.SUB
        if op is AluOp.SRL:
            return AluOp.SRA
    return op


def resolve_control(opcode: int, funct3: int, funct7_bit: bool) -> ControlSignals:
    """Resolve the control bundle for one decoded instruction.

    Args:
        opcode: 7-bit opcode field
        funct3: 3-bit funct3 field
        funct7_bit: instr[30], the add/sub and srl/sra discriminator

    Returns:
        Control bundle; INERT_CONTROL for any opcode this core does not execute
    """
    if opcode == Opcode.OP:
        return ControlSignals(
            alu_op=_alu_op_for(funct3, funct7_bit, allow_sub=True),
            reg_write=True,
        )
    if opcode == Opcode.OP_IMM:
        return ControlSignals(
            alu_op=_alu_op_for(funct3, funct7_bit, allow_sub=False),
            alu_src_imm=True,
            reg_write=True,
        )
    if opcode == Opcode.LOAD:
        return ControlSignals(
            alu_src_imm=True,
            reg_write=True,
            result_src=ResultSource.MEMORY,
        )
    if opcode == Opcode.STORE:
        return ControlSignals(alu_src_imm=True, mem_write=True)
    if opcode == Opcode.BRANCH:
        return ControlSignals(alu_op=AluOp.SUB, branch=True)
    return INERT_CONTROL
