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

"""Golden software models of the LX32 core.

This package contains the reference implementation of every datapath block.
The harness steps these models in lockstep with the RTL and compares the
resulting architectural state.

Modules
-------
isa
    Opcode, ALU-operation, branch-operation and write-back-source enums

decoder
    Instruction field extraction (opcode, funct3, funct7 bit, rs1, rs2, rd)

imm_gen
    I/S/B/U/J immediate reconstruction and opcode-driven selection

control_unit
    (opcode, funct3, funct7 bit) -> control bundle, inert for undefined opcodes

alu_model
    The ten RV32I ALU operations with 32-bit results and 5-bit shift
    amounts

branch_model
    Branch decision logic for conditional branches:
    - BEQ, BNE, BLT, BGE, BLTU, BGEU
    - Proper signed/unsigned comparison handling
    - Gating by the branch enable

register_file
    32 x 32-bit registers, x0 hardwired to zero

reg_generic
    Generic clocked register with reset and clock enable

memory_model
    4 KB word-addressed dual-port simulation memory

lsu
    Memory-interface pass-through (address, write data, write enable)

system_model
    Single-cycle integration: the golden ``Lx32System`` step function

Usage
-----
::

    from lx32_verif.models import Lx32System

    core = Lx32System()
    core.step(reset=True, instr=0, mem_rdata=0)
    core.step(reset=False, instr=0x00100093, mem_rdata=0)  # addi x1, x0, 1
"""

from lx32_verif.models.alu_model import alu_evaluate
from lx32_verif.models.branch_model import branch_taken_decision, branch_unit
from lx32_verif.models.control_unit import ControlSignals, resolve_control
from lx32_verif.models.decoder import DecodedFields, decode_fields
from lx32_verif.models.imm_gen import imm_gen
from lx32_verif.models.isa import AluOp, BranchOp, Opcode, ResultSource
from lx32_verif.models.lsu import MemInterface, lsu
from lx32_verif.models.memory_model import MemorySim
from lx32_verif.models.reg_generic import RegGeneric
from lx32_verif.models.register_file import RegisterFile
from lx32_verif.models.system_model import Lx32System, ProgramBench

__all__ = [
    "alu_evaluate",
    "branch_taken_decision",
    "branch_unit",
    "ControlSignals",
    "resolve_control",
    "DecodedFields",
    "decode_fields",
    "imm_gen",
    "AluOp",
    "BranchOp",
    "Opcode",
    "ResultSource",
    "MemInterface",
    "lsu",
    "MemorySim",
    "RegGeneric",
    "RegisterFile",
    "Lx32System",
    "ProgramBench",
]
