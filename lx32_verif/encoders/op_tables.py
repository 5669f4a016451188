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

"""Operation tables mapping instruction mnemonics to encoders and evaluators.

Op Tables
=========

This module is the central registry that connects instruction mnemonics
(like "add", "lw", "beq") to their corresponding:

    1. Encoder function: Converts instruction parameters to 32-bit binary
    2. Evaluator function: Computes the result in software (for verification)

Table Structure:
    - R_ALU: Register-register operations, (rd, rs1, rs2) -> word
    - I_ALU: Immediate ALU operations, (rd, rs1, imm) -> word
    - LOADS: Load operations, (rd, rs1, imm) -> word (encoder only)
    - STORES: Store operations, (rs2, rs1, imm) -> word (encoder only)
    - BRANCHES: Conditional branches, (rs2, rs1, offset) -> word, with the
      branch decision as evaluator
    - UPPER: LUI/AUIPC, (rd, imm20) -> word (encoder only)
    - JUMPS: JAL (rd, offset) and JALR (rd, rs1, imm) (encoder only)

UPPER and JUMPS exist so tests can drive those opcodes; the LX32 datapath
resolves them to the inert control bundle.

Example Usage:
    >>> encoder, evaluator = R_ALU["add"]
    >>> binary = encoder(rd=5, rs1=3, rs2=4)  # add x5, x3, x4
    >>> evaluator(7, 8)
    15
"""

from collections.abc import Callable

from lx32_verif.encoders.instruction_encode import (
    enc_b,
    enc_i,
    enc_i_jalr,
    enc_i_load,
    enc_i_shift,
    enc_j,
    enc_r,
    enc_s,
    enc_u,
)
from lx32_verif.models.alu_model import (
    add,
    and_rv,
    or_rv,
    sll,
    slt,
    sltu,
    sra,
    srl,
    sub,
    xor,
)
from lx32_verif.models.branch_model import branch_taken_decision
from lx32_verif.models.isa import Opcode


def make_r_encoder(f7: int, f3: int) -> Callable:
    """Create R-type instruction encoders."""
    return lambda rd, rs1, rs2: enc_r(f7, rs2, rs1, f3, rd)


def make_i_encoder(f3: int) -> Callable:
    """Create I-type ALU instruction encoders."""
    return lambda rd, rs1, imm: enc_i(imm, rs1, f3, rd)


def make_i_shift_encoder(f3: int, f7: int) -> Callable:
    """Create I-type shift instruction encoders (imm is the shift amount)."""
    return lambda rd, rs1, imm: enc_i_shift(imm, f7, rs1, f3, rd)


def make_load_encoder(f3: int) -> Callable:
    """Create load instruction encoders."""
    return lambda rd, rs1, imm: enc_i_load(imm, rs1, f3, rd)


def make_store_encoder(f3: int) -> Callable:
    """Create store instruction encoders."""
    return lambda rs2, rs1, imm: enc_s(rs2, rs1, f3, imm)


def make_branch_encoder(f3: int) -> Callable:
    """Create branch instruction encoders."""
    return lambda rs2, rs1, offset: enc_b(rs2, rs1, f3, offset)


def make_branch_evaluator(mnemonic: str) -> Callable:
    """Bind a branch mnemonic to its decision function."""
    return lambda rs1_val, rs2_val: branch_taken_decision(mnemonic, rs1_val, rs2_val)


# operation tables (opcode name -> (encoder, evaluator))
# encoder encodes each instruction into raw bits to drive into the core
# evaluator computes the expected result of the instruction in software
R_ALU: dict[str, tuple[Callable, Callable]] = {
    "add": (make_r_encoder(0x00, 0x0), add),
    "sub": (make_r_encoder(0x20, 0x0), sub),
    "sll": (make_r_encoder(0x00, 0x1), sll),
    "slt": (make_r_encoder(0x00, 0x2), slt),
    "sltu": (make_r_encoder(0x00, 0x3), sltu),
    "xor": (make_r_encoder(0x00, 0x4), xor),
    "srl": (make_r_encoder(0x00, 0x5), srl),
    "sra": (make_r_encoder(0x20, 0x5), sra),
    "or": (make_r_encoder(0x00, 0x6), or_rv),
    "and": (make_r_encoder(0x00, 0x7), and_rv),
}

I_ALU: dict[str, tuple[Callable, Callable]] = {
    "addi": (make_i_encoder(0x0), add),
    "slti": (make_i_encoder(0x2), slt),
    "sltiu": (make_i_encoder(0x3), sltu),
    "xori": (make_i_encoder(0x4), xor),
    "ori": (make_i_encoder(0x6), or_rv),
    "andi": (make_i_encoder(0x7), and_rv),
    "slli": (make_i_shift_encoder(0x1, 0x00), sll),
    "srli": (make_i_shift_encoder(0x5, 0x00), srl),
    "srai": (make_i_shift_encoder(0x5, 0x20), sra),
}

LOADS: dict[str, Callable] = {
    "lw": make_load_encoder(0x2),
}

STORES: dict[str, Callable] = {
    "sw": make_store_encoder(0x2),
}

BRANCHES: dict[str, tuple[Callable, Callable]] = {
    "beq": (make_branch_encoder(0x0), make_branch_evaluator("beq")),
    "bne": (make_branch_encoder(0x1), make_branch_evaluator("bne")),
    "blt": (make_branch_encoder(0x4), make_branch_evaluator("blt")),
    "bge": (make_branch_encoder(0x5), make_branch_evaluator("bge")),
    "bltu": (make_branch_encoder(0x6), make_branch_evaluator("bltu")),
    "bgeu": (make_branch_encoder(0x7), make_branch_evaluator("bgeu")),
}

UPPER: dict[str, Callable] = {
    "lui": lambda rd, imm20: enc_u(imm20, rd, Opcode.LUI),
    "auipc": lambda rd, imm20: enc_u(imm20, rd, Opcode.AUIPC),
}

JUMPS: dict[str, Callable] = {
    "jal": lambda rd, offset: enc_j(rd, offset),
    "jalr": lambda rd, rs1, imm: enc_i_jalr(imm, rs1, rd),
}
