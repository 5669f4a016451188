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

"""Software model of the immediate generation unit.

Immediate Generator
===================

Reassembles and sign-extends the five RV32I immediate layouts. Every
extractor returns the immediate as an unsigned 32-bit value, exactly as the
hardware presents it on the datapath; use ``to_signed32`` to view it as a
signed offset.

Bit layouts::

    I  imm[11:0]  = instr[31:20]
    S  imm[11:0]  = instr[31:25] | instr[11:7]
    B  imm[12:1]  = instr[31] | instr[7] | instr[30:25] | instr[11:8]   (imm[0] = 0)
    U  imm[31:12] = instr[31:12]                                        (imm[11:0] = 0)
    J  imm[20:1]  = instr[31] | instr[19:12] | instr[20] | instr[30:21] (imm[0] = 0)

Selection is opcode-driven (see ``imm_gen``); opcodes without an immediate,
including the register-register ALU opcode, produce zero.
"""

from lx32_verif.config import (
    B_IMM_BITS,
    I_IMM_BITS,
    J_IMM_BITS,
    MASK32,
    OPCODE_MASK,
    S_IMM_BITS,
)
from lx32_verif.models.isa import Opcode
from lx32_verif.utils.riscv_utils import bits, sign_extend


def get_i_imm(instr: int) -> int:
    """I-format immediate: instr[31:20], sign-extended."""
    return sign_extend(bits(instr, 31, 20), I_IMM_BITS) & MASK32


def get_s_imm(instr: int) -> int:
    """S-format immediate: instr[31:25] concatenated with instr[11:7]."""
    imm_12b = (bits(instr, 31, 25) << 5) | bits(instr, 11, 7)
    return sign_extend(imm_12b, S_IMM_BITS) & MASK32


def get_b_imm(instr: int) -> int:
    """B-format immediate with implicit zero low bit, sign-extended from bit 12."""
    imm_13b = (
        (bits(instr, 31, 31) << 12)
        | (bits(instr, 7, 7) << 11)
        | (bits(instr, 30, 25) << 5)
        | (bits(instr, 11, 8) << 1)
    )
    return sign_extend(imm_13b, B_IMM_BITS) & MASK32


def get_u_imm(instr: int) -> int:
    """U-format immediate: instr[31:12] in the upper 20 bits."""
    return instr & 0xFFFFF000


def get_j_imm(instr: int) -> int:
    """J-format immediate with implicit zero low bit, sign-extended from bit 20."""
    imm_21b = (
        (bits(instr, 31, 31) << 20)
        | (bits(instr, 19, 12) << 12)
        | (bits(instr, 20, 20) << 11)
        | (bits(instr, 30, 21) << 1)
    )
    return sign_extend(imm_21b, J_IMM_BITS) & MASK32


_IMMEDIATE_BY_OPCODE = {
    Opcode.OP_IMM: get_i_imm,
    Opcode.LOAD: get_i_imm,
    Opcode.JALR: get_i_imm,
    Opcode.STORE: get_s_imm,
    Opcode.BRANCH: get_b_imm,
    Opcode.LUI: get_u_imm,
    Opcode.AUIPC: get_u_imm,
    Opcode.JAL: get_j_imm,
}


def imm_gen(instr: int) -> int:
    """Select and sign-extend the immediate for an instruction word.

    Args:
        instr: 32-bit instruction word

    Returns:
        Sign-extended immediate as an unsigned 32-bit value, or 0 for
        opcodes that carry no immediate (OP and undefined opcodes)

    Example:
        >>> hex(imm_gen(0xFFF00093))  # addi x1, x0, -1
        '0xffffffff'
    """
    extractor = _IMMEDIATE_BY_OPCODE.get(instr & OPCODE_MASK)
    if extractor is None:
        return 0
    return extractor(instr)
