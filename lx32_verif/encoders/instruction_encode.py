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

"""Binary encoders for the six 32-bit RV32I instruction formats.

Instruction Encode
==================

Each encoder takes assembly-level operands (register indices and signed
immediates/offsets) and returns the 32-bit instruction word. Arguments are
range-checked with ``HardwareAssertions`` so a bad generator call fails at
the encoder instead of silently producing a word from another family.

Formats::

    R  funct7[31:25] rs2[24:20] rs1[19:15] funct3[14:12] rd[11:7]        opcode
    I  imm[11:0]               rs1         funct3        rd              opcode
    S  imm[11:5]     rs2       rs1         funct3        imm[4:0]        opcode
    B  imm[12|10:5]  rs2       rs1         funct3        imm[4:1|11]     opcode
    U  imm[31:12]                                        rd              opcode
    J  imm[20|10:1|11|19:12]                             rd              opcode
"""

from lx32_verif.models.isa import Opcode
from lx32_verif.utils.validation import HardwareAssertions


def _check_registers(*registers: int) -> None:
    for register in registers:
        HardwareAssertions.assert_register_valid(register)


def enc_r(f7: int, rs2: int, rs1: int, f3: int, rd: int, opcode: int = Opcode.OP) -> int:
    """Encode an R-type instruction."""
    _check_registers(rs2, rs1, rd)
    return (
        ((f7 & 0x7F) << 25)
        | (rs2 << 20)
        | (rs1 << 15)
        | ((f3 & 0x7) << 12)
        | (rd << 7)
        | (opcode & 0x7F)
    )


def enc_i(imm: int, rs1: int, f3: int, rd: int, opcode: int = Opcode.OP_IMM) -> int:
    """Encode an I-type instruction with a signed 12-bit immediate."""
    _check_registers(rs1, rd)
    HardwareAssertions.assert_immediate_12bit(imm)
    return (
        ((imm & 0xFFF) << 20)
        | (rs1 << 15)
        | ((f3 & 0x7) << 12)
        | (rd << 7)
        | (opcode & 0x7F)
    )


def enc_i_shift(shamt: int, f7: int, rs1: int, f3: int, rd: int) -> int:
    """Encode an immediate shift; only the low 5 bits of shamt are used."""
    _check_registers(rs1, rd)
    return (
        ((f7 & 0x7F) << 25)
        | ((shamt & 0x1F) << 20)
        | (rs1 << 15)
        | ((f3 & 0x7) << 12)
        | (rd << 7)
        | Opcode.OP_IMM
    )


def enc_i_load(imm: int, rs1: int, f3: int, rd: int) -> int:
    """Encode a load instruction."""
    return enc_i(imm, rs1, f3, rd, opcode=Opcode.LOAD)


def enc_i_jalr(imm: int, rs1: int, rd: int) -> int:
    """Encode JALR."""
    return enc_i(imm, rs1, 0b000, rd, opcode=Opcode.JALR)


def enc_s(rs2: int, rs1: int, f3: int, imm: int) -> int:
    """Encode an S-type store with a signed 12-bit offset."""
    _check_registers(rs2, rs1)
    HardwareAssertions.assert_immediate_12bit(imm)
    imm12 = imm & 0xFFF
    return (
        (((imm12 >> 5) & 0x7F) << 25)
        | (rs2 << 20)
        | (rs1 << 15)
        | ((f3 & 0x7) << 12)
        | ((imm12 & 0x1F) << 7)
        | Opcode.STORE
    )


def enc_b(rs2: int, rs1: int, f3: int, offset: int) -> int:
    """Encode a B-type branch with an even signed offset in [-4096, 4094]."""
    _check_registers(rs2, rs1)
    HardwareAssertions.assert_branch_offset(offset)
    b_imm = offset & 0x1FFF
    return (
        (((b_imm >> 12) & 0x1) << 31)
        | (((b_imm >> 5) & 0x3F) << 25)
        | (rs2 << 20)
        | (rs1 << 15)
        | ((f3 & 0x7) << 12)
        | (((b_imm >> 1) & 0xF) << 8)
        | (((b_imm >> 11) & 0x1) << 7)
        | Opcode.BRANCH
    )


def enc_u(imm20: int, rd: int, opcode: int = Opcode.LUI) -> int:
    """Encode a U-type instruction from its 20-bit upper immediate field."""
    _check_registers(rd)
    HardwareAssertions.assert_upper_immediate(imm20)
    return (imm20 << 12) | (rd << 7) | (opcode & 0x7F)


def enc_j(rd: int, offset: int) -> int:
    """Encode JAL with an even signed offset."""
    _check_registers(rd)
    HardwareAssertions.assert_jump_offset(offset)
    j_imm = offset & 0x1FFFFF
    return (
        (((j_imm >> 20) & 0x1) << 31)
        | (((j_imm >> 1) & 0x3FF) << 21)
        | (((j_imm >> 11) & 0x1) << 20)
        | (((j_imm >> 12) & 0xFF) << 12)
        | (rd << 7)
        | Opcode.JAL
    )
