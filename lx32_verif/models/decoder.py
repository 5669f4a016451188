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

"""Field decoder for 32-bit instruction words.

No validation happens here: reserved opcodes are passed through unchanged and
the control resolver turns them into an inert bundle.
"""

from dataclasses import dataclass

from lx32_verif.config import FUNCT3_MASK, FUNCT7_BIT_POSITION, OPCODE_MASK
from lx32_verif.utils.riscv_utils import bits


@dataclass(frozen=True)
class DecodedFields:
    """Register-index and function fields of one instruction word."""

    opcode: int
    funct3: int
    funct7_bit: bool
    rs1: int
    rs2: int
    rd: int


def decode_fields(instr: int) -> DecodedFields:
    """Split an instruction word into its decode fields."""
    return DecodedFields(
        opcode=instr & OPCODE_MASK,
        funct3=(instr >> 12) & FUNCT3_MASK,
        funct7_bit=bool((instr >> FUNCT7_BIT_POSITION) & 0x1),
        rs1=bits(instr, 19, 15),
        rs2=bits(instr, 24, 20),
        rd=bits(instr, 11, 7),
    )
