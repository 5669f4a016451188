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

"""Opcode, ALU-operation and branch-operation encodings of the LX32 core.

ISA
===

These enums are the contract between the decoder, the control resolver and
the execute datapath. Their numeric values match the RTL packages, so they
can be driven into or compared against the hardware directly.
"""

from enum import IntEnum


class Opcode(IntEnum):
    """RV32I base opcodes (instruction bits [6:0])."""

    # U-type
    LUI = 0b0110111
    AUIPC = 0b0010111

    # J-type
    JAL = 0b1101111
    JALR = 0b1100111

    # B-type
    BRANCH = 0b1100011

    # Load / store
    LOAD = 0b0000011
    STORE = 0b0100011

    # ALU
    OP_IMM = 0b0010011
    OP = 0b0110011


class AluOp(IntEnum):
    """ALU operation selector driven by the control resolver."""

    ADD = 0
    SUB = 1
    SLL = 2
    SRL = 3
    SRA = 4
    SLT = 5
    SLTU = 6
    XOR = 7
    OR = 8
    AND = 9


class BranchOp(IntEnum):
    """Branch comparison selector."""

    EQ = 0
    NE = 1
    LT = 2
    GE = 3
    LTU = 4
    GEU = 5

    @classmethod
    def from_funct3(cls, funct3: int) -> "BranchOp":
        """Map a branch funct3 field to its comparison.

        funct3 values 2 and 3 are not defined by RV32I and fall back to EQ.
        """
        return _FUNCT3_TO_BRANCH_OP.get(funct3 & 0x7, cls.EQ)


class ResultSource(IntEnum):
    """Write-back mux select."""

    ALU = 0
    MEMORY = 1


_FUNCT3_TO_BRANCH_OP = {
    0b000: BranchOp.EQ,
    0b001: BranchOp.NE,
    0b100: BranchOp.LT,
    0b101: BranchOp.GE,
    0b110: BranchOp.LTU,
    0b111: BranchOp.GEU,
}
