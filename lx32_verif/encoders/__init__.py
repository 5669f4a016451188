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

"""RV32I instruction encoding utilities.

This package provides binary encoding for the instructions the harness
drives into the LX32 core.

Modules
-------
instruction_encode
    Encoders for the 32-bit instruction formats (R, I, S, B, U, J)

op_tables
    Mapping tables from instruction mnemonics to encoders and evaluators.
    This is the primary interface for instruction generation.

Usage
-----
To encode an instruction by mnemonic::

    from lx32_verif.encoders.op_tables import R_ALU, LOADS

    enc_add, eval_add = R_ALU["add"]
    binary = enc_add(rd=1, rs1=2, rs2=3)  # add x1, x2, x3

    enc_lw = LOADS["lw"]
    binary = enc_lw(rd=5, rs1=10, imm=16)  # lw x5, 16(x10)
"""

from lx32_verif.encoders.op_tables import (
    R_ALU,
    I_ALU,
    LOADS,
    STORES,
    BRANCHES,
    UPPER,
    JUMPS,
)

__all__ = [
    "R_ALU",
    "I_ALU",
    "LOADS",
    "STORES",
    "BRANCHES",
    "UPPER",
    "JUMPS",
]
