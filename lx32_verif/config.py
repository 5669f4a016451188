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

"""Central architectural constants for the LX32 core and its golden model.

Config
======

Every width, mask and size used by the models, encoders and harness lives
here so that the software model and the RTL agree on a single source of
truth. Change a value here, not at the point of use.
"""

# Datapath
XLEN = 32
MASK32 = (1 << XLEN) - 1

# Register file
REG_COUNT = 32
REG_ADDR_WIDTH = 5

# Program counter
PC_INCREMENT = 4

# Instruction fields
OPCODE_MASK = 0x7F
FUNCT3_MASK = 0x7
FUNCT7_BIT_POSITION = 30
SHAMT_MASK = 0x1F

# Immediate widths (bits in the assembled immediate, before sign extension)
I_IMM_BITS = 12
S_IMM_BITS = 12
B_IMM_BITS = 13
U_IMM_BITS = 20
J_IMM_BITS = 21

# Simulation memory: 1024 x 32-bit words (4 KB), word indexed by addr[11:2]
MEMORY_SIZE_WORDS = 1024
MEMORY_SIZE_BYTES = MEMORY_SIZE_WORDS * 4
MEMORY_ADDRESS_MASK = MEMORY_SIZE_BYTES - 1

# Test bench
DEFAULT_RESET_CYCLES = 10
NOP = 0x00000013  # addi x0, x0, 0
BANNER_WIDTH = 100
