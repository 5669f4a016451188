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

"""Type aliases for the LX32 verification framework.

Types
=====

NewTypes used at the seams between the golden model, the encoders and the
harness. They cost nothing at runtime and keep addresses, register indices
and instruction words from being swapped by accident.
"""

from typing import NewType

# Memory-related types
Address = NewType("Address", int)
"""32-bit byte address (0 to 2^32-1)."""

# Register-related types
RegisterIndex = NewType("RegisterIndex", int)
"""Register index (0-31, where 0 is hardwired to zero)."""

# Instruction-related types
Instruction = NewType("Instruction", int)
"""32-bit encoded RV32I instruction word."""

ProgramCounter = NewType("ProgramCounter", int)
"""Program counter value (32-bit address)."""
