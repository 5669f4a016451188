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

"""Software model of the LX32 simulation memory.

Memory Model
============

This module provides a software model of the dual-port simulation memory the
LX32 core is attached to:

    - 4 KB total (1024 x 32-bit words)
    - Word addressing: the byte address is masked to the 4 KB window and
      shifted right by 2 (addr[11:2]); low address bits are ignored, so
      there is no alignment-fault detection
    - Instruction port and data port share one backing store
    - Asynchronous (combinational) reads, synchronous writes

Usage:
    The harness owns the memory and feeds the core explicitly::

        memory = MemorySim()
        memory.load_program([0x00100093, 0x00112023])
        instr = memory.read_instr(pc)
        rdata = memory.read_data(address)
        memory.write_data(address, data, we=True)  # on the clock edge
"""

from collections.abc import Iterable

from lx32_verif.config import MASK32, MEMORY_ADDRESS_MASK, MEMORY_SIZE_WORDS
from lx32_verif.verification_types import Address


class MemorySim:
    """Word-addressed memory with separate instruction and data read ports.

    Attributes:
        ram: Backing store, one int per 32-bit word
    """

    def __init__(self, size_words: int = MEMORY_SIZE_WORDS) -> None:
        """Create a zero-filled memory.

        Args:
            size_words: Capacity in 32-bit words
        """
        self.size_words = size_words
        self.ram: list[int] = [0] * size_words

    def word_index(self, address: Address) -> int:
        """Map a byte address to a word index (addr[11:2])."""
        return ((address & MEMORY_ADDRESS_MASK) >> 2) % self.size_words

    def load_program(self, program: Iterable[int]) -> None:
        """Preload words starting at address 0.

        Words beyond the memory capacity are dropped.
        """
        for index, word in enumerate(program):
            if index >= self.size_words:
                break
            self.ram[index] = word & MASK32

    def read_instr(self, address: Address) -> int:
        """Instruction port read (asynchronous)."""
        return self.ram[self.word_index(address)]

    def read_data(self, address: Address) -> int:
        """Data port read (asynchronous)."""
        return self.ram[self.word_index(address)]

    def write_data(self, address: Address, data: int, we: bool) -> None:
        """Data port write (synchronous); only lands when we is asserted."""
        if we:
            self.ram[self.word_index(address)] = data & MASK32
