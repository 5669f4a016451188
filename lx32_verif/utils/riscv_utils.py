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

"""Two's-complement helpers for 32-bit register values and instruction fields.

Bit Helpers
===========

Register and memory values are carried as unsigned Python ints in
``[0, 2**32)``. Signed views (SLT, SRA, branch compares, immediates) are
produced on demand with the helpers below.
"""

from lx32_verif.config import MASK32, XLEN

__all__ = ["sign_extend", "to_signed32", "to_unsigned32", "bits"]


def sign_extend(val: int, bits: int) -> int:
    """Interpret the low ``bits`` bits of val as a two's-complement number.

    >>> sign_extend(0xFFF, 12)
    -1
    >>> sign_extend(0x800, 12)
    -2048
    """
    sign = 1 << (bits - 1)
    return (val & (sign - 1)) - (val & sign)


def to_signed32(val: int) -> int:
    return sign_extend(val & MASK32, XLEN)


def to_unsigned32(val: int) -> int:
    """Register encoding of val: negative ints wrap, wide ints truncate."""
    return val & MASK32


def bits(word: int, high: int, low: int) -> int:
    """Field word[high:low], both ends inclusive.

    >>> bits(0x00100093, 6, 0)  # addi opcode
    19
    """
    return (word >> low) & ((1 << (high - low + 1)) - 1)
