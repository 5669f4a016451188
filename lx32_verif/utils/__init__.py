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

"""Utility functions for the verification framework.

Modules
-------
riscv_utils
    RV32 value conversions:
    - Sign extension for various bit widths
    - Signed/unsigned 32-bit conversions
    - Bit-field extraction

instruction_logger
    Structured logging for lockstep runs:
    - One line per step with both cores side by side
    - Mismatch reports carrying the seed
    - Start/pass banners and stimulus coverage summary

validation
    Enhanced assertion utilities:
    - HardwareAssertions class for RV32I-specific validations
    - Register index bounds checking
    - Immediate and offset range validation

Usage
-----
::

    from lx32_verif.utils.riscv_utils import sign_extend
    from lx32_verif.utils.validation import HardwareAssertions

    signed_imm = sign_extend(raw_imm, 12)
    HardwareAssertions.assert_register_valid(reg_idx)

``instruction_logger`` is imported from its module directly, since it depends
on the harness records.
"""

from lx32_verif.utils.riscv_utils import sign_extend, to_signed32, to_unsigned32
from lx32_verif.utils.validation import HardwareAssertions


__all__ = [
    "sign_extend",
    "to_signed32",
    "to_unsigned32",
    "HardwareAssertions",
]
