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

"""Software model for the LX32 branch unit.

Determines whether conditional branches are taken based on register comparisons.
Supports all RV32I branch types: equality, inequality, and signed/unsigned comparisons.

The two comparison operands are always the raw rs1 and rs2 register values.
The branch unit never sees the immediate-muxed ALU operand B.

Branch Model
============
"""

from lx32_verif.config import MASK32
from lx32_verif.models.isa import BranchOp
from lx32_verif.utils.riscv_utils import to_signed32
from lx32_verif.utils.validation import ValidationError

BRANCH_MNEMONICS: dict[str, BranchOp] = {
    "beq": BranchOp.EQ,
    "bne": BranchOp.NE,
    "blt": BranchOp.LT,
    "bge": BranchOp.GE,
    "bltu": BranchOp.LTU,
    "bgeu": BranchOp.GEU,
}


def branch_compare(operation: BranchOp, operand_a: int, operand_b: int) -> bool:
    """Evaluate one branch predicate, ungated.

    Args:
        operation: Branch comparison selector
        operand_a: Value from source register 1 (rs1)
        operand_b: Value from source register 2 (rs2)

    Returns:
        True if the predicate holds
    """
    if operation == BranchOp.NE:  # Branch if not equal
        return (operand_a & MASK32) != (operand_b & MASK32)
    if operation == BranchOp.LT:  # Branch if less than (signed comparison)
        return to_signed32(operand_a) < to_signed32(operand_b)
    if operation == BranchOp.GE:  # Branch if greater or equal (signed comparison)
        return to_signed32(operand_a) >= to_signed32(operand_b)
    if operation == BranchOp.LTU:  # Branch if less than (unsigned comparison)
        return (operand_a & MASK32) < (operand_b & MASK32)
    if operation == BranchOp.GEU:  # Branch if greater or equal (unsigned comparison)
        return (operand_a & MASK32) >= (operand_b & MASK32)
    # EQ, and the fallback for undefined selector codes
    return (operand_a & MASK32) == (operand_b & MASK32)


def branch_unit(
    operand_a: int, operand_b: int, is_branch: bool, operation: BranchOp
) -> bool:
    """Gated branch decision as seen by the PC update logic.

    Args:
        operand_a: Raw rs1 value
        operand_b: Raw rs2 value
        is_branch: Branch enable from the control resolver
        operation: Branch comparison selector

    Returns:
        predicate(operand_a, operand_b) AND is_branch
    """
    return is_branch and branch_compare(operation, operand_a, operand_b)


def branch_taken_decision(operation: str, operand_a: int, operand_b: int) -> bool:
    """Determine if a branch should be taken based on the branch type and operand values.

    Args:
        operation: Branch instruction mnemonic ("beq", "bne", "blt", "bge", "bltu", "bgeu")
        operand_a: Value from source register 1 (rs1)
        operand_b: Value from source register 2 (rs2)

    Returns:
        True if branch condition is satisfied, False otherwise
    """
    if operation not in BRANCH_MNEMONICS:
        raise ValidationError(
            "Invalid branch operation",
            op=operation,
            valid_ops=list(BRANCH_MNEMONICS),
        )
    return branch_compare(BRANCH_MNEMONICS[operation], operand_a, operand_b)
