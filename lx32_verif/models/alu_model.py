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

"""Software model of the RV32I arithmetic/logic unit.

ALU Model
=========

Reference implementations of the ten base-ISA ALU operations. Each operation
is a pure function of (operand_a, operand_b) on 32-bit unsigned values and
returns a 32-bit result: add/sub wrap without a trap, shifts use only the
low 5 bits of operand_b, and comparisons return exactly 0 or 1.

Usage::

    from lx32_verif.models.alu_model import alu_evaluate
    from lx32_verif.models.isa import AluOp

    alu_evaluate(0xFFFFFFFF, 1, AluOp.ADD)  # -> 0
"""

from collections.abc import Callable

from lx32_verif.config import MASK32, SHAMT_MASK
from lx32_verif.models.isa import AluOp
from lx32_verif.utils.riscv_utils import to_signed32

AluFunction = Callable[[int, int], int]


def add(operand_a: int, operand_b: int) -> int:
    return (operand_a + operand_b) & MASK32


def sub(operand_a: int, operand_b: int) -> int:
    return (operand_a - operand_b) & MASK32


def sll(operand_a: int, operand_b: int) -> int:
    return (operand_a << (operand_b & SHAMT_MASK)) & MASK32


def srl(operand_a: int, operand_b: int) -> int:
    return (operand_a & MASK32) >> (operand_b & SHAMT_MASK)


def sra(operand_a: int, operand_b: int) -> int:
    """Arithmetic right shift; Python's >> on a negative int sign-fills."""
    return (to_signed32(operand_a) >> (operand_b & SHAMT_MASK)) & MASK32


def slt(operand_a: int, operand_b: int) -> int:
    return int(to_signed32(operand_a) < to_signed32(operand_b))


def sltu(operand_a: int, operand_b: int) -> int:
    return int((operand_a & MASK32) < (operand_b & MASK32))


def xor(operand_a: int, operand_b: int) -> int:
    return (operand_a ^ operand_b) & MASK32


def or_rv(operand_a: int, operand_b: int) -> int:
    return (operand_a | operand_b) & MASK32


def and_rv(operand_a: int, operand_b: int) -> int:
    return operand_a & operand_b & MASK32


ALU_OPERATIONS: dict[AluOp, AluFunction] = {
    AluOp.ADD: add,
    AluOp.SUB: sub,
    AluOp.SLL: sll,
    AluOp.SRL: srl,
    AluOp.SRA: sra,
    AluOp.SLT: slt,
    AluOp.SLTU: sltu,
    AluOp.XOR: xor,
    AluOp.OR: or_rv,
    AluOp.AND: and_rv,
}


def alu_evaluate(operand_a: int, operand_b: int, operation: AluOp) -> int:
    """Compute the ALU result for one operation.

    Args:
        operand_a: ALU source A (rs1 value)
        operand_b: ALU source B (rs2 value or generated immediate)
        operation: ALU operation selected by the control resolver

    Returns:
        32-bit result

    Raises:
        ValueError: If operation is not an ALU operation
    """
    try:
        function = ALU_OPERATIONS[AluOp(operation)]
    except ValueError:
        raise ValueError(f"Invalid ALU operation: {operation!r}") from None
    return function(operand_a & MASK32, operand_b & MASK32)
