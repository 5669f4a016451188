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

"""ALU/branch test-vector files for the RTL testbench.

Vector File
===========

One vector per line, seven hex fields separated by single spaces::

    aaaaaaaa bbbbbbbb o i r rrrrrrrr t
    │        │        │ │ │ │        └─ branch taken (0 when i == 0)
    │        │        │ │ │ └────────── ALU result
    │        │        │ │ └──────────── branch op (0 eq, 1 ne, 2 lt, 3 ge, 4 ltu, 5 geu)
    │        │        │ └────────────── is_branch
    │        │        └──────────────── ALU op (see VECTOR_ALU_OPS)
    │        └───────────────────────── operand B
    └────────────────────────────────── operand A

The ALU op numbering is the testbench's own and differs from ``AluOp``:
0 add, 1 sub, 2 sll, 3 slt, 4 sltu, 5 xor, 6 srl, 7 sra, 8 or, 9 and.

Expected results come from the golden ALU and branch unit, so the same
models that drive the lockstep harness also produce the RTL unit vectors.
"""

import random
from collections.abc import Iterable
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from lx32_verif.config import MASK32
from lx32_verif.exceptions import StateMismatch, VectorFormatError
from lx32_verif.models.alu_model import alu_evaluate
from lx32_verif.models.branch_model import branch_unit
from lx32_verif.models.isa import AluOp, BranchOp

VECTOR_ALU_OPS: tuple[AluOp, ...] = (
    AluOp.ADD,
    AluOp.SUB,
    AluOp.SLL,
    AluOp.SLT,
    AluOp.SLTU,
    AluOp.XOR,
    AluOp.SRL,
    AluOp.SRA,
    AluOp.OR,
    AluOp.AND,
)

DEFAULT_VECTOR_COUNT = 1000
DEFAULT_OPERAND_LIMIT = 300000


@dataclass(frozen=True)
class AluVector:
    a: int
    b: int
    op_num: int
    is_branch: int
    branch_op_num: int
    result: int
    branch_taken: int


def evaluate_vector(
    a: int, b: int, op_num: int, is_branch: int, branch_op_num: int
) -> AluVector:
    """Build a vector with golden-model results for the given inputs."""
    result = alu_evaluate(a, b, VECTOR_ALU_OPS[op_num])
    taken = branch_unit(a, b, bool(is_branch), BranchOp(branch_op_num))
    return AluVector(a, b, op_num, is_branch, branch_op_num, result, int(taken))


def generate_alu_vectors(
    rng: random.Random,
    count: int = DEFAULT_VECTOR_COUNT,
    operand_limit: int = DEFAULT_OPERAND_LIMIT,
) -> list[AluVector]:
    """Draw random operands and selectors and evaluate each with the golden model.

    Args:
        rng: Random generator owned by the caller
        count: Number of vectors
        operand_limit: Operands are drawn from [0, operand_limit)
    """
    vectors = []
    for _ in range(count):
        a = rng.randrange(operand_limit)
        b = rng.randrange(operand_limit)
        op_num = rng.randrange(len(VECTOR_ALU_OPS))
        is_branch = rng.randrange(2)
        branch_op_num = rng.randrange(len(BranchOp))
        vectors.append(evaluate_vector(a, b, op_num, is_branch, branch_op_num))
    return vectors


def format_vector(vector: AluVector) -> str:
    return (
        f"{vector.a:08x} {vector.b:08x} {vector.op_num:x} {vector.is_branch:x} "
        f"{vector.branch_op_num:x} {vector.result:08x} {vector.branch_taken:x}"
    )


def parse_vector(line: str, line_number: int | None = None) -> AluVector:
    """Parse one vector line.

    Raises:
        VectorFormatError: Wrong field count, non-hex field or a field out of
            its range
    """
    fields = line.split()
    if len(fields) != 7:
        raise VectorFormatError(
            f"line {line_number}: expected 7 fields, got {len(fields)}: {line!r}",
            line_number=line_number,
        )
    try:
        a, b, op_num, is_branch, branch_op_num, result, taken = (
            int(field, 16) for field in fields
        )
    except ValueError as exc:
        raise VectorFormatError(
            f"line {line_number}: non-hex field in {line!r}", line_number=line_number
        ) from exc

    limits = {
        "operand A": (a, MASK32),
        "operand B": (b, MASK32),
        "ALU op": (op_num, len(VECTOR_ALU_OPS) - 1),
        "is_branch": (is_branch, 1),
        "branch op": (branch_op_num, len(BranchOp) - 1),
        "result": (result, MASK32),
        "branch taken": (taken, 1),
    }
    for name, (value, limit) in limits.items():
        if value > limit:
            raise VectorFormatError(
                f"line {line_number}: {name} 0x{value:x} exceeds 0x{limit:x}",
                line_number=line_number,
            )
    return AluVector(a, b, op_num, is_branch, branch_op_num, result, taken)


def write_vector_file(path: str | PathLike[str], vectors: Iterable[AluVector]) -> int:
    """Write vectors one per line; returns the number written."""
    lines = [format_vector(vector) for vector in vectors]
    Path(path).write_text("".join(f"{line}\n" for line in lines))
    return len(lines)


def read_vector_file(path: str | PathLike[str]) -> list[AluVector]:
    """Parse a vector file, skipping blank lines."""
    vectors = []
    with open(path) as handle:
        for line_number, line in enumerate(handle, start=1):
            if line.strip():
                vectors.append(parse_vector(line, line_number))
    return vectors


def check_vector_file(path: str | PathLike[str]) -> int:
    """Re-evaluate every vector of a file against the golden model.

    Returns:
        Number of vectors checked

    Raises:
        VectorFormatError: On a malformed line
        StateMismatch: On the first vector whose expected values disagree
    """
    vectors = read_vector_file(path)
    for index, vector in enumerate(vectors):
        golden = evaluate_vector(
            vector.a, vector.b, vector.op_num, vector.is_branch, vector.branch_op_num
        )
        for name in ("result", "branch_taken"):
            expected, actual = getattr(golden, name), getattr(vector, name)
            if expected != actual:
                raise StateMismatch(
                    f"vector {index}: {name} mismatch for {format_vector(vector)!r}: "
                    f"golden=0x{expected:x}, file=0x{actual:x}",
                    expected_value=expected,
                    actual_value=actual,
                    cycle=index,
                )
    return len(vectors)
