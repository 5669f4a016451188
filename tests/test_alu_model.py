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

import random

import pytest

from lx32_verif.models.alu_model import ALU_OPERATIONS, alu_evaluate, sll, sra
from lx32_verif.models.isa import AluOp


@pytest.mark.parametrize(
    "a, b, op, expected",
    [
        (0xFFFFFFFF, 1, AluOp.ADD, 0),
        (0, 1, AluOp.SUB, 0xFFFFFFFF),
        (5, 7, AluOp.SUB, 0xFFFFFFFE),
        (1, 0x20, AluOp.SLL, 1),
        (1, 0x21, AluOp.SLL, 2),
        (0x80000000, 4, AluOp.SRA, 0xF8000000),
        (0x80000000, 4, AluOp.SRL, 0x08000000),
        (0xFFFFFFFF, 1, AluOp.SLT, 1),
        (0xFFFFFFFF, 1, AluOp.SLTU, 0),
        (0xF0F0F0F0, 0x0FF00FF0, AluOp.XOR, 0xFF00FF00),
        (0xF0F0F0F0, 0x0F0F0F0F, AluOp.OR, 0xFFFFFFFF),
        (0xF0F0F0F0, 0xFF00FF00, AluOp.AND, 0xF000F000),
    ],
)
def test_alu_reference_values(a, b, op, expected):
    assert alu_evaluate(a, b, op) == expected


def test_shift_amount_uses_low_five_bits():
    assert sll(1, 0x20) == sll(1, 0) == 1
    assert sra(0x80000000, 0x24) == sra(0x80000000, 4)


def test_results_stay_32_bit_and_comparisons_are_boolean():
    rng = random.Random(0x1A32)
    for _ in range(200):
        a, b = rng.getrandbits(32), rng.getrandbits(32)
        for op in ALU_OPERATIONS:
            result = alu_evaluate(a, b, op)
            assert 0 <= result <= 0xFFFFFFFF
            if op in (AluOp.SLT, AluOp.SLTU):
                assert result in (0, 1)


def test_invalid_operation_rejected():
    with pytest.raises(ValueError, match="Invalid ALU operation"):
        alu_evaluate(1, 2, 42)


def test_operands_wider_than_32_bits_are_truncated():
    assert alu_evaluate(0x1_0000_0001, 1, AluOp.ADD) == 2
    assert alu_evaluate(0x1_8000_0000, 4, AluOp.SRL) == 0x08000000
    assert alu_evaluate(0x1_0000_0000, 1, AluOp.SLTU) == 1
