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

import pytest

from lx32_verif.models.control_unit import INERT_CONTROL, ControlSignals, resolve_control
from lx32_verif.models.decoder import DecodedFields, decode_fields
from lx32_verif.models.isa import AluOp, Opcode, ResultSource


def test_decode_store_word():
    assert decode_fields(0x00112023) == DecodedFields(
        opcode=Opcode.STORE, funct3=0b010, funct7_bit=False, rs1=2, rs2=1, rd=0
    )


def test_decode_funct7_bit():
    assert decode_fields(0x40000033).funct7_bit  # sub x0, x0, x0
    assert not decode_fields(0x00000033).funct7_bit


@pytest.mark.parametrize(
    "funct3, funct7_bit, expected",
    [
        (0b000, False, AluOp.ADD),
        (0b000, True, AluOp.SUB),
        (0b001, False, AluOp.SLL),
        (0b010, False, AluOp.SLT),
        (0b011, False, AluOp.SLTU),
        (0b100, False, AluOp.XOR),
        (0b101, False, AluOp.SRL),
        (0b101, True, AluOp.SRA),
        (0b110, False, AluOp.OR),
        (0b111, False, AluOp.AND),
    ],
)
def test_register_alu_ops(funct3, funct7_bit, expected):
    control = resolve_control(Opcode.OP, funct3, funct7_bit)
    assert control == ControlSignals(alu_op=expected, reg_write=True)


def test_immediate_alu_has_no_subtract():
    assert resolve_control(Opcode.OP_IMM, 0b000, True).alu_op is AluOp.ADD
    assert resolve_control(Opcode.OP_IMM, 0b101, True).alu_op is AluOp.SRA
    control = resolve_control(Opcode.OP_IMM, 0b110, False)
    assert control.alu_src_imm and control.reg_write and not control.mem_write


def test_memory_and_branch_bundles():
    load = resolve_control(Opcode.LOAD, 0b010, False)
    assert load == ControlSignals(
        alu_src_imm=True, reg_write=True, result_src=ResultSource.MEMORY
    )
    store = resolve_control(Opcode.STORE, 0b010, False)
    assert store == ControlSignals(alu_src_imm=True, mem_write=True)
    branch = resolve_control(Opcode.BRANCH, 0b001, False)
    assert branch == ControlSignals(alu_op=AluOp.SUB, branch=True)


@pytest.mark.parametrize(
    "opcode", [Opcode.LUI, Opcode.AUIPC, Opcode.JAL, Opcode.JALR, 0x00, 0x7F]
)
def test_unsupported_opcodes_are_inert(opcode):
    assert resolve_control(opcode, 0b000, False) == INERT_CONTROL
