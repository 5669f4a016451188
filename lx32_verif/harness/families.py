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

"""Stimulus generators and comparators for every verified unit.

Families
========

A family bundles everything the generic runner needs to fuzz one unit:

    InstructionFamily    core-level units, driven through both cores in
                         lockstep (alu, branch, control_unit, lsu, imm_gen,
                         system)
        encode(rng, config) -> Stimulus
        compare(record) -> list[Discrepancy]
        opcodes: opcodes the generator may emit (None: any word)

    ComponentFamily      golden-only units checked against their own
                         contract (memory, reg_generic, register_file)
        factory() -> fresh component
        trial(component, rng, config, iteration) -> TrialOutcome

Stimulus selection follows the op tables wherever an instruction has a
mnemonic, so the encoders are shared with the directed tests.
"""

import random
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from lx32_verif.config import MASK32, PC_INCREMENT, REG_COUNT
from lx32_verif.encoders.instruction_encode import enc_b, enc_i, enc_r, enc_s
from lx32_verif.encoders.op_tables import BRANCHES, I_ALU, LOADS, R_ALU, STORES
from lx32_verif.exceptions import InvariantViolation, MemoryMismatch
from lx32_verif.harness.config import FuzzConfig
from lx32_verif.harness.records import (
    ALL_REGISTERS,
    ComparisonRecord,
    Discrepancy,
    compare_mem_if,
    compare_pc,
    compare_registers,
)
from lx32_verif.models.decoder import decode_fields
from lx32_verif.models.isa import Opcode
from lx32_verif.models.memory_model import MemorySim
from lx32_verif.models.reg_generic import RegGeneric
from lx32_verif.models.register_file import RegisterFile
from lx32_verif.utils.riscv_utils import to_unsigned32


@dataclass(frozen=True)
class Stimulus:
    """Inputs for one lockstep step plus what to observe afterwards.

    Attributes:
        instr: Instruction word
        mem_rdata: Memory read data presented in the same cycle
        watched: Registers captured on both sides after the step
        focus: Register shown in the per-step log line
        label: Stimulus kind, counted for the coverage summary
        immediate: Immediate the generator meant to encode, checked against
            the golden immediate generator before stepping
    """

    instr: int
    mem_rdata: int = 0
    watched: tuple[int, ...] = ()
    focus: int | None = None
    label: str = ""
    immediate: int | None = None


@dataclass(frozen=True)
class InstructionFamily:
    name: str
    title: str
    encode: Callable[[random.Random, FuzzConfig], Stimulus]
    compare: Callable[[ComparisonRecord], list[Discrepancy]]
    opcodes: frozenset[int] | None = None


@dataclass(frozen=True)
class TrialOutcome:
    """Result of one golden-only component trial."""

    summary: str
    discrepancies: list[Discrepancy] = field(default_factory=list)
    label: str = ""


@dataclass(frozen=True)
class ComponentFamily:
    name: str
    title: str
    factory: Callable[[], Any]
    trial: Callable[[Any, random.Random, FuzzConfig, int], TrialOutcome]


def _pick_register(rng: random.Random, bounds: tuple[int, int]) -> int:
    return rng.randrange(*bounds)


def _pick_inclusive(rng: random.Random, bounds: tuple[int, int]) -> int:
    return rng.randint(*bounds)


def _pick_branch_offset(rng: random.Random, config: FuzzConfig) -> int:
    """Byte offset drawn from branch_offset_range in branch_offset_unit steps."""
    return _pick_inclusive(rng, config.branch_offset_range) * config.branch_offset_unit


def _combine(
    *comparators: Callable[[ComparisonRecord], list[Discrepancy]],
) -> Callable[[ComparisonRecord], list[Discrepancy]]:
    def compare(record: ComparisonRecord) -> list[Discrepancy]:
        found: list[Discrepancy] = []
        for comparator in comparators:
            found.extend(comparator(record))
        return found

    return compare


# ----------------------------------------------------------------------------
# Core-level families
# ----------------------------------------------------------------------------

_ALU_MNEMONICS = tuple(R_ALU) + tuple(I_ALU)
_SHIFT_IMMEDIATES = frozenset({"slli", "srli", "srai"})


def encode_alu(rng: random.Random, config: FuzzConfig) -> Stimulus:
    mnemonic = rng.choice(_ALU_MNEMONICS)
    rd = _pick_register(rng, config.rd_range)
    rs1 = _pick_register(rng, config.reg_range)
    if mnemonic in R_ALU:
        encoder, _ = R_ALU[mnemonic]
        instr = encoder(rd=rd, rs1=rs1, rs2=_pick_register(rng, config.reg_range))
    else:
        encoder, _ = I_ALU[mnemonic]
        if mnemonic in _SHIFT_IMMEDIATES:
            imm = rng.randrange(32)
        else:
            imm = _pick_inclusive(rng, config.imm_range)
        instr = encoder(rd=rd, rs1=rs1, imm=imm)
    return Stimulus(instr=instr, watched=(rd,), focus=rd, label=mnemonic)


def encode_branch(rng: random.Random, config: FuzzConfig) -> Stimulus:
    mnemonic = rng.choice(tuple(BRANCHES))
    rs1 = _pick_register(rng, config.reg_range)
    rs2 = _pick_register(rng, config.reg_range)
    offset = _pick_branch_offset(rng, config)
    encoder, _ = BRANCHES[mnemonic]
    return Stimulus(
        instr=encoder(rs2=rs2, rs1=rs1, offset=offset),
        watched=(rs1, rs2),
        label=mnemonic,
    )


def encode_control_unit(rng: random.Random, config: FuzzConfig) -> Stimulus:
    """Random R / I / S / B words, including funct codes with no mnemonic."""
    kind = rng.randrange(4)
    rs1 = _pick_register(rng, config.reg_range)
    rs2 = _pick_register(rng, config.reg_range)
    if kind == 0:
        funct7 = 0x20 if rng.random() < 0.5 else 0x00
        instr = enc_r(funct7, rs2, rs1, rng.randrange(8), _pick_register(rng, config.rd_range))
        label = "R-type"
    elif kind == 1:
        imm = _pick_inclusive(rng, config.imm_range)
        instr = enc_i(imm, rs1, rng.randrange(8), _pick_register(rng, config.rd_range))
        label = "I-type"
    elif kind == 2:
        instr = enc_s(rs2, rs1, 0b010, _pick_inclusive(rng, config.imm_range))
        label = "S-type"
    else:
        offset = _pick_branch_offset(rng, config)
        instr = enc_b(rs2, rs1, rng.randrange(6), offset)
        label = "B-type"
    fields = decode_fields(instr)
    return Stimulus(
        instr=instr,
        watched=tuple(dict.fromkeys((fields.rd, fields.rs1, fields.rs2))),
        focus=fields.rd,
        label=label,
    )


def encode_lsu(rng: random.Random, config: FuzzConfig) -> Stimulus:
    rs1 = _pick_register(rng, config.reg_range)
    rs2 = _pick_register(rng, config.reg_range)
    rd = _pick_register(rng, config.rd_range)
    imm = _pick_inclusive(rng, config.imm_range)
    mem_rdata = rng.getrandbits(32)
    if rng.random() < 0.5:
        instr = LOADS["lw"](rd=rd, rs1=rs1, imm=imm)
        label = "lw"
    else:
        instr = STORES["sw"](rs2=rs2, rs1=rs1, imm=imm)
        label = "sw"
    return Stimulus(
        instr=instr,
        mem_rdata=mem_rdata,
        watched=tuple(dict.fromkeys((rd, rs1, rs2))),
        focus=rd,
        label=label,
    )


def encode_imm_gen(rng: random.Random, config: FuzzConfig) -> Stimulus:
    """x0-based ADDI / SW / BEQ so the result exposes the immediate directly."""
    rd = _pick_register(rng, config.rd_range)
    rs2 = rng.randrange(REG_COUNT)
    kind = rng.randrange(3)
    if kind == 0:
        imm = _pick_inclusive(rng, config.imm_range)
        instr = I_ALU["addi"][0](rd=rd, rs1=0, imm=imm)
        label = "addi"
    elif kind == 1:
        imm = _pick_inclusive(rng, config.imm_range)
        instr = STORES["sw"](rs2=rs2, rs1=0, imm=imm)
        label = "sw"
    else:
        units = _pick_inclusive(rng, config.branch_offset_range)
        # a taken branch to pc + 4 is indistinguishable from not taken
        if units * config.branch_offset_unit == PC_INCREMENT:
            units += 1
        imm = units * config.branch_offset_unit
        instr = BRANCHES["beq"][0](rs2=0, rs1=0, offset=imm)
        label = "beq"
    return Stimulus(
        instr=instr,
        watched=tuple(dict.fromkeys((rd, rs2))),
        focus=rd,
        label=label,
        immediate=to_unsigned32(imm),
    )


def encode_system(rng: random.Random, config: FuzzConfig) -> Stimulus:
    return Stimulus(
        instr=rng.getrandbits(32),
        mem_rdata=rng.getrandbits(32),
        watched=ALL_REGISTERS,
        label="random",
    )


# ----------------------------------------------------------------------------
# Golden-only component families
# ----------------------------------------------------------------------------


def memory_trial(
    memory: MemorySim, rng: random.Random, config: FuzzConfig, iteration: int
) -> TrialOutcome:
    """Write then read back, or plain read; read-back must equal the write."""
    we = rng.random() < 0.5
    addr = rng.randrange(*config.addr_range)
    data = _pick_inclusive(rng, config.data_range) & MASK32
    if not we:
        result = memory.read_data(addr)
        return TrialOutcome(
            summary=f"READ  | addr:0x{addr:03x} | read_result:0x{result:08x}",
            label="read",
        )
    memory.write_data(addr, data, True)
    read_back = memory.read_data(addr)
    found = []
    if read_back != data:
        found.append(Discrepancy("READ_BACK", data, read_back, error=MemoryMismatch))
    return TrialOutcome(
        summary=(
            f"WRITE | addr:0x{addr:03x} | write_data:0x{data:08x} | "
            f"read_back:0x{read_back:08x}"
        ),
        discrepancies=found,
        label="write",
    )


def reg_generic_trial(
    reg: RegGeneric, rng: random.Random, config: FuzzConfig, iteration: int
) -> TrialOutcome:
    """Reset, enable and hold each with probability 1/3."""
    choice = rng.randrange(3)
    reset, enable = choice == 0, choice == 1
    data_in = _pick_inclusive(rng, config.data_range) & reg.mask
    pre_out = reg.data_out
    reg.tick(reset, enable, data_in)

    if reset:
        expected, label = 0, "reset"
    elif enable:
        expected, label = data_in, "write"
    else:
        expected, label = pre_out, "hold"

    found = []
    if reg.data_out != expected:
        found.append(Discrepancy("DATA_OUT", expected, reg.data_out))
    return TrialOutcome(
        summary=(
            f"{label.upper():5} | data_in:0x{data_in:08x} | pre_out:0x{pre_out:08x} | "
            f"post_out:0x{reg.data_out:08x}"
        ),
        discrepancies=found,
        label=label,
    )


def register_file_trial(
    rf: RegisterFile, rng: random.Random, config: FuzzConfig, iteration: int
) -> TrialOutcome:
    """First trial resets; later ones randomly write, then read both ports."""
    reset = iteration == 0
    we = not reset and rng.random() < 0.5
    addr_rd = _pick_register(rng, config.reg_range)
    addr_rs1 = _pick_register(rng, config.reg_range)
    addr_rs2 = _pick_register(rng, config.reg_range)
    data_wr = _pick_inclusive(rng, config.data_range) & MASK32

    rf.tick(reset, addr_rd, data_wr, we)
    data_rs1 = rf.read_rs1(addr_rs1)
    data_rs2 = rf.read_rs2(addr_rs2)

    found = []
    for port, addr, value in (("RS1", addr_rs1, data_rs1), ("RS2", addr_rs2, data_rs2)):
        if addr == 0 and value != 0:
            found.append(
                Discrepancy(f"{port}_X0", 0, value, register=0, error=InvariantViolation)
            )
        elif reset and value != 0:
            found.append(Discrepancy(f"{port}_RESET", 0, value, register=addr))
        elif we and addr_rd != 0 and addr == addr_rd and value != data_wr:
            found.append(Discrepancy(port, data_wr, value, register=addr))

    label = "reset" if reset else ("write" if we else "read")
    return TrialOutcome(
        summary=(
            f"{label.upper():5} | x{addr_rd:<2}(WR): 0x{data_wr:08x} | "
            f"x{addr_rs1:<2}(RS1): 0x{data_rs1:08x} | x{addr_rs2:<2}(RS2): 0x{data_rs2:08x}"
        ),
        discrepancies=found,
        label=label,
    )


# ----------------------------------------------------------------------------
# Registry
# ----------------------------------------------------------------------------

_STATE = _combine(compare_pc, compare_registers)
_STATE_AND_MEMORY = _combine(compare_pc, compare_registers, compare_mem_if)

FAMILIES: dict[str, InstructionFamily | ComponentFamily] = {
    "alu": InstructionFamily(
        name="alu",
        title="ALU",
        encode=encode_alu,
        compare=_STATE,
        opcodes=frozenset({Opcode.OP, Opcode.OP_IMM}),
    ),
    "branch": InstructionFamily(
        name="branch",
        title="BRANCH UNIT",
        encode=encode_branch,
        compare=compare_pc,
        opcodes=frozenset({Opcode.BRANCH}),
    ),
    "control_unit": InstructionFamily(
        name="control_unit",
        title="CONTROL UNIT",
        encode=encode_control_unit,
        compare=_STATE,
        opcodes=frozenset({Opcode.OP, Opcode.OP_IMM, Opcode.STORE, Opcode.BRANCH}),
    ),
    "lsu": InstructionFamily(
        name="lsu",
        title="LSU",
        encode=encode_lsu,
        compare=_STATE_AND_MEMORY,
        opcodes=frozenset({Opcode.LOAD, Opcode.STORE}),
    ),
    "imm_gen": InstructionFamily(
        name="imm_gen",
        title="IMM_GEN",
        encode=encode_imm_gen,
        compare=_STATE,
        opcodes=frozenset({Opcode.OP_IMM, Opcode.STORE, Opcode.BRANCH}),
    ),
    "memory": ComponentFamily(
        name="memory",
        title="MEMORY_SIM",
        factory=MemorySim,
        trial=memory_trial,
    ),
    "reg_generic": ComponentFamily(
        name="reg_generic",
        title="REG_GENERIC",
        factory=RegGeneric,
        trial=reg_generic_trial,
    ),
    "register_file": ComponentFamily(
        name="register_file",
        title="REGISTER_FILE",
        factory=RegisterFile,
        trial=register_file_trial,
    ),
    "system": InstructionFamily(
        name="system",
        title="LX32_SYSTEM",
        encode=encode_system,
        compare=_STATE_AND_MEMORY,
    ),
}
