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

import asyncio
import logging

import pytest

from lx32_verif.encoders.op_tables import I_ALU
from lx32_verif.exceptions import (
    EncodingMisuse,
    InvariantViolation,
    MemoryMismatch,
    StateMismatch,
)
from lx32_verif.harness import (
    DEFAULT_CONFIGS,
    FAMILIES,
    VALIDATION_PLAN,
    ComponentFamily,
    FuzzConfig,
    InstructionFamily,
    PropertyRunner,
    Stimulus,
    run_component,
    run_validation,
)
from lx32_verif.harness.families import memory_trial
from lx32_verif.harness.records import Discrepancy, compare_pc
from lx32_verif.models.isa import Opcode
from lx32_verif.models.lsu import MemInterface
from lx32_verif.models.memory_model import MemorySim
from lx32_verif.models.system_model import Lx32System

SEED = 0x1A32


def quick(name, iterations=60, **changes):
    return DEFAULT_CONFIGS[name].replace(seed=SEED, iterations=iterations, **changes)


class SkewedPcCore(Lx32System):
    """Reports a PC one instruction ahead once enough steps have run."""

    def __init__(self, good_steps):
        super().__init__()
        self.good_steps = good_steps
        self.steps = 0

    def step(self, reset, instr, mem_rdata):
        if not reset:
            self.steps += 1
        return super().step(reset, instr, mem_rdata)

    def read_pc(self):
        pc = super().read_pc()
        if self.steps > self.good_steps:
            return pc + 4
        return pc


class StoreDroppingCore(Lx32System):
    def step(self, reset, instr, mem_rdata):
        mem_if = super().step(reset, instr, mem_rdata)
        return MemInterface(mem_if.mem_addr, mem_if.mem_wdata, False)


class DirtyZeroCore(Lx32System):
    def read_register(self, index):
        if index == 0:
            return 1
        return super().read_register(index)


class UpperImmediateCore(Lx32System):
    """Writes rd on LUI, which the golden model treats as inert."""

    def __init__(self):
        super().__init__()
        self.upper = {}

    def step(self, reset, instr, mem_rdata):
        mem_if = super().step(reset, instr, mem_rdata)
        rd = (instr >> 7) & 0x1F
        if reset:
            self.upper.clear()
        elif instr & 0x7F == Opcode.LUI and rd:
            self.upper[rd] = instr & 0xFFFFF000
        return mem_if

    def read_register(self, index):
        return self.upper.get(index, super().read_register(index))


class AsyncGolden:
    """Golden core behind an awaitable step, like a simulator-hosted core."""

    def __init__(self):
        self.core = Lx32System()

    async def step(self, reset, instr, mem_rdata):
        await asyncio.sleep(0)
        return self.core.step(reset, instr, mem_rdata)

    def read_pc(self):
        return self.core.read_pc()

    def read_register(self, index):
        return self.core.read_register(index)


@pytest.mark.parametrize("name", VALIDATION_PLAN)
def test_every_family_passes_golden_against_golden(name):
    family = FAMILIES[name]
    if isinstance(family, ComponentFamily):
        summary = run_component(family, quick(name))
    else:
        summary = PropertyRunner(family, quick(name)).run(Lx32System(), Lx32System())
    assert summary.family == name
    assert summary.seed == SEED
    assert sum(summary.coverage.values()) == 60


def test_runs_are_reproducible_from_the_seed():
    first = PropertyRunner(FAMILIES["system"], quick("system")).run(
        Lx32System(), Lx32System()
    )
    second = PropertyRunner(FAMILIES["system"], quick("system")).run(
        Lx32System(), Lx32System()
    )
    assert first.coverage == second.coverage
    assert first.last_record == second.last_record


def test_fresh_seed_is_drawn_and_reported():
    runner = PropertyRunner(FAMILIES["alu"], quick("alu").replace(iterations=5))
    assert runner.seed == SEED
    unseeded = PropertyRunner(FAMILIES["alu"], FuzzConfig(iterations=5))
    summary = unseeded.run(Lx32System(), Lx32System())
    assert summary.seed == unseeded.seed


def test_alu_stimulus_covers_every_mnemonic():
    summary = PropertyRunner(FAMILIES["alu"], quick("alu", iterations=800)).run(
        Lx32System(), Lx32System()
    )
    assert len(summary.coverage) == 19


def test_pc_divergence_raises_state_mismatch(caplog):
    caplog.set_level(logging.INFO, logger="cocotb.lx32")
    runner = PropertyRunner(FAMILIES["alu"], quick("alu"))
    with pytest.raises(StateMismatch) as excinfo:
        runner.run(Lx32System(), SkewedPcCore(good_steps=5))
    error = excinfo.value
    assert error.cycle == 5
    assert error.seed == SEED
    assert error.actual_value == error.expected_value + 4
    assert error.record.iteration == 5
    assert error.record.family == "alu"
    assert "MISMATCH DETECTED" in str(error)
    assert "MISMATCH DETECTED" in caplog.text
    assert f"Seed: {SEED}" in caplog.text


def test_dropped_store_raises_memory_mismatch():
    runner = PropertyRunner(FAMILIES["lsu"], quick("lsu"))
    with pytest.raises(MemoryMismatch) as excinfo:
        runner.run(Lx32System(), StoreDroppingCore())
    record = excinfo.value.record
    assert record.golden.mem_if.mem_we
    assert not record.reference.mem_if.mem_we
    assert excinfo.value.expected_value == 1


def test_nonzero_x0_raises_invariant_violation():
    runner = PropertyRunner(FAMILIES["system"], quick("system"))
    with pytest.raises(InvariantViolation) as excinfo:
        runner.run(Lx32System(), DirtyZeroCore())
    assert excinfo.value.record.iteration == 0
    assert excinfo.value.seed == SEED


def test_core_writing_rd_on_lui_diverges_in_system_family():
    runner = PropertyRunner(FAMILIES["system"], quick("system", iterations=3000))
    with pytest.raises(StateMismatch) as excinfo:
        runner.run(Lx32System(), UpperImmediateCore())
    record = excinfo.value.record
    assert record.instr & 0x7F == Opcode.LUI
    assert record.reference.pc == record.golden.pc


def test_branch_family_only_compares_pc():
    record_compare = FAMILIES["branch"].compare
    assert record_compare is compare_pc


def test_opcode_outside_family_raises_encoding_misuse():
    family = InstructionFamily(
        name="alu",
        title="ALU",
        encode=lambda rng, config: Stimulus(instr=0x00100093),
        compare=compare_pc,
        opcodes=frozenset({Opcode.OP}),
    )
    with pytest.raises(EncodingMisuse) as excinfo:
        PropertyRunner(family, quick("alu")).run(Lx32System(), Lx32System())
    assert excinfo.value.instruction == 0x00100093
    assert excinfo.value.family == "alu"


def test_wrong_immediate_raises_encoding_misuse():
    family = InstructionFamily(
        name="imm_gen",
        title="IMM_GEN",
        encode=lambda rng, config: Stimulus(
            instr=I_ALU["addi"][0](rd=1, rs1=0, imm=5), immediate=6
        ),
        compare=compare_pc,
    )
    with pytest.raises(EncodingMisuse):
        PropertyRunner(family, quick("imm_gen")).run(Lx32System(), Lx32System())


def test_async_runner_matches_blocking_runner():
    config = quick("control_unit")
    blocking = PropertyRunner(FAMILIES["control_unit"], config).run(
        Lx32System(), Lx32System()
    )
    awaited = asyncio.run(
        PropertyRunner(FAMILIES["control_unit"], config).arun(Lx32System(), AsyncGolden())
    )
    assert awaited.coverage == blocking.coverage
    assert awaited.last_record == blocking.last_record


def test_component_contract_breach_is_reported():
    class ForgetfulMemory(MemorySim):
        def write_data(self, address, data, we):
            pass

    family = ComponentFamily(
        name="memory", title="MEMORY_SIM", factory=ForgetfulMemory, trial=memory_trial
    )
    with pytest.raises(MemoryMismatch) as excinfo:
        run_component(family, quick("memory"))
    assert excinfo.value.seed == SEED
    assert "READ_BACK" in str(excinfo.value)


def test_run_validation_follows_the_plan(caplog):
    caplog.set_level(logging.INFO, logger="cocotb.lx32")
    summaries = run_validation(seed=SEED, iterations=30)
    assert [summary.family for summary in summaries] == list(VALIDATION_PLAN)
    assert "LX32 FULL HARDWARE VALIDATION" in caplog.text
    assert "ALL TESTS PASSED SUCCESSFULLY" in caplog.text


def test_run_validation_stops_at_first_failure():
    with pytest.raises(StateMismatch):
        run_validation(
            lambda: SkewedPcCore(good_steps=0), seed=SEED, iterations=30
        )


def test_verbose_run_logs_every_step(caplog):
    caplog.set_level(logging.INFO, logger="cocotb.lx32")
    PropertyRunner(FAMILIES["alu"], quick("alu", iterations=10, enable_logging=True)).run(
        Lx32System(), Lx32System()
    )
    step_lines = [line for line in caplog.messages if line.endswith("| MATCH")]
    assert len(step_lines) == 10
    assert "STIMULUS COVERAGE SUMMARY" in caplog.text


@pytest.mark.parametrize(
    "changes",
    [
        {"iterations": -1},
        {"reset_cycles": 0},
        {"reg_range": (0, 33)},
        {"rd_range": (5, 5)},
        {"imm_range": (1, 0)},
        {"imm_range": (-5000, 5000)},
        {"imm_range": (0, 2048)},
        {"branch_offset_range": (-1025, 0)},
        {"branch_offset_range": (0, 2048), "branch_offset_unit": 2},
        {"branch_offset_unit": 3},
        {"addr_range": (4, 4)},
        {"data_range": (10, 2)},
    ],
)
def test_fuzz_config_rejects_bad_settings(changes):
    with pytest.raises(ValueError):
        FuzzConfig(**changes)


def test_branch_offset_bound_follows_the_unit():
    assert FuzzConfig(branch_offset_range=(-1024, 1024), branch_offset_unit=2)
    with pytest.raises(ValueError, match="branch reach"):
        FuzzConfig(branch_offset_range=(-1024, 1024), branch_offset_unit=4)
    assert DEFAULT_CONFIGS["imm_gen"].branch_offset_unit == 2
    assert DEFAULT_CONFIGS["branch"].branch_offset_unit == 4


def test_out_of_range_immediate_fails_before_the_run():
    with pytest.raises(ValueError, match="imm_range"):
        DEFAULT_CONFIGS["alu"].replace(imm_range=(-5000, 5000))


def test_fuzz_config_replace_ignores_none():
    config = FuzzConfig(seed=3).replace(seed=None, iterations=5)
    assert config.seed == 3
    assert config.iterations == 5


def test_discrepancy_description():
    assert (
        Discrepancy("REGFILE", 1, 2, register=7).describe()
        == "REGFILE x7: expected=0x00000001, actual=0x00000002"
    )
