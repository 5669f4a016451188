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

"""Generic lockstep property runner.

Runner
======

One runner drives every instruction family. Per iteration::

    encode ──► opcode check ──► golden.step ──► reference.step
                                                     │
          raise ◄── compare ◄── x0 check ◄── capture record
           (first mismatch)

``run`` steps a blocking reference core (golden model, ctypes adapter);
``arun`` awaits the reference step so the same loop runs inside the cocotb
scheduler. Both share every helper below, so the two paths cannot drift.

Every run owns one ``random.Random`` seeded from the config (or from a fresh
seed that is logged), and stops at the first divergence with an exception
carrying the comparison record and the seed.
"""

import random
from collections import Counter
from dataclasses import dataclass, field

from lx32_verif.cores.core_interface import AsyncCoreHandle, CoreHandle
from lx32_verif.exceptions import EncodingMisuse, MismatchError
from lx32_verif.harness.config import DEFAULT_CONFIGS, FuzzConfig
from lx32_verif.harness.families import ComponentFamily, InstructionFamily, Stimulus
from lx32_verif.harness.records import (
    ComparisonRecord,
    Discrepancy,
    capture_snapshot,
    check_zero_register,
)
from lx32_verif.models.decoder import decode_fields
from lx32_verif.models.imm_gen import imm_gen
from lx32_verif.models.lsu import MemInterface
from lx32_verif.utils.instruction_logger import InstructionLogger, log


def resolve_seed(seed: int | None) -> int:
    """Return the given seed, or draw a fresh 32-bit one."""
    if seed is not None:
        return seed
    return random.SystemRandom().getrandbits(32)


@dataclass
class RunSummary:
    """Outcome of a completed (passing) run.

    Attributes:
        family: Family name
        iterations: Steps or trials executed
        seed: Seed that reproduces the run
        coverage: Stimulus label -> count
        last_record: Comparison record of the final step (core-level only)
    """

    family: str
    iterations: int
    seed: int
    coverage: Counter = field(default_factory=Counter)
    last_record: ComparisonRecord | None = None


def _raise_for(
    discrepancies: list[Discrepancy],
    title: str,
    iteration: int,
    seed: int,
    record: ComparisonRecord | None = None,
    details: tuple[str, ...] = (),
) -> None:
    """Log the full report and raise the error of the first discrepancy."""
    first = discrepancies[0]
    report = InstructionLogger.format_report(
        title, iteration, seed, discrepancies, record=record, details=details
    )
    for discrepancy in discrepancies:
        InstructionLogger.log_mismatch(
            discrepancy.component,
            iteration,
            discrepancy.expected,
            discrepancy.actual,
            discrepancy.register,
        )
    log.error(report)
    if issubclass(first.error, MismatchError):
        raise first.error(
            report,
            expected_value=first.expected,
            actual_value=first.actual,
            cycle=iteration,
            record=record,
            seed=seed,
        )
    raise first.error(report, record=record, seed=seed)


class PropertyRunner:
    """Lockstep runner for one instruction family.

    Attributes:
        family: Family providing stimulus and comparator
        config: Run configuration
        seed: Resolved seed of this run
        rng: Run-local random generator
    """

    def __init__(self, family: InstructionFamily, config: FuzzConfig | None = None):
        self.family = family
        self.config = config if config is not None else DEFAULT_CONFIGS[family.name]
        self.seed = resolve_seed(self.config.seed)
        self.rng = random.Random(self.seed)
        self.coverage: Counter = Counter()

    # -- shared helpers -----------------------------------------------------

    def _start(self) -> None:
        InstructionLogger.log_run_start(
            self.family.title,
            self.seed,
            {
                "Iterations": self.config.iterations,
                "Registers": self.config.reg_range,
                "Immediates": self.config.imm_range,
            },
        )

    def _next_stimulus(self, iteration: int) -> Stimulus:
        stimulus = self.family.encode(self.rng, self.config)
        opcode = decode_fields(stimulus.instr).opcode
        if self.family.opcodes is not None and opcode not in self.family.opcodes:
            raise EncodingMisuse(
                f"{self.family.name} generator produced opcode 0b{opcode:07b} "
                f"(instr 0x{stimulus.instr:08x}) at iteration {iteration}, seed {self.seed}",
                instruction=stimulus.instr,
                family=self.family.name,
                seed=self.seed,
            )
        if stimulus.immediate is not None and imm_gen(stimulus.instr) != stimulus.immediate:
            raise EncodingMisuse(
                f"{self.family.name} generator meant immediate 0x{stimulus.immediate:08x} "
                f"but instr 0x{stimulus.instr:08x} carries 0x{imm_gen(stimulus.instr):08x} "
                f"(iteration {iteration}, seed {self.seed})",
                instruction=stimulus.instr,
                family=self.family.name,
                seed=self.seed,
            )
        self.coverage[stimulus.label] += 1
        return stimulus

    def _check(
        self,
        iteration: int,
        stimulus: Stimulus,
        pre_pcs: tuple[int, int],
        golden: CoreHandle,
        reference: CoreHandle | AsyncCoreHandle,
        mem_ifs: tuple[MemInterface, MemInterface | None],
    ) -> ComparisonRecord:
        record = ComparisonRecord(
            iteration=iteration,
            instr=stimulus.instr,
            mem_rdata=stimulus.mem_rdata,
            golden=capture_snapshot(golden, pre_pcs[0], stimulus.watched, mem_ifs[0]),
            reference=capture_snapshot(reference, pre_pcs[1], stimulus.watched, mem_ifs[1]),
            family=self.family.name,
        )

        violations = check_zero_register(
            golden.read_register(0), reference.read_register(0)
        )
        if violations:
            _raise_for(violations, "X0 INVARIANT", iteration, self.seed, record)

        discrepancies = self.family.compare(record)
        if self.config.enable_logging or discrepancies:
            InstructionLogger.log_step(record, stimulus.focus, not discrepancies)
        if discrepancies:
            _raise_for(discrepancies, self.family.title, iteration, self.seed, record)
        return record

    def _finish(self, record: ComparisonRecord | None) -> RunSummary:
        if self.config.enable_logging:
            InstructionLogger.log_coverage_summary(dict(self.coverage))
        InstructionLogger.log_run_passed(self.family.title)
        return RunSummary(
            family=self.family.name,
            iterations=self.config.iterations,
            seed=self.seed,
            coverage=self.coverage,
            last_record=record,
        )

    # -- drivers ------------------------------------------------------------

    def run(self, golden: CoreHandle, reference: CoreHandle) -> RunSummary:
        """Reset both cores, then fuzz until done or the first mismatch.

        Raises:
            VerificationError: On the first divergence or invariant breach
        """
        self._start()
        for _ in range(self.config.reset_cycles):
            golden.step(True, 0, 0)
            reference.step(True, 0, 0)

        record = None
        for iteration in range(self.config.iterations):
            stimulus = self._next_stimulus(iteration)
            pre_pcs = (golden.read_pc(), reference.read_pc())
            golden_if = golden.step(False, stimulus.instr, stimulus.mem_rdata)
            reference_if = reference.step(False, stimulus.instr, stimulus.mem_rdata)
            record = self._check(
                iteration, stimulus, pre_pcs, golden, reference, (golden_if, reference_if)
            )
        return self._finish(record)

    async def arun(self, golden: CoreHandle, reference: AsyncCoreHandle) -> RunSummary:
        """Async twin of ``run`` for a reference core living in cocotb."""
        self._start()
        for _ in range(self.config.reset_cycles):
            golden.step(True, 0, 0)
            await reference.step(True, 0, 0)

        record = None
        for iteration in range(self.config.iterations):
            stimulus = self._next_stimulus(iteration)
            pre_pcs = (golden.read_pc(), reference.read_pc())
            golden_if = golden.step(False, stimulus.instr, stimulus.mem_rdata)
            reference_if = await reference.step(False, stimulus.instr, stimulus.mem_rdata)
            record = self._check(
                iteration, stimulus, pre_pcs, golden, reference, (golden_if, reference_if)
            )
        return self._finish(record)


def run_component(
    family: ComponentFamily, config: FuzzConfig | None = None
) -> RunSummary:
    """Fuzz a golden-only component against its own contract.

    Raises:
        VerificationError: On the first trial whose outcome breaks the contract
    """
    config = config if config is not None else DEFAULT_CONFIGS[family.name]
    seed = resolve_seed(config.seed)
    rng = random.Random(seed)
    coverage: Counter = Counter()
    component = family.factory()

    InstructionLogger.log_run_start(
        family.title,
        seed,
        {"Iterations": config.iterations, "Data Range": config.data_range},
    )
    for iteration in range(config.iterations):
        outcome = family.trial(component, rng, config, iteration)
        coverage[outcome.label] += 1
        status = "MISMATCH" if outcome.discrepancies else "MATCH"
        if config.enable_logging or outcome.discrepancies:
            log.info(f"[{iteration:>5}] {outcome.summary} | {status}")
        if outcome.discrepancies:
            _raise_for(
                outcome.discrepancies,
                family.title,
                iteration,
                seed,
                details=(f"Trial: {outcome.summary}",),
            )

    if config.enable_logging:
        InstructionLogger.log_coverage_summary(dict(coverage))
    InstructionLogger.log_run_passed(family.title)
    return RunSummary(
        family=family.name, iterations=config.iterations, seed=seed, coverage=coverage
    )


__all__ = [
    "PropertyRunner",
    "RunSummary",
    "resolve_seed",
    "run_component",
]
