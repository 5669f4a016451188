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

"""Structured logging for lockstep execution and mismatch reports.

Instruction Logger
==================

Provides utilities for logging each lockstep step with the state of both
cores side by side, making divergences easy to spot and replay.

Records go to the ``cocotb.lx32`` logger. Inside a simulation they flow
through cocotb's handlers next to ``cocotb.log``; outside one they are plain
``logging`` records (the CLI configures the root handler).

Step line format::

    [   12] Instr: 0x00100093 | PC: [R:0x0034 G:0x0034] | x 1: [R:0x00000001 G:0x00000001] | MATCH
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from lx32_verif.config import BANNER_WIDTH

if TYPE_CHECKING:
    from lx32_verif.harness.records import ComparisonRecord, Discrepancy

log = logging.getLogger("cocotb.lx32")


class InstructionLogger:
    """Structured logging for lockstep verification runs."""

    @staticmethod
    def banner(text: str) -> str:
        return f"{' ' + text + ' ':=^{BANNER_WIDTH}}"

    @staticmethod
    def log_banner(text: str, level: int = logging.INFO) -> None:
        log.log(level, InstructionLogger.banner(text))

    @staticmethod
    def log_run_start(title: str, seed: int, settings: dict[str, object]) -> None:
        """Log the start banner of a family run with its seed and settings.

        Args:
            title: Family title (e.g. "ALU")
            seed: Seed of the run-local random generator
            settings: Extra "name: value" lines (iterations, ranges)
        """
        InstructionLogger.log_banner(f"STARTING {title} FUZZER")
        log.info(f"Seed: {seed}")
        for name, value in settings.items():
            log.info(f"{name}: {value}")

    @staticmethod
    def log_run_passed(title: str) -> None:
        InstructionLogger.log_banner(f"{title} FUZZER PASSED")

    @staticmethod
    def format_step(
        record: ComparisonRecord, focus: int | None, matched: bool
    ) -> str:
        """Render one step as a single line.

        Args:
            record: Comparison record of the step
            focus: Register shown in the line; None shows the PC transition
            matched: Comparator verdict
        """
        golden, reference = record.golden, record.reference
        status = "MATCH" if matched else "!!! MISMATCH !!!"
        if focus is None:
            pc_part = (
                f"PC: 0x{reference.pre_pc:04x}->"
                f"[R:0x{reference.pc:04x} G:0x{golden.pc:04x}]"
            )
            return f"[{record.iteration:>5}] Instr: 0x{record.instr:08x} | {pc_part} | {status}"
        return (
            f"[{record.iteration:>5}] Instr: 0x{record.instr:08x} | "
            f"PC: [R:0x{reference.pc:04x} G:0x{golden.pc:04x}] | "
            f"x{focus:>2}: [R:0x{reference.registers[focus]:08x} "
            f"G:0x{golden.registers[focus]:08x}] | {status}"
        )

    @staticmethod
    def log_step(record: ComparisonRecord, focus: int | None, matched: bool) -> None:
        line = InstructionLogger.format_step(record, focus, matched)
        if matched:
            log.info(line)
        else:
            log.error(line)

    @staticmethod
    def log_mismatch(
        component: str,
        iteration: int,
        expected: int,
        actual: int,
        register: int | None = None,
    ) -> None:
        """Log golden-reference mismatch for debugging.

        Args:
            component: Component that mismatched ("REGFILE", "PC", "MEM_ADDR")
            iteration: Iteration when mismatch occurred
            expected: Expected value from the golden model
            actual: Actual value from the reference core
            register: Register index (if applicable)
        """
        reg_str = f" x{register}" if register is not None else ""
        log.error(
            f"[{iteration:>5}] MISMATCH {component}{reg_str}: "
            f"expected=0x{expected:08x}, actual=0x{actual:08x}"
        )

    @staticmethod
    def format_report(
        title: str,
        iteration: int,
        seed: int,
        discrepancies: Iterable[Discrepancy],
        record: ComparisonRecord | None = None,
        details: Iterable[str] = (),
    ) -> str:
        """Build the full diagnostic for a failed step.

        The report is both logged and used as the exception message, so a
        failure is reproducible from either.
        """
        lines = [
            InstructionLogger.banner(f"{title} MISMATCH DETECTED"),
            f"Iteration: {iteration}",
            f"Seed: {seed}",
        ]
        if record is not None:
            golden, reference = record.golden, record.reference
            lines += [
                f"Family: {record.family}",
                f"Instruction: 0x{record.instr:08x}",
                f"mem_rdata: 0x{record.mem_rdata:08x}",
                f"PC before: [R:0x{reference.pre_pc:08x} G:0x{golden.pre_pc:08x}]",
                f"PC after:  [R:0x{reference.pc:08x} G:0x{golden.pc:08x}]",
            ]
            for index in record.watched:
                r_val = reference.registers[index]
                g_val = golden.registers[index]
                marker = "" if r_val == g_val else "  <-- differs"
                lines.append(f"x{index:>2}: [R:0x{r_val:08x} G:0x{g_val:08x}]{marker}")
            r_mem = "n/a" if reference.mem_if is None else reference.mem_if
            lines.append(f"Memory IF: [R:{r_mem}] [G:{golden.mem_if}]")
        lines.extend(details)
        lines.extend(discrepancy.describe() for discrepancy in discrepancies)
        return "\n".join(lines)

    @staticmethod
    def log_coverage_summary(counts: dict[str, int], threshold: int = 1) -> None:
        """Log how often each stimulus kind was exercised.

        Args:
            counts: Dict mapping stimulus label -> count
            threshold: Minimum count for a label to be marked covered
        """
        log.info("=" * 60)
        log.info("STIMULUS COVERAGE SUMMARY")
        log.info("=" * 60)
        for label, count in sorted(counts.items()):
            status = "✓" if count >= threshold else "✗"
            log.info(f"  {status} {label:12s}: {count:6d}")
        log.info("=" * 60)
