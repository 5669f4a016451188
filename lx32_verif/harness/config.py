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

"""Run configuration for the differential fuzzers.

Fuzz Config
===========

``FuzzConfig`` collects every knob of one family run. Range conventions:

    reg_range, rd_range, addr_range   half-open  [lo, hi)
    imm_range, data_range             inclusive  [lo, hi]
    branch_offset_range               inclusive, in units of
                                      branch_offset_unit bytes (4 for the
                                      branch family, 2 for control_unit and
                                      imm_gen)

Immediates must fit the signed 12-bit I/S field and scaled branch offsets
the B-format reach of [-4096, 4094], so a bad range fails here rather than
inside an encoder halfway through a run.

``seed=None`` asks the runner to draw a fresh seed; the drawn value is
logged and attached to every error so the run can be replayed.

``DEFAULT_CONFIGS`` holds the per-family settings of the full validation
plan.
"""

import dataclasses
from dataclasses import dataclass

from lx32_verif.config import (
    B_IMM_BITS,
    DEFAULT_RESET_CYCLES,
    I_IMM_BITS,
    MASK32,
    REG_COUNT,
)

IMM12_MIN = -(1 << (I_IMM_BITS - 1))
IMM12_MAX = (1 << (I_IMM_BITS - 1)) - 1
# B-format offsets are even
BRANCH_OFFSET_MIN = -(1 << (B_IMM_BITS - 1))
BRANCH_OFFSET_MAX = (1 << (B_IMM_BITS - 1)) - 2


@dataclass(frozen=True)
class FuzzConfig:
    """Parameters of one fuzzer run.

    Attributes:
        iterations: Number of lockstep steps (or component trials)
        seed: Seed of the run-local random generator, None for a fresh one
        reg_range: Source register indices
        rd_range: Destination register indices
        imm_range: Signed 12-bit immediates
        branch_offset_range: Branch offsets in units of branch_offset_unit
        branch_offset_unit: Bytes per branch offset unit (2 or 4)
        addr_range: Byte addresses for memory trials
        data_range: Data values for component trials
        reset_cycles: Reset cycles applied to both cores before the run
        enable_logging: Log one line per step
    """

    iterations: int = 1000
    seed: int | None = None
    reg_range: tuple[int, int] = (0, REG_COUNT)
    rd_range: tuple[int, int] = (1, REG_COUNT)
    imm_range: tuple[int, int] = (-2048, 2047)
    branch_offset_range: tuple[int, int] = (-128, 128)
    branch_offset_unit: int = 4
    addr_range: tuple[int, int] = (0, 4096)
    data_range: tuple[int, int] = (0, MASK32)
    reset_cycles: int = DEFAULT_RESET_CYCLES
    enable_logging: bool = False

    def __post_init__(self) -> None:
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")
        if self.reset_cycles < 1:
            raise ValueError(f"reset_cycles must be >= 1, got {self.reset_cycles}")
        for name in ("reg_range", "rd_range"):
            lo, hi = getattr(self, name)
            if not 0 <= lo < hi <= REG_COUNT:
                raise ValueError(f"{name} must lie within [0, {REG_COUNT}), got {(lo, hi)}")
        for name in ("addr_range",):
            lo, hi = getattr(self, name)
            if lo >= hi:
                raise ValueError(f"{name} is empty: {(lo, hi)}")
        for name in ("imm_range", "branch_offset_range", "data_range"):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"{name} is empty: {(lo, hi)}")

        lo, hi = self.imm_range
        if lo < IMM12_MIN or hi > IMM12_MAX:
            raise ValueError(
                f"imm_range must lie within [{IMM12_MIN}, {IMM12_MAX}], got {(lo, hi)}"
            )
        if self.branch_offset_unit not in (2, 4):
            raise ValueError(
                f"branch_offset_unit must be 2 or 4, got {self.branch_offset_unit}"
            )
        lo, hi = (bound * self.branch_offset_unit for bound in self.branch_offset_range)
        if lo < BRANCH_OFFSET_MIN or hi > BRANCH_OFFSET_MAX:
            raise ValueError(
                f"branch_offset_range {self.branch_offset_range} x "
                f"{self.branch_offset_unit} bytes exceeds the branch reach "
                f"[{BRANCH_OFFSET_MIN}, {BRANCH_OFFSET_MAX}]"
            )

    def replace(self, **changes) -> "FuzzConfig":
        """Copy with some fields changed (None values are ignored)."""
        return dataclasses.replace(
            self, **{key: value for key, value in changes.items() if value is not None}
        )


DEFAULT_CONFIGS: dict[str, FuzzConfig] = {
    "alu": FuzzConfig(iterations=3000),
    "branch": FuzzConfig(iterations=10000, branch_offset_range=(-128, 128)),
    "control_unit": FuzzConfig(
        iterations=500, branch_offset_range=(-1024, 1023), branch_offset_unit=2
    ),
    "lsu": FuzzConfig(iterations=2000),
    "imm_gen": FuzzConfig(
        iterations=2000, branch_offset_range=(-1024, 1024), branch_offset_unit=2
    ),
    "memory": FuzzConfig(iterations=1000, addr_range=(0, 4096)),
    "reg_generic": FuzzConfig(iterations=2000),
    "register_file": FuzzConfig(iterations=2000),
    "system": FuzzConfig(iterations=500),
}
