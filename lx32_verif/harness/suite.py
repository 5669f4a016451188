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

"""Full hardware validation: every family, in order, fail-fast."""

from collections.abc import Callable, Iterable

from lx32_verif.cores.core_interface import CoreHandle
from lx32_verif.harness.config import DEFAULT_CONFIGS
from lx32_verif.harness.families import FAMILIES, ComponentFamily
from lx32_verif.harness.runner import PropertyRunner, RunSummary, run_component
from lx32_verif.models.system_model import create_core
from lx32_verif.utils.instruction_logger import InstructionLogger

VALIDATION_PLAN = (
    "alu",
    "branch",
    "control_unit",
    "lsu",
    "imm_gen",
    "memory",
    "reg_generic",
    "register_file",
    "system",
)


def run_validation(
    reference_factory: Callable[[], CoreHandle] | None = None,
    plan: Iterable[str] = VALIDATION_PLAN,
    seed: int | None = None,
    iterations: int | None = None,
    enable_logging: bool | None = None,
) -> list[RunSummary]:
    """Run each family of the plan against a fresh pair of cores.

    Args:
        reference_factory: Creates the reference core; None compares the
            golden model against a second golden instance
        plan: Family names, run in the given order
        seed: Seed for every family (None draws one per family)
        iterations: Override of each family's default iteration count
        enable_logging: Override of each family's per-step logging

    Returns:
        One summary per family

    Raises:
        KeyError: If the plan names an unknown family
        VerificationError: On the first mismatch in any family
    """
    reference_factory = reference_factory if reference_factory is not None else create_core
    InstructionLogger.log_banner("LX32 FULL HARDWARE VALIDATION")

    summaries = []
    for name in plan:
        family = FAMILIES[name]
        config = DEFAULT_CONFIGS[name].replace(
            seed=seed, iterations=iterations, enable_logging=enable_logging
        )
        if isinstance(family, ComponentFamily):
            summaries.append(run_component(family, config))
        else:
            runner = PropertyRunner(family, config)
            summaries.append(runner.run(create_core(), reference_factory()))

    InstructionLogger.log_banner("ALL TESTS PASSED SUCCESSFULLY")
    return summaries
