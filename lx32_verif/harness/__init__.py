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

"""Differential harness: golden model vs. reference core, in lockstep.

Modules
-------
config
    FuzzConfig and the per-family defaults

records
    StateSnapshot / ComparisonRecord and the PC, register, memory-interface
    and x0 comparators

families
    Stimulus generators per unit (alu, branch, control_unit, lsu, imm_gen,
    system) and golden-only component trials (memory, reg_generic,
    register_file)

runner
    PropertyRunner (run / arun) and run_component

suite
    VALIDATION_PLAN and run_validation

Usage
-----
::

    from lx32_verif.harness import FAMILIES, FuzzConfig, PropertyRunner
    from lx32_verif.cores import VerilatorCore, Lx32System

    runner = PropertyRunner(FAMILIES["alu"], FuzzConfig(iterations=500, seed=7))
    runner.run(Lx32System(), VerilatorCore("build/liblx32.so"))
"""

from lx32_verif.harness.config import DEFAULT_CONFIGS, FuzzConfig
from lx32_verif.harness.families import (
    FAMILIES,
    ComponentFamily,
    InstructionFamily,
    Stimulus,
)
from lx32_verif.harness.records import ComparisonRecord, StateSnapshot
from lx32_verif.harness.runner import PropertyRunner, RunSummary, run_component
from lx32_verif.harness.suite import VALIDATION_PLAN, run_validation

__all__ = [
    "DEFAULT_CONFIGS",
    "FuzzConfig",
    "FAMILIES",
    "ComponentFamily",
    "InstructionFamily",
    "Stimulus",
    "ComparisonRecord",
    "StateSnapshot",
    "PropertyRunner",
    "RunSummary",
    "run_component",
    "VALIDATION_PLAN",
    "run_validation",
]
