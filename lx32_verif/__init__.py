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

"""LX32 golden model and lockstep differential verification framework.

This package provides a cycle-accurate software model of the single-cycle
LX32 RV32I core and a harness that runs it in lockstep against the RTL
(through a Verilator shared library or a cocotb simulation), stopping at the
first divergence.

Package Structure
-----------------

Subpackages:
    models
        Golden models of every datapath block and the full system

    encoders
        RV32I instruction encoders and mnemonic op tables

    cores
        Step/inspect contract and its Verilator and cocotb adapters

    harness
        Fuzz families, the generic property runner and the validation plan

    cocotb_tests
        CoCoTB tests driving the RTL against the golden model

    utils
        Value conversions, validation helpers and structured logging

Modules:
    config
        Central architectural constants (widths, masks, memory size)

    verification_types
        Type aliases for type safety (Address, RegisterIndex, etc.)

    exceptions
        Custom exception hierarchy for verification failures

    vectors
        ALU/branch test-vector file generator and checker

    cli
        ``lx32-verif`` command line

Quick Start
-----------
Self-check the harness with the golden model on both sides::

    lx32-verif validate --seed 1

Validate the RTL through its Verilator library::

    lx32-verif validate --library build/liblx32.so
"""

from lx32_verif.config import MASK32, XLEN
from lx32_verif.models.system_model import Lx32System, create_core
from lx32_verif.verification_types import Address, Instruction, RegisterIndex

__all__ = [
    "Address",
    "RegisterIndex",
    "Instruction",
    "MASK32",
    "XLEN",
    "Lx32System",
    "create_core",
]
