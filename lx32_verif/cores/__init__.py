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

"""Core implementations of the step/inspect contract.

Variants
--------
golden
    ``lx32_verif.models.Lx32System``, the software reference

verilator_core
    ``VerilatorCore``: ctypes adapter over the Verilator simulator library

cocotb_core
    ``CocotbCore``: async adapter over a DUT handle inside a cocotb
    simulation (import it from ``lx32_verif.cores.cocotb_core`` inside
    cocotb tests)
"""

from lx32_verif.cores.core_interface import AsyncCoreHandle, CoreHandle
from lx32_verif.cores.verilator_core import VerilatorCore
from lx32_verif.models.system_model import Lx32System

__all__ = [
    "AsyncCoreHandle",
    "CoreHandle",
    "VerilatorCore",
    "Lx32System",
]
