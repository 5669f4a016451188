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

"""Adapter over a Verilator-built LX32 simulator shared library.

Verilator Core
==============

The RTL is compiled by Verilator together with a thin C bridge into a shared
library. This adapter loads it with ``ctypes`` and exposes the step/inspect
contract. Every call is a blocking, non-reentrant foreign call.

Required C ABI::

    void*    create_core(void);
    void     tick_core(void* core, uint8_t reset, uint32_t instr, uint32_t mem_rdata);
    uint32_t get_pc(void* core);
    uint32_t get_reg(void* core, uint8_t index);

Optional::

    void     get_mem_if(void* core, uint32_t* addr, uint32_t* wdata, uint8_t* we);

``tick_core`` applies the inputs, evaluates with the clock low, then raises
the clock and evaluates again. ``get_mem_if`` returns the memory-interface
outputs the bridge sampled while the clock was low during the last tick,
i.e. the combinational outputs for the instruction just executed.

A bridge built without ``get_mem_if`` still loads. ``step`` then returns
``None`` and the harness compares only PC and registers for that core.

Destroying the handle is not part of the ABI; the simulator lives until the
process exits.
"""

import ctypes
import logging
from os import PathLike
from pathlib import Path

from lx32_verif.config import MASK32, REG_COUNT
from lx32_verif.exceptions import ReferenceCoreError, RegisterAccessError
from lx32_verif.models.lsu import MemInterface

log = logging.getLogger("cocotb.lx32.verilator")

REQUIRED_SYMBOLS = ("create_core", "tick_core", "get_pc", "get_reg")
OPTIONAL_SYMBOLS = ("get_mem_if",)


def _bind(library: ctypes.CDLL) -> None:
    """Declare argument and return types of the bridge entry points."""
    library.create_core.argtypes = []
    library.create_core.restype = ctypes.c_void_p

    library.tick_core.argtypes = [
        ctypes.c_void_p,
        ctypes.c_uint8,
        ctypes.c_uint32,
        ctypes.c_uint32,
    ]
    library.tick_core.restype = None

    library.get_pc.argtypes = [ctypes.c_void_p]
    library.get_pc.restype = ctypes.c_uint32

    library.get_reg.argtypes = [ctypes.c_void_p, ctypes.c_uint8]
    library.get_reg.restype = ctypes.c_uint32

    if hasattr(library, "get_mem_if"):
        library.get_mem_if.argtypes = [
            ctypes.c_void_p,
            ctypes.POINTER(ctypes.c_uint32),
            ctypes.POINTER(ctypes.c_uint32),
            ctypes.POINTER(ctypes.c_uint8),
        ]
        library.get_mem_if.restype = None


def load_library(library_path: str | PathLike[str]) -> ctypes.CDLL:
    """Load the simulator library and check it exports the bridge ABI.

    Raises:
        ReferenceCoreError: If the file is missing, cannot be loaded, or
            lacks one of the required symbols
    """
    path = Path(library_path)
    if not path.is_file():
        raise ReferenceCoreError(f"Reference core library not found: {path}")
    try:
        library = ctypes.CDLL(str(path))
    except OSError as exc:
        raise ReferenceCoreError(f"Cannot load reference core library {path}: {exc}") from exc

    missing = [name for name in REQUIRED_SYMBOLS if not hasattr(library, name)]
    if missing:
        raise ReferenceCoreError(
            f"Reference core library {path} does not export: {', '.join(missing)}"
        )
    absent = [name for name in OPTIONAL_SYMBOLS if not hasattr(library, name)]
    if absent:
        log.warning(
            f"{path} does not export {', '.join(absent)}; "
            "memory interface will not be compared"
        )
    _bind(library)
    return library


class VerilatorCore:
    """Reference core backed by the Verilator simulation.

    Attributes:
        library_path: Path the simulator library was loaded from
        has_mem_if: Whether the bridge reports memory-interface outputs
    """

    def __init__(
        self,
        library_path: str | PathLike[str],
        library: ctypes.CDLL | None = None,
    ) -> None:
        """Create a simulator instance.

        Args:
            library_path: Path to the shared library
            library: Already loaded library to reuse (one process-wide load
                is enough for many cores)
        """
        self.library_path = Path(library_path)
        self._lib = library if library is not None else load_library(library_path)
        self.has_mem_if = hasattr(self._lib, "get_mem_if")
        self._handle = self._lib.create_core()
        if not self._handle:
            raise ReferenceCoreError("create_core() returned a null handle")
        log.debug(f"Created reference core from {self.library_path}")

    def step(self, reset: bool, instr: int, mem_rdata: int) -> MemInterface | None:
        self._lib.tick_core(
            self._handle, int(bool(reset)), instr & MASK32, mem_rdata & MASK32
        )
        if not self.has_mem_if:
            return None
        addr = ctypes.c_uint32()
        wdata = ctypes.c_uint32()
        we = ctypes.c_uint8()
        self._lib.get_mem_if(
            self._handle, ctypes.byref(addr), ctypes.byref(wdata), ctypes.byref(we)
        )
        return MemInterface(
            mem_addr=addr.value, mem_wdata=wdata.value, mem_we=bool(we.value)
        )

    def read_pc(self) -> int:
        return int(self._lib.get_pc(self._handle))

    def read_register(self, index: int) -> int:
        if not 0 <= index < REG_COUNT:
            raise RegisterAccessError(
                f"Register index {index} outside x0-x{REG_COUNT - 1}"
            )
        return int(self._lib.get_reg(self._handle, index))


def create_core(library_path: str | PathLike[str]) -> VerilatorCore:
    """Create a reference core from a simulator library path."""
    return VerilatorCore(library_path)
