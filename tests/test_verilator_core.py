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

import ctypes
import logging
from types import SimpleNamespace

import pytest

from lx32_verif.cores import verilator_core
from lx32_verif.cores.verilator_core import VerilatorCore, load_library
from lx32_verif.exceptions import ReferenceCoreError, RegisterAccessError
from lx32_verif.harness import DEFAULT_CONFIGS, FAMILIES, PropertyRunner
from lx32_verif.models.system_model import Lx32System


class FakeBridge:
    """Stands in for the simulator library, backed by golden cores.

    Out-parameters arrive as ``ctypes.byref`` objects, written through the
    object they wrap.
    """

    def __init__(self, null_handle=False):
        self.null_handle = null_handle
        self.cores = {}
        self.mem_ifs = {}

    def create_core(self):
        if self.null_handle:
            return None
        handle = len(self.cores) + 1
        self.cores[handle] = Lx32System()
        return handle

    def tick_core(self, handle, reset, instr, mem_rdata):
        self.mem_ifs[handle] = self.cores[handle].step(bool(reset), instr, mem_rdata)

    def get_pc(self, handle):
        return self.cores[handle].read_pc()

    def get_reg(self, handle, index):
        return self.cores[handle].read_register(index)

    def get_mem_if(self, handle, addr, wdata, we):
        mem_if = self.mem_ifs[handle]
        addr._obj.value = mem_if.mem_addr
        wdata._obj.value = mem_if.mem_wdata
        we._obj.value = int(mem_if.mem_we)


def test_missing_library_rejected(tmp_path):
    with pytest.raises(ReferenceCoreError, match="not found"):
        load_library(tmp_path / "liblx32.so")


def test_non_library_file_rejected(tmp_path):
    path = tmp_path / "liblx32.so"
    path.write_text("not an ELF object")
    with pytest.raises(ReferenceCoreError, match="Cannot load"):
        load_library(path)


def test_null_handle_rejected(tmp_path):
    with pytest.raises(ReferenceCoreError):
        VerilatorCore(tmp_path / "liblx32.so", library=FakeBridge(null_handle=True))


def test_step_returns_memory_interface(tmp_path):
    core = VerilatorCore(tmp_path / "liblx32.so", library=FakeBridge())
    core.step(True, 0, 0)
    core.step(False, 0x00002083, 0xDEADBEEF)  # lw x1, 0(x0)
    mem_if = core.step(False, 0x00102223, 0)  # sw x1, 4(x0)
    assert mem_if.mem_we
    assert mem_if.mem_addr == 4
    assert mem_if.mem_wdata == 0xDEADBEEF
    assert core.read_pc() == 8
    assert core.read_register(1) == 0xDEADBEEF


def test_register_index_checked_before_the_call(tmp_path):
    core = VerilatorCore(tmp_path / "liblx32.so", library=FakeBridge())
    with pytest.raises(RegisterAccessError):
        core.read_register(32)


@pytest.mark.parametrize("name", ["lsu", "system"])
def test_adapter_runs_in_lockstep(tmp_path, name):
    bridge = FakeBridge()
    reference = VerilatorCore(tmp_path / "liblx32.so", library=bridge)
    config = DEFAULT_CONFIGS[name].replace(seed=99, iterations=100)
    summary = PropertyRunner(FAMILIES[name], config).run(Lx32System(), reference)
    assert summary.last_record.reference == summary.last_record.golden


class FourCallBridge(FakeBridge):
    """Bridge exporting only the core lifecycle calls, without get_mem_if."""

    def __getattribute__(self, name):
        if name == "get_mem_if":
            raise AttributeError(name)
        return super().__getattribute__(name)


def _write_library(tmp_path):
    path = tmp_path / "liblx32.so"
    path.write_bytes(b"\x7fELF")
    return path


def test_four_call_library_loads(tmp_path, monkeypatch, caplog):
    symbols = SimpleNamespace(
        create_core=lambda: 1,
        tick_core=lambda handle, reset, instr, mem_rdata: None,
        get_pc=lambda handle: 0,
        get_reg=lambda handle, index: 0,
    )
    monkeypatch.setattr(verilator_core.ctypes, "CDLL", lambda path: symbols)
    with caplog.at_level(logging.WARNING, logger="cocotb.lx32.verilator"):
        library = load_library(_write_library(tmp_path))
    assert library is symbols
    assert symbols.get_pc.restype is ctypes.c_uint32
    assert "get_mem_if" in caplog.text
    assert not VerilatorCore(tmp_path / "liblx32.so", library=library).has_mem_if


def test_library_missing_a_core_call_rejected(tmp_path, monkeypatch):
    symbols = SimpleNamespace(create_core=lambda: 1, tick_core=lambda *args: None)
    monkeypatch.setattr(verilator_core.ctypes, "CDLL", lambda path: symbols)
    with pytest.raises(ReferenceCoreError, match="get_pc, get_reg"):
        load_library(_write_library(tmp_path))


def test_step_without_memory_interface_returns_none(tmp_path):
    core = VerilatorCore(tmp_path / "liblx32.so", library=FourCallBridge())
    core.step(True, 0, 0)
    assert core.step(False, 0x00102223, 0) is None  # sw x1, 4(x0)
    assert core.read_pc() == 4


@pytest.mark.parametrize("name", ["lsu", "system"])
def test_four_call_adapter_compares_state_only(tmp_path, name):
    reference = VerilatorCore(tmp_path / "liblx32.so", library=FourCallBridge())
    config = DEFAULT_CONFIGS[name].replace(seed=99, iterations=100)
    summary = PropertyRunner(FAMILIES[name], config).run(Lx32System(), reference)
    record = summary.last_record
    assert record.reference.mem_if is None
    assert record.reference.pc == record.golden.pc
    assert record.reference.registers == record.golden.registers
