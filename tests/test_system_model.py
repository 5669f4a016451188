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

from lx32_verif.config import NOP
from lx32_verif.encoders.instruction_encode import enc_j
from lx32_verif.encoders.op_tables import BRANCHES, I_ALU, LOADS, STORES, UPPER
from lx32_verif.models.lsu import IDLE_MEM_INTERFACE, MemInterface
from lx32_verif.models.system_model import Lx32System, ProgramBench


def test_addi_from_reset(core):
    mem_if = core.step(False, 0x00100093, 0)  # addi x1, x0, 1
    assert core.read_pc() == 4
    assert core.read_register(1) == 1
    assert not mem_if.mem_we


def test_store_drives_memory_interface(core):
    core.step(False, LOADS["lw"](rd=1, rs1=0, imm=0), 0xDEADBEEF)
    mem_if = core.step(False, 0x00112023, 0)  # sw x1, 0(x2)
    assert mem_if == MemInterface(mem_addr=0, mem_wdata=0xDEADBEEF, mem_we=True)
    assert core.read_pc() == 8


def test_load_writes_mem_rdata(core):
    core.step(False, I_ALU["addi"][0](rd=2, rs1=0, imm=0x40), 0)
    mem_if = core.step(False, LOADS["lw"](rd=3, rs1=2, imm=-4), 0x0BADF00D)
    assert mem_if.mem_addr == 0x3C
    assert not mem_if.mem_we
    assert core.read_register(3) == 0x0BADF00D


def test_branch_taken_and_not_taken(core):
    core.step(False, BRANCHES["beq"][0](rs2=0, rs1=0, offset=64), 0)
    assert core.read_pc() == 64
    core.step(False, BRANCHES["bne"][0](rs2=0, rs1=0, offset=64), 0)
    assert core.read_pc() == 68


def test_backward_branch_wraps_pc(core):
    core.step(False, BRANCHES["beq"][0](rs2=0, rs1=0, offset=-4), 0)
    assert core.read_pc() == 0xFFFFFFFC


def test_jumps_and_upper_immediates_are_inert(core):
    for instr in (
        enc_j(rd=1, offset=8),
        UPPER["lui"](rd=2, imm20=0x12345),
        UPPER["auipc"](rd=3, imm20=0x1),
    ):
        mem_if = core.step(False, instr, 0)
        assert not mem_if.mem_we
    assert core.read_pc() == 12
    assert [core.read_register(index) for index in (1, 2, 3)] == [0, 0, 0]


def test_writes_to_x0_are_discarded(core):
    core.step(False, I_ALU["addi"][0](rd=0, rs1=0, imm=5), 0)
    assert core.read_register(0) == 0


def test_evaluate_does_not_mutate(core):
    cycle = core.evaluate(0x00100093)
    assert cycle.rd_data == 1
    assert cycle.next_pc == 4
    assert core.read_pc() == 0
    assert core.read_register(1) == 0
    core.commit(cycle)
    assert core.read_register(1) == 1


def test_reset_clears_state(core):
    core.step(False, I_ALU["addi"][0](rd=9, rs1=0, imm=-1), 0)
    assert core.step(True, 0x00100093, 0) == IDLE_MEM_INTERFACE
    assert core.read_pc() == 0
    assert core.reg_file.snapshot() == [0] * 32


def test_program_bench_store_then_load():
    bench = ProgramBench()
    bench.memory.load_program(
        [
            I_ALU["addi"][0](rd=1, rs1=0, imm=0x55),
            STORES["sw"](rs2=1, rs1=0, imm=0x100),
            LOADS["lw"](rd=2, rs1=0, imm=0x100),
        ]
    )
    bench.reset()
    results = bench.run(3)
    assert results[1].mem_if.mem_we
    assert bench.memory.read_data(0x100) == 0x55
    assert bench.core.read_register(2) == 0x55
    assert bench.core.read_pc() == 12


def test_fresh_cores_start_at_zero():
    core = Lx32System()
    assert core.read_pc() == 0
    assert core.read_register(31) == 0


def test_nop_only_advances_pc(core):
    before = core.reg_file.snapshot()
    mem_if = core.step(False, NOP, 0)
    assert core.read_pc() == 4
    assert core.reg_file.snapshot() == before
    assert not mem_if.mem_we
