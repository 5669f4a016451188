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

"""CoCoTB test cases for the LX32 RTL.

Test Modules
------------
test_lx32_system
    Directed reset/ALU/store checks and one lockstep random test per
    core-level instruction family, driven through ``CocotbCore``

Running Tests
-------------
From a cocotb build of the ``lx32_system`` top level::

    make TOPLEVEL=lx32_system COCOTB_TEST_MODULES=lx32_verif.cocotb_tests.test_lx32_system
"""
