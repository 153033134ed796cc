# ccprog CC2530 flash programmer
# Copyright (c) 2026 The ccprog authors
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import pytest

from ccprog.core import exceptions
from ccprog.port import commands
from ccprog.target.memory import (
    XdataMemory,
    INC_DPTR,
    MOV_A_IMM,
    MOV_DPTR_IMM,
    MOVX_A_DPTR,
    MOVX_DPTR_A,
)
from ccprog.target.registers import XReg

class TestXdataMemory:
    def test_write_byte(self, memory, active_target):
        memory.write_byte(0x1234, 0x5a)
        assert active_target.xdata[0x1234] == 0x5a
        assert active_target.instructions == [
            bytes([MOV_DPTR_IMM, 0x12, 0x34]),
            bytes([MOV_A_IMM, 0x5a]),
            bytes([MOVX_DPTR_A]),
            ]

    def test_read_byte(self, memory, active_target):
        active_target.xdata[XReg.CHIPINFO1] = 0x07
        assert memory.read_byte(XReg.CHIPINFO1) == 0x07
        assert active_target.instructions == [
            bytes([MOV_DPTR_IMM, 0x62, 0x77]),
            bytes([MOVX_A_DPTR]),
            ]

    def test_write_block(self, memory, active_target):
        memory.write_block(0x0800, b"\x01\x02\x03")
        assert active_target.xdata[0x0800:0x0803] == b"\x01\x02\x03"
        # DPTR is loaded once, then three instructions per byte.
        assert len(active_target.instructions) == 1 + 3 * 3
        assert active_target.instructions[-1] == bytes([INC_DPTR])

    def test_read_next(self, memory, active_target):
        active_target.xdata[0x100:0x103] = b"\xaa\xbb\xcc"
        memory.set_pointer(0x100)
        assert [memory.read_next() for _ in range(3)] == [0xaa, 0xbb, 0xcc]
        assert active_target.dptr == 0x103

    def test_timeout_gets_address(self, memory, active_target):
        active_target.ready_delay = None
        with pytest.raises(exceptions.TimeoutError) as excinfo:
            memory.read_byte(XReg.FCTL)
        assert excinfo.value.address == XReg.FCTL
        assert "address 0x6270" in str(excinfo.value)

    def test_timeout_keeps_address(self, memory, monkeypatch):
        def fail(*args):
            raise exceptions.TimeoutError("stuck", address=0x42)
        monkeypatch.setattr(memory.protocol, "execute", fail)
        with pytest.raises(exceptions.TimeoutError) as excinfo:
            memory.write_byte(0x1000, 1)
        assert excinfo.value.address == 0x42

    def test_gpio_error_gets_address(self, memory, monkeypatch):
        def fail(*args):
            raise exceptions.GpioError("boom", pin=1)
        monkeypatch.setattr(memory.protocol, "execute", fail)
        with pytest.raises(exceptions.GpioError) as excinfo:
            memory.write_byte(XReg.FCTL, 6)
        assert excinfo.value.address == XReg.FCTL
        assert str(excinfo.value) == "boom (gpio 1; address 0x6270)"

    def test_inject_uses_debug_inst(self, memory, monkeypatch):
        calls = []
        def execute(spec, params=b""):
            calls.append((spec, tuple(params)))
            return b"\x99"
        monkeypatch.setattr(memory.protocol, "execute", execute)
        assert memory.inject(0x00) == 0x99
        assert calls == [(commands.DEBUG_INST, (0x00,))]
