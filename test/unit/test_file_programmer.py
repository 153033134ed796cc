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
from ccprog.core.session import Session
from ccprog.flash.file_programmer import FileProgrammer
from ccprog.flash.image import FirmwareImage

from .mocktarget import SimulatedTarget

def make_image(length):
    return FirmwareImage(bytes((i * 13 + 5) & 0xff for i in range(length)), name="test.bin")

class TestFileProgrammer:
    def test_program_and_verify(self, session, target):
        image = make_image(2048)
        result = FileProgrammer(session, verify=True).program(image)
        assert result.chip.flash_size == 64 * 1024
        assert result.plan.block_count == 2
        assert result.max_speed
        assert result.verify.compared == 2048
        assert result.verify.mismatches == []
        assert target.flash[:2048] == image.data
        assert target.flash[2048:4096] == bytes([0xff]) * 2048
        assert target.config == 0x22
        assert target.xdata[0x709e] == 0x80
        assert target.errors == []

    def test_program_never_busy(self):
        target = SimulatedTarget(chipinfo0=0x20, flash_busy_polls=0, erase_busy_polls=0)
        image = make_image(2048)
        with Session(gpio=target, no_config=True) as session:
            result = FileProgrammer(session, verify=True).program(image)
        assert result.chip.flash_size == 64 * 1024
        assert result.plan.block_count == 2
        assert result.max_speed
        assert result.verify.compared == 2048
        assert result.verify.mismatches == []
        assert target.flash[:2048] == image.data
        assert target.errors == []

    def test_program_from_file(self, session, target, tmp_path):
        path = tmp_path / "fw.bin"
        path.write_bytes(bytes(range(100)))
        result = FileProgrammer(session).program(str(path))
        assert result.verify is None
        assert target.flash[:100] == bytes(range(100))

    def test_too_large(self, target):
        target.xdata[0x6276] = 0x10
        with Session(gpio=target, no_config=True) as session:
            with pytest.raises(exceptions.ImageTooLarge) as excinfo:
                FileProgrammer(session).program(make_image(32 * 1024 + 1))
        assert excinfo.value.capacity == 32 * 1024
        assert excinfo.value.size == 32 * 1024 + 1
        # Rejected before anything was erased.
        assert 0x10 not in [f[0] for f in target.frames]

    def test_unsupported_flash_size(self, target):
        target.xdata[0x6276] = 0x60
        with Session(gpio=target, no_config=True) as session:
            with pytest.raises(exceptions.TargetSupportError):
                FileProgrammer(session).program(make_image(16))

    def test_config_retry(self, target):
        target.config_mismatches = 2
        with Session(gpio=target, no_config=True) as session:
            FileProgrammer(session).program(make_image(16))
        # One entry when opening, one for each failed configuration write.
        assert target.debug_entries == 3
        assert target.errors == []

    def test_config_mismatch(self, target):
        target.config_mismatches = 3
        with Session(gpio=target, no_config=True) as session:
            with pytest.raises(exceptions.ProtocolMismatch) as excinfo:
                FileProgrammer(session).program(make_image(16))
        assert excinfo.value.expected == 0x22
        assert excinfo.value.actual == 0x00
        assert 0x10 not in [f[0] for f in target.frames]

    def test_identify_retries(self, target):
        target.chip_id = 0xff
        with Session(gpio=target, no_config=True) as session:
            with pytest.raises(exceptions.UnrecognizedChip):
                FileProgrammer(session).program(make_image(16))
        assert [f[0] for f in target.frames].count(0x68) == 3

    def test_clock_switch_timeout(self, target):
        target.clock_switch = False
        with Session(gpio=target, no_config=True, timeout__retries=5) as session:
            with pytest.raises(exceptions.TimeoutError) as excinfo:
                FileProgrammer(session).program(make_image(16))
        assert excinfo.value.operation == "clock switch"

    def test_verify_failure(self, session, target, monkeypatch):
        real_write = SimulatedTarget._start_flash_write
        def corrupt(sim):
            real_write(sim)
            sim.flash[3] ^= 0xff
        monkeypatch.setattr(SimulatedTarget, "_start_flash_write", corrupt)
        with pytest.raises(exceptions.FlashProgramFailure) as excinfo:
            FileProgrammer(session, verify=True).program(make_image(16))
        assert excinfo.value.address == 3

    def test_session_left_debug_mode(self, target):
        with Session(gpio=target, no_config=True) as session:
            FileProgrammer(session).program(make_image(16))
            assert target.in_debug
        assert not target.in_debug
        assert target.resets == 1
