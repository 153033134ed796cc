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
from unittest.mock import Mock

from ccprog.core import exceptions
from ccprog.flash.eraser import ChipEraser

@pytest.fixture(scope='function')
def mock_sleep(monkeypatch):
    msleep = Mock()
    monkeypatch.setattr('ccprog.utility.retry.sleep', msleep)
    return msleep

class TestChipEraser:
    def test_erase(self, protocol, active_target, mock_sleep):
        active_target.flash[:4] = b"\x00\x01\x02\x03"
        ChipEraser(protocol, 50, 0.001).erase()
        assert active_target.flash[:4] == b"\xff\xff\xff\xff"
        # ERASE, two busy status reads, one idle status read.
        assert [f[0] for f in active_target.frames] == [0x10, 0x30, 0x30, 0x30]
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(0.001)

    def test_erase_timeout(self, protocol, active_target, mock_sleep):
        active_target.erase_busy_polls = 100
        with pytest.raises(exceptions.TimeoutError) as excinfo:
            ChipEraser(protocol, 4, 0.001).erase()
        assert excinfo.value.operation == "erase"
        assert excinfo.value.retries == 4
        assert len(active_target.frames) == 1 + 4
