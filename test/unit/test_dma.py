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

import struct

from ccprog.flash.dma import (
    ADDR_BUF0,
    ADDR_BUF1,
    DESCRIPTORS,
    DmaDescriptor,
    build_descriptor_table,
)

class TestDescriptorTable:
    def test_exact_bytes(self):
        assert build_descriptor_table() == bytes([
            0x62, 0x60, 0x00, 0x00, 0x04, 0x00, 31, 0x11,
            0x62, 0x60, 0x04, 0x00, 0x04, 0x00, 31, 0x11,
            0x00, 0x00, 0x62, 0x73, 0x04, 0x00, 18, 0x42,
            0x04, 0x00, 0x62, 0x73, 0x04, 0x00, 18, 0x42,
            ])

    def test_pack(self):
        desc = DmaDescriptor(0x1234, 0x5678, 0x9ab, 7, 0x42)
        assert desc.pack() == struct.pack(">HHHBB", 0x1234, 0x5678, 0x9ab, 7, 0x42)
        assert len(desc.pack()) == 8

    def test_channels(self):
        assert len(DESCRIPTORS) == 4
        assert DESCRIPTORS[0].dest == ADDR_BUF0
        assert DESCRIPTORS[1].dest == ADDR_BUF1
        assert DESCRIPTORS[2].src == ADDR_BUF0
        assert DESCRIPTORS[3].src == ADDR_BUF1
