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
from typing import (NamedTuple, Tuple)

from ..target.registers import XReg

## Programming block size in bytes, and DMA transfer length.
PROG_BLOCK_SIZE = 1024

## XDATA scratch addresses used while programming.
ADDR_BUF0 = 0x0000
ADDR_BUF1 = 0x0400
ADDR_DMA_DESC = 0x0800

## DMAARM bits of the four channels described by the table.
CH_DBG_TO_BUF0 = 0x02
CH_DBG_TO_BUF1 = 0x04
CH_BUF0_TO_FLASH = 0x08
CH_BUF1_TO_FLASH = 0x10

## DMA trigger sources.
TRIGGER_DBG_BW = 31
TRIGGER_FLASH = 18

## Mode bytes: increment destination, or increment source.
MODE_INC_DEST = 0x11
MODE_INC_SRC = 0x42

class DmaDescriptor(NamedTuple):
    """@brief One 8-byte DMA channel configuration."""
    src: int
    dest: int
    length: int
    trigger: int
    mode: int

    ## Big endian source, destination and length, then trigger and mode bytes.
    FORMAT = ">HHHBB"

    def pack(self) -> bytes:
        return struct.pack(self.FORMAT, self.src, self.dest, self.length, self.trigger, self.mode)

## Channels 1 to 4, in table order.
DESCRIPTORS: Tuple[DmaDescriptor, ...] = (
    # Debug interface -> buffer 0
    DmaDescriptor(XReg.DBGDATA, ADDR_BUF0, PROG_BLOCK_SIZE, TRIGGER_DBG_BW, MODE_INC_DEST),
    # Debug interface -> buffer 1
    DmaDescriptor(XReg.DBGDATA, ADDR_BUF1, PROG_BLOCK_SIZE, TRIGGER_DBG_BW, MODE_INC_DEST),
    # Buffer 0 -> flash controller
    DmaDescriptor(ADDR_BUF0, XReg.FWDATA, PROG_BLOCK_SIZE, TRIGGER_FLASH, MODE_INC_SRC),
    # Buffer 1 -> flash controller
    DmaDescriptor(ADDR_BUF1, XReg.FWDATA, PROG_BLOCK_SIZE, TRIGGER_FLASH, MODE_INC_SRC),
    )

def build_descriptor_table() -> bytes:
    """@brief Return the 32-byte descriptor table written to ADDR_DMA_DESC."""
    table = b"".join(desc.pack() for desc in DESCRIPTORS)
    assert len(table) == 32
    return table
