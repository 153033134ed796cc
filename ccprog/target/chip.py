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

import logging
from dataclasses import dataclass
from typing import Optional

from .memory import XdataMemory
from .registers import (
    XReg,
    CHIPINFO0_USB,
    CHIPINFO0_FLASHSIZE_MASK,
    CHIPINFO0_FLASHSIZE_SHIFT,
)
from ..core import exceptions
from ..port import commands

LOG = logging.getLogger(__name__)

## Chip ID reported by GET_CHIP_ID for the CC2530.
CC2530_ID = 0xA5

## Number of extended address bytes read from the information page.
EXT_ADDR_READ_COUNT = 7

## Map of CHIPINFO0 flash size codes to sizes in KiB.
FLASH_SIZE_KB = {
    1: 32,
    2: 64,
    3: 128,
    4: 256,
}

def decode_flash_size(chipinfo0: int) -> Optional[int]:
    """@brief Decode the flash size in bytes from CHIPINFO0.

    @return Flash size in bytes, or None if the size code is not a known value.
    """
    code = (chipinfo0 & CHIPINFO0_FLASHSIZE_MASK) >> CHIPINFO0_FLASHSIZE_SHIFT
    kb = FLASH_SIZE_KB.get(code)
    return kb * 1024 if kb is not None else None

@dataclass(frozen=True)
class ChipInfo:
    """@brief What identification learned about the target."""
    chip_id: int
    revision: int
    ## IEEE extended address, least significant byte first.
    ext_address: bytes
    chipinfo0: int
    chipinfo1: int

    @property
    def has_usb(self) -> bool:
        return bool(self.chipinfo0 & CHIPINFO0_USB)

    @property
    def flash_size_code(self) -> int:
        return (self.chipinfo0 & CHIPINFO0_FLASHSIZE_MASK) >> CHIPINFO0_FLASHSIZE_SHIFT

    @property
    def flash_size(self) -> Optional[int]:
        return decode_flash_size(self.chipinfo0)

    @property
    def ext_address_str(self) -> str:
        return ":".join("%02x" % b for b in reversed(self.ext_address))

    @property
    def name(self) -> str:
        return "Texas Instruments CC2530" if self.chip_id == CC2530_ID else "unknown"

def identify(memory: XdataMemory) -> ChipInfo:
    """@brief Identify the target and read its chip information registers.

    @exception UnrecognizedChip The chip ID is not the CC2530's.
    """
    chip_id, revision = memory.protocol.execute(commands.GET_CHIP_ID)
    if chip_id != CC2530_ID:
        raise exceptions.UnrecognizedChip("unknown chip", chip_id=chip_id)
    LOG.info("Texas Instruments CC2530 (ID: 0x%02x, rev 0x%02x)", chip_id, revision)

    ext_address = bytes(memory.read_byte(XReg.EXT_ADDR_BASE + i) for i in range(EXT_ADDR_READ_COUNT))
    chipinfo0 = memory.read_byte(XReg.CHIPINFO0)
    chipinfo1 = memory.read_byte(XReg.CHIPINFO1)

    info = ChipInfo(chip_id, revision, ext_address + b"\x00", chipinfo0, chipinfo1)
    LOG.info("Extended addr: %s", info.ext_address_str)
    LOG.info("USB %s", "available" if info.has_usb else "not available")
    if info.flash_size is None:
        LOG.warning("Unsupported flash size code %d", info.flash_size_code)
    else:
        LOG.info("Flash size: %d KB", info.flash_size // 1024)
    return info
