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
from typing import (List, NamedTuple)

from .image import ImageCursor
from ..target.memory import XdataMemory
from ..target.registers import (XReg, XBANK_BASE, XBANK_COUNT, XBANK_SIZE)

LOG = logging.getLogger(__name__)

class Mismatch(NamedTuple):
    bank: int
    offset: int
    actual: int
    expected: int

    @property
    def address(self) -> int:
        return self.bank * XBANK_SIZE + self.offset

class VerifyResult(NamedTuple):
    ## Number of bytes read back and compared.
    compared: int
    mismatches: List[Mismatch]

    @property
    def ok(self) -> bool:
        return not self.mismatches

class FlashVerifier(object):
    """! @brief Reads flash back bank by bank and compares it with the image.

    Each 32 KiB bank is mapped into the XDATA window at 0x8000 with MEMCTR and read sequentially
    with MOVX A,@DPTR / INC DPTR pairs. Mismatches are logged and collected but do not stop the
    read back.
    """

    def __init__(self, memory: XdataMemory) -> None:
        self._memory = memory

    def verify(self, cursor: ImageCursor, total: int) -> VerifyResult:
        """! @brief Compare the first _total_ bytes of flash against the image.

        @return A VerifyResult. `compared` equals _total_ unless flash is smaller than _total_.
        """
        cursor.rewind()
        compared = 0
        mismatches: List[Mismatch] = []
        for bank in range(XBANK_COUNT):
            if compared == total:
                break
            LOG.debug("Reading bank: %d", bank)
            self._memory.write_byte(XReg.MEMCTR, bank)
            self._memory.set_pointer(XBANK_BASE)

            for offset in range(XBANK_SIZE):
                if compared == total:
                    break
                actual = self._memory.read_next()
                expected = cursor.next_byte()
                if actual != expected:
                    LOG.error("[bank%d][%d], result: %02x, expected: %02x", bank, offset, actual, expected)
                    mismatches.append(Mismatch(bank, offset, actual, expected))
                compared += 1

        return VerifyResult(compared, mismatches)
