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
from typing import (Callable, NamedTuple, Optional)

from .dma import (
    ADDR_DMA_DESC,
    CH_BUF0_TO_FLASH,
    CH_BUF1_TO_FLASH,
    CH_DBG_TO_BUF0,
    CH_DBG_TO_BUF1,
    PROG_BLOCK_SIZE,
    build_descriptor_table,
)
from .image import ImageCursor
from ..core import exceptions
from ..target.memory import XdataMemory
from ..target.registers import (XReg, FCTL_BUSY, FCTL_WRITE)
from ..utility.retry import RetryBudget

LOG = logging.getLogger(__name__)

class BufferPair(NamedTuple):
    """@brief DMAARM bits for one ping-pong buffer."""
    index: int
    dbg_arm: int
    flash_arm: int

BUFFER_PAIRS = (
    BufferPair(0, CH_DBG_TO_BUF0, CH_BUF0_TO_FLASH),
    BufferPair(1, CH_DBG_TO_BUF1, CH_BUF1_TO_FLASH),
    )

class ProgrammingPlan(NamedTuple):
    """@brief Block layout of one programming run."""
    length: int
    block_size: int = PROG_BLOCK_SIZE

    @property
    def block_count(self) -> int:
        return (self.length + self.block_size - 1) // self.block_size

    @property
    def total_bytes(self) -> int:
        """@brief Bytes actually written, including the padding of the last block."""
        return self.block_count * self.block_size

    @staticmethod
    def buffer_for(index: int) -> BufferPair:
        """@brief Even blocks go through buffer 0, odd blocks through buffer 1."""
        return BUFFER_PAIRS[index & 1]

class FlashProgrammer(object):
    """! @brief Programs flash with DMA assisted, double buffered burst writes.

    The target must be in debug mode with flash erased. Each block is streamed into one of two XDATA
    buffers by the debug interface DMA channel while the flash controller may still be writing the
    previous block from the other buffer. Once the controller is idle, the buffer's flash DMA channel
    is armed and a write is started.
    """

    def __init__(self, memory: XdataMemory, retries: int,
            progress: Optional[Callable[[int, int], None]] = None) -> None:
        """! @brief Constructor.

        @param self
        @param memory XDATA access for the target.
        @param retries Iteration budget for each flash busy wait.
        @param progress Optional callable invoked with the number of blocks done and the block count.
        """
        self._memory = memory
        self._retries = retries
        self._progress = progress

    def program(self, cursor: ImageCursor, plan: ProgrammingPlan) -> bool:
        """! @brief Program _plan.block_count_ blocks from the cursor, starting at flash address 0.

        @return Whether programming ran at full speed. Always True once every block has been written.
        @exception TimeoutError The flash controller stayed busy.
        """
        memory = self._memory
        memory.write_block(ADDR_DMA_DESC, build_descriptor_table())

        memory.write_byte(XReg.DMA1CFGH, (ADDR_DMA_DESC >> 8) & 0xff)
        memory.write_byte(XReg.DMA1CFGL, ADDR_DMA_DESC & 0xff)

        memory.write_byte(XReg.FADDRH, 0)
        memory.write_byte(XReg.FADDRL, 0)

        blocks = plan.block_count
        self._report(0, blocks)
        for i in range(blocks):
            pair = plan.buffer_for(i)

            # Stream the next block into the buffer.
            memory.write_byte(XReg.DMAARM, pair.dbg_arm)
            memory.protocol.burst_write(cursor.take(plan.block_size))

            # Wait for the previous block to finish.
            if self._wait_flash_idle(i) == 0 and i > 0:
                LOG.debug("block %d: flash controller already idle after burst", i)

            # Start programming this block.
            memory.write_byte(XReg.DMAARM, pair.flash_arm)
            memory.write_byte(XReg.FCTL, FCTL_WRITE)
            self._report(i + 1, blocks)

        self._wait_flash_idle(None)
        return True

    def _wait_flash_idle(self, index: Optional[int]):
        """! @brief Poll FCTL until the busy flag clears.

        @return The number of polls that saw busy.
        """
        busy_polls = 0
        with RetryBudget(self._retries) as budget:
            while budget.check():
                fctl = self._memory.read_byte(XReg.FCTL)
                if not (fctl & FCTL_BUSY):
                    break
                busy_polls += 1
            else:
                raise exceptions.TimeoutError("timed out waiting for flash controller",
                        operation="program", address=XReg.FCTL, index=index, retries=budget.retries)
        return busy_polls

    def _report(self, done: int, total: int) -> None:
        if self._progress is not None:
            self._progress(done, total)
