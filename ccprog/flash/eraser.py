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

from ..core import exceptions
from ..port import commands
from ..port.protocol import CommandProtocol
from ..utility.retry import RetryBudget

LOG = logging.getLogger(__name__)

## READ_STATUS bits.
STATUS_STACK_OVF = 0x01
STATUS_OSC_STABLE = 0x02
STATUS_DBG_LOCKED = 0x04
STATUS_HALT = 0x08
STATUS_PWR_MODE_0 = 0x10
STATUS_CPU_HALTED = 0x20
STATUS_PCON_IDLE = 0x40
STATUS_CHIP_ERASE_BSY = 0x80

class ChipEraser(object):
    """! @brief Erases all of the target's flash.

    The ERASE command starts the erase, then READ_STATUS is polled until the chip erase busy bit
    clears, sleeping briefly between polls.
    """

    def __init__(self, protocol: CommandProtocol, retries: int, poll_interval: float = 0.00001):
        """! @brief Constructor.

        @param self
        @param protocol Command protocol for the target.
        @param retries Iteration budget for the status poll.
        @param poll_interval Seconds to sleep between status polls.
        """
        self._protocol = protocol
        self._retries = retries
        self._poll_interval = poll_interval

    def erase(self):
        """! @brief Erase the chip and wait for completion.

        @exception TimeoutError The chip erase busy bit never cleared.
        """
        LOG.info("Erasing chip...")
        self._protocol.execute(commands.ERASE)

        with RetryBudget(self._retries, sleeptime=self._poll_interval) as budget:
            while budget.check():
                status = self._protocol.execute(commands.READ_STATUS)[0]
                if not (status & STATUS_CHIP_ERASE_BSY):
                    break
            else:
                raise exceptions.TimeoutError("timeout waiting for the chip to be erased",
                        operation="erase", retries=budget.retries)
        LOG.info("Done")
