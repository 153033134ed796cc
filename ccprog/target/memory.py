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
from typing import Sequence

from .registers import describe_address
from ..core import exceptions
from ..port import commands
from ..port.protocol import CommandProtocol

LOG = logging.getLogger(__name__)

## 8051 instructions injected through DEBUG_INST.
MOV_DPTR_IMM = 0x90     # MOV DPTR, #data16
MOV_A_IMM = 0x74        # MOV A, #data
MOVX_DPTR_A = 0xF0      # MOVX @DPTR, A
MOVX_A_DPTR = 0xE0      # MOVX A, @DPTR
INC_DPTR = 0xA3         # INC DPTR

class XdataMemory(object):
    """! @brief Access to the target's XDATA space through injected instructions.

    Every access runs one or more single instructions on the halted CPU with the DEBUG_INST command,
    which returns the accumulator after the instruction. Timeouts raised below this layer get the
    XDATA address filled in before they propagate.
    """

    def __init__(self, protocol: CommandProtocol) -> None:
        self._protocol = protocol

    @property
    def protocol(self) -> CommandProtocol:
        return self._protocol

    def inject(self, *instruction: int) -> int:
        """! @brief Execute one instruction and return the accumulator."""
        return self._protocol.execute(commands.DEBUG_INST, instruction)[0]

    def set_pointer(self, addr: int) -> None:
        """! @brief Load DPTR."""
        self.inject(MOV_DPTR_IMM, (addr >> 8) & 0xff, addr & 0xff)

    def read_next(self) -> int:
        """! @brief Read the byte at DPTR, then increment DPTR."""
        value = self.inject(MOVX_A_DPTR)
        self.inject(INC_DPTR)
        return value

    def write_byte(self, addr: int, value: int) -> None:
        try:
            self.set_pointer(addr)
            self.inject(MOV_A_IMM, value & 0xff)
            self.inject(MOVX_DPTR_A)
        except exceptions.Error as err:
            self._annotate(err, "write", addr)
            raise

    def read_byte(self, addr: int) -> int:
        try:
            self.set_pointer(addr)
            return self.inject(MOVX_A_DPTR)
        except exceptions.Error as err:
            self._annotate(err, "read", addr)
            raise

    def write_block(self, addr: int, data: Sequence[int]) -> None:
        """! @brief Write consecutive bytes starting at _addr_."""
        offset = 0
        try:
            self.set_pointer(addr)
            for offset, value in enumerate(data):
                self.inject(MOV_A_IMM, value & 0xff)
                self.inject(MOVX_DPTR_A)
                self.inject(INC_DPTR)
        except exceptions.Error as err:
            self._annotate(err, "block write", addr + offset)
            raise

    @staticmethod
    def _annotate(err: exceptions.Error, what: str, addr: int) -> None:
        if isinstance(err, (exceptions.TimeoutError, exceptions.GpioError)) and err.address is None:
            err.address = addr
        LOG.debug("XDATA %s failed at %s: %s", what, describe_address(addr), err)
