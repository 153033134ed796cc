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

from .bit_transport import BitTransport
from .commands import (CommandSpec, CMD_BURST_WR)
from ..core import exceptions
from ..utility.retry import RetryBudget

LOG = logging.getLogger(__name__)

## Number of clock pulses given to the target per readiness poll.
READY_POLL_CLOCKS = 8

## Largest length a burst write header can carry.
MAX_BURST_LENGTH = 0x7ff

DEFAULT_RETRIES = 1000

class CommandProtocol(object):
    """! @brief Executes debug port commands.

    A command is the opcode byte followed by its parameter bytes, clocked out while the host drives
    the data line. The host then releases the data line and waits for the target to pull it low,
    giving it 8 clocks per poll while it is still high. Finally the response bytes are clocked in.

    For variable length commands the parameter count is packed into the low bits of the opcode.
    """

    def __init__(self, transport: BitTransport, retries: int = DEFAULT_RETRIES) -> None:
        self._transport = transport
        self._retries = retries

    @property
    def transport(self) -> BitTransport:
        return self._transport

    @property
    def retries(self) -> int:
        return self._retries

    @staticmethod
    def encode(spec: CommandSpec, params: Sequence[int] = b"") -> bytes:
        """! @brief Build the bytes sent on the wire for a command.

        @exception CommandError The parameter count does not fit the command.
        """
        count = len(params)
        if spec.is_variable:
            if spec.opcode == CMD_BURST_WR:
                raise exceptions.CommandError("burst_write must be sent with burst_write()")
            if count > 0x0f:
                raise exceptions.CommandError("%s: too many parameter bytes (%d)" % (spec.name, count))
            opcode = spec.opcode | count
        else:
            if count != spec.in_bytes:
                raise exceptions.CommandError("%s takes %d parameter bytes, %d given"
                        % (spec.name, spec.in_bytes, count))
            opcode = spec.opcode
        return bytes([opcode]) + bytes(params)

    def execute(self, spec: CommandSpec, params: Sequence[int] = b"") -> bytes:
        """! @brief Send a command and return its response.

        @return Exactly `spec.out_bytes` response bytes.
        @exception CommandError Bad parameter count.
        @exception TimeoutError The target never became ready.
        @exception GpioError A GPIO operation failed.
        """
        frame = self.encode(spec, params)
        LOG.debug("cmd %s: %s", spec.name, frame.hex())

        self._transport.drive_data()
        self._transport.send_bytes(frame)
        self._transport.release_data()

        self._wait_ready(spec.name)
        response = bytes(self._transport.read_byte() for _ in range(spec.out_bytes))
        LOG.debug("cmd %s response: %s", spec.name, response.hex())
        return response

    def burst_write(self, data: Sequence[int]) -> int:
        """! @brief Stream a block of data to the debug interface's DMA trigger.

        The opcode carries bits 10:8 of the length and the following byte bits 7:0, then the data
        bytes follow directly.

        @return The status byte returned by the target.
        """
        length = len(data)
        if not (0 < length <= MAX_BURST_LENGTH):
            raise exceptions.CommandError("burst write length %d out of range" % length)
        LOG.debug("burst write of %d bytes", length)

        self._transport.drive_data()
        self._transport.send_byte(CMD_BURST_WR | ((length >> 8) & 0xff))
        self._transport.send_byte(length & 0xff)
        self._transport.send_bytes(data)
        self._transport.release_data()

        self._wait_ready("burst_write")
        return self._transport.read_byte()

    def _wait_ready(self, operation: str) -> None:
        """! @brief Wait for the target to pull the data line low.

        @exception TimeoutError The line stayed high for the whole retry budget. Nothing is read from
            the target in that case.
        """
        with RetryBudget(self._retries) as budget:
            while budget.check():
                if not self._transport.data_is_high():
                    break
                self._transport.pulse_clock(READY_POLL_CLOCKS)
            else:
                # Sample once more after the last round of clocks.
                if self._transport.data_is_high():
                    raise exceptions.TimeoutError("timed out waiting for chip to be ready",
                            operation=operation, retries=budget.retries)
