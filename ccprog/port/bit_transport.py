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

from ..gpio.pins import (Direction, GpioPins, PinSet)

LOG = logging.getLogger(__name__)

class BitTransport(object):
    """! @brief Bit-banged byte transfer over the debug clock and data lines.

    Bytes travel most significant bit first. When sending, the data line is set up before the
    rising clock edge, on which the target samples it. When receiving, the target's bit is sampled
    while the clock is high and the clock is dropped afterwards. Any other ordering fails on real
    hardware.
    """

    def __init__(self, gpio: GpioPins, pins: PinSet) -> None:
        self._gpio = gpio
        self._clock = pins.clock
        self._data = pins.data

    @property
    def gpio(self) -> GpioPins:
        return self._gpio

    def send_byte(self, value: int) -> None:
        """! @brief Clock out one byte, MSB first."""
        for shift in range(7, -1, -1):
            self._gpio.set_value(self._data, bool((value >> shift) & 1))
            self._gpio.set_value(self._clock, True)
            self._gpio.set_value(self._clock, False)

    def send_bytes(self, data) -> None:
        for value in data:
            self.send_byte(value)

    def read_byte(self) -> int:
        """! @brief Clock in one byte, MSB first."""
        value = 0
        for shift in range(7, -1, -1):
            self._gpio.set_value(self._clock, True)
            if self._gpio.get_value(self._data):
                value |= (1 << shift)
            self._gpio.set_value(self._clock, False)
        return value

    def pulse_clock(self, count: int = 1) -> None:
        for _ in range(count):
            self._gpio.set_value(self._clock, True)
            self._gpio.set_value(self._clock, False)

    def data_is_high(self) -> bool:
        return self._gpio.get_value(self._data)

    def drive_data(self) -> None:
        """! @brief Take ownership of the data line."""
        self._gpio.set_direction(self._data, Direction.OUT)

    def release_data(self) -> None:
        """! @brief Hand the data line over to the target."""
        self._gpio.set_direction(self._data, Direction.IN)
