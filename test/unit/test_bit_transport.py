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

from ccprog.gpio.pins import Direction
from ccprog.port.bit_transport import BitTransport

from .mocktarget import (DEFAULT_PINS, LoopbackGpio)

@pytest.fixture(scope='function')
def gpio():
    return LoopbackGpio()

@pytest.fixture(scope='function')
def transport(gpio):
    return BitTransport(gpio, DEFAULT_PINS)

class TestBitTransport:
    def test_send_msb_first(self, gpio, transport):
        transport.drive_data()
        transport.send_byte(0x81)
        assert gpio.sent_bits == [1, 0, 0, 0, 0, 0, 0, 1]

    def test_send_bytes(self, gpio, transport):
        transport.drive_data()
        transport.send_bytes(b"\x50\xa5")
        assert gpio.sent_bytes() == b"\x50\xa5"
        assert gpio.rising_edges == 16

    def test_read_msb_first(self, gpio, transport):
        transport.release_data()
        gpio.queue_byte(0x01)
        assert transport.read_byte() == 0x01

    def test_loopback_all_values(self, gpio, transport):
        transport.drive_data()
        transport.send_bytes(range(256))
        sent = gpio.sent_bytes()
        assert sent == bytes(range(256))

        transport.release_data()
        for value in sent:
            gpio.queue_byte(value)
        assert bytes(transport.read_byte() for _ in range(256)) == bytes(range(256))

    def test_clock_ends_low(self, gpio, transport):
        transport.drive_data()
        transport.send_byte(0xff)
        assert gpio.levels[DEFAULT_PINS.clock] is False
        transport.pulse_clock(8)
        assert gpio.levels[DEFAULT_PINS.clock] is False
        assert gpio.rising_edges == 16

    def test_pulse_clock_sends_nothing(self, gpio, transport):
        transport.release_data()
        transport.pulse_clock(3)
        assert gpio.rising_edges == 3
        assert gpio.sent_bits == []

    def test_data_direction(self, gpio, transport):
        transport.drive_data()
        assert gpio.directions[DEFAULT_PINS.data] is Direction.OUT
        transport.release_data()
        assert gpio.directions[DEFAULT_PINS.data] is Direction.IN

    def test_data_is_high(self, gpio, transport):
        transport.release_data()
        gpio.data_out = True
        assert transport.data_is_high()
        gpio.data_out = False
        assert not transport.data_is_high()
