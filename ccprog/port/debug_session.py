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
from enum import Enum

from ..gpio.pins import (GpioPins, PinSet)

LOG = logging.getLogger(__name__)

class DebugSession(object):
    """! @brief Debug mode state machine for one target.

    Entering debug mode holds reset asserted while giving the clock two rising edges, then releases
    reset with the clock low. Leaving pulses reset. Neither sequence reads anything back from the
    target.

    enter() may be called again while active. That is the recovery action used when the target does
    not acknowledge a configuration write.
    """

    class Phase(Enum):
        DISCONNECTED = 0
        ENTERING = 1
        ACTIVE = 2
        LEAVING = 3

    def __init__(self, gpio: GpioPins, pins: PinSet, reset_active_high: bool = True) -> None:
        self._gpio = gpio
        self._pins = pins
        self._reset_active_high = reset_active_high
        self._phase = DebugSession.Phase.DISCONNECTED

    @property
    def phase(self) -> "DebugSession.Phase":
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._phase == DebugSession.Phase.ACTIVE

    def _assert_reset(self, asserted: bool) -> None:
        self._gpio.set_value(self._pins.reset, asserted == self._reset_active_high)

    def enter(self) -> None:
        LOG.debug("entering debug mode")
        self._phase = DebugSession.Phase.ENTERING
        try:
            self._assert_reset(True)
            for _ in range(2):
                self._gpio.set_value(self._pins.clock, False)
                self._gpio.set_value(self._pins.clock, True)
            self._gpio.set_value(self._pins.clock, False)
            self._assert_reset(False)
        except Exception:
            self._phase = DebugSession.Phase.DISCONNECTED
            raise
        self._phase = DebugSession.Phase.ACTIVE

    def leave(self) -> None:
        LOG.debug("leaving debug mode")
        self._phase = DebugSession.Phase.LEAVING
        try:
            self._assert_reset(True)
            self._assert_reset(False)
        finally:
            self._phase = DebugSession.Phase.DISCONNECTED
